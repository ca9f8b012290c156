from __future__ import annotations

"""
A minimal pygls-based Language Server for Tack.

Features:
- Text synchronization and document store
- Diagnostics: syntax errors from the real reader, unbalanced braces
- Hover: stack effects of primitives and core words, and of local definitions
- Completion: local definitions, then the standard dictionary
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    TextDocumentSyncKind,
)

from tack import __version__
from tack_lsp.indexer import build_index, builtin_signatures, DocumentIndex

SOURCE = "tack-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class TackLanguageServer(LanguageServer):
    CMD_NAME = "tack-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = TackLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update(uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Full-text sync: the last change carries the whole buffer
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents[uri].text if uri in ls.documents else ""
    _update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, diagnostics_for(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = [
        Diagnostic(
            range=_mk_range(err.line, err.col),
            message=err.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        )
        for err in idx.errors
    ]
    if idx.brace_balance != 0 and not idx.errors:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unbalanced braces detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    return diags


# --- Hover ---
def hover_text(state: DocumentState, word: str) -> Optional[str]:
    sdef = state.index.symbols.get(word)
    if sdef is not None:
        detail = sdef.signature or word
        return f"{detail}\n(defined at {sdef.line + 1}:{sdef.col + 1})"
    return builtin_signatures().get(word)


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    word = word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None
    contents = hover_text(state, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION)
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    if state:
        for name, sdef in state.index.symbols.items():
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable, detail=sdef.signature))
    for name, sig in builtin_signatures().items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.signature,
                kind=SymbolKind.Function if sdef.kind == 'word' else SymbolKind.Constant,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---

def word_at(text: str, line: int, character: int) -> Optional[str]:
    """Whitespace/brace-delimited word under the cursor."""
    lines = text.splitlines(True)
    if line >= len(lines):
        return None
    line_text = lines[line]
    start = min(character, len(line_text))
    while start > 0 and line_text[start - 1] not in " \t{}\n\r\"":
        start -= 1
    end = min(character, len(line_text))
    while end < len(line_text) and line_text[end] not in " \t{}\n\r\"":
        end += 1
    word = line_text[start:end]
    return word or None


def main():
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
