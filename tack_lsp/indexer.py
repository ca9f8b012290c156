from __future__ import annotations

"""
Lightweight indexer for Tack source files without evaluating code.

We reuse the real lexer and parser, so what the editor reports is exactly
what the interpreter would say:
- definitions: top-level `name = form`, with the stack effect inferred
  against the standard dictionary
- syntax errors (unbalanced braces, unterminated strings, bad literals)
  with their positions
- brace balance, for a cheap warning while typing

Nothing is executed: inference only looks at the words, it never runs them.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from tack.errors import TackSyntaxError
from tack.interpreter import Interpreter
from tack.reader.parser import ASSIGN, atom, lex, parse
from tack.types.dictionary import Dictionary, Primitive
from tack.types.quotation import Definition, Quotation
from tack.types.values import source_form
from tack.types.word import Word


@dataclass
class SymbolDef:
    name: str
    kind: str  # "word" | "value"
    line: int
    col: int
    signature: str = ""


@dataclass
class SyntaxProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    errors: List[SyntaxProblem] = field(default_factory=list)
    brace_balance: int = 0


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


@lru_cache(maxsize=1)
def standard_dictionary() -> Dictionary:
    """Primitives plus the core prelude, loaded once per process."""
    return Interpreter(prelude='auto').dictionary


def signature_of(name: str, dictionary: Optional[Dictionary] = None) -> Optional[str]:
    dictionary = dictionary if dictionary is not None else standard_dictionary()
    if name not in dictionary:
        return None
    entry = dictionary.lookup(name)
    if isinstance(entry, Primitive):
        return f"{name} {entry.doc or entry.effect}"
    return f"{name} {entry.effect} = {source_form(entry.body)}"


def builtin_signatures() -> Dict[str, str]:
    dictionary = standard_dictionary()
    return {name: signature_of(name, dictionary) for name in dictionary}


def _scan_definitions(text: str, idx: DocumentIndex) -> None:
    """Token-level pass: definition positions and brace balance.

    Stops quietly at the first lexing error; the parse pass reports it.
    """
    depth = 0
    previous = None
    try:
        for tok in lex(text):
            if tok.kind == "lbrace":
                depth += 1
            elif tok.kind == "rbrace":
                depth -= 1
            elif (
                tok.kind == "word"
                and tok.text == ASSIGN
                and depth == 0
                and previous is not None
                and previous.kind == "word"
                and previous.text != ASSIGN
                and isinstance(atom(previous.text), Word)
            ):
                line, col = _position_from_offset(text, previous.offset)
                idx.symbols[previous.text] = SymbolDef(previous.text, "word", line, col)
            previous = tok
    except TackSyntaxError:
        pass
    idx.brace_balance = depth


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    _scan_definitions(text, idx)
    try:
        program = parse(text)
    except TackSyntaxError as err:
        idx.errors.append(SyntaxProblem(err.message, err.line - 1, err.column - 1))
        return idx

    # Infer effects in a scratch dictionary layered over the standard words
    scratch = Dictionary()
    scratch.entries.update(standard_dictionary().entries)
    for form in program:
        if isinstance(form, Definition) and form.name.id in idx.symbols:
            entry = scratch.define(form.name.id, form.body)
            sdef = idx.symbols[form.name.id]
            sdef.signature = f"{form.name.id} {entry.effect} = {source_form(form.body)}"
            if not isinstance(form.body, Quotation):
                sdef.kind = "value"
    return idx
