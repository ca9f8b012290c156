"""
  Tack Reader, Lexer and Parser

- Streaming, lazy parsing: one top-level form per call
- Nesting is tracked on an explicit stack, so depth is unbounded
- `;` separates statements like whitespace; `=` breaks a word where it
  touches a letter or digit, so `k= 1` and `k=1` read as `k = 1`
- Emits Python primitives plus Word/Quotation/Definition:

    - integers, decimals, #hex -> int/float
    - true / false -> bool
    - "strings" -> str
    - { ... } -> Quotation
    - name = form (top level only) -> Definition
    - anything else -> Word
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional, Iterable

from tack import Element
from tack.errors import TackSyntaxError
from tack.types.quotation import Definition, Quotation
from tack.types.word import Word


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>#(?=\s|$)[^\n]*|#![^\n]*)"  # '# ...' and '#!...' to end of line
    r"|(?P<sep>;)"  # statement separator
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>")'  # opening quote; the body is scanned by hand
    r'|(?P<word>[^\s{}";]+)'  # fallback: words and numbers
    r")",
)

# `=` runs that touch a letter or digit split off as their own word
ASSIGN_BREAK_RE = re.compile(r"(?<=\w)=+|=+(?=\w)")

INT_RE = re.compile(r"[+-]?[0-9]+\Z")
DECIMAL_RE = re.compile(r"[+-]?[0-9]+\.[0-9]+(?:[eE][+-]?[0-9]+)?\Z")
HEX_RE = re.compile(r"#[0-9a-fA-F]+\Z")

# Digits converted at a time for integer literals past the str() limit
_INT_CHUNK = 4000

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
}

BOOLEANS: dict[str, bool] = {"true": True, "false": False}

ASSIGN = "="


class Token(NamedTuple):
    kind: str
    text: str
    offset: int
    end: int


def _scan_string(source: str, start: int) -> int:
    """Return the offset just past the closing quote of the string at `start`."""
    pos = start + 1
    n = len(source)
    while pos < n:
        ch = source[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == '"':
            return pos + 1
        pos += 1
    raise TackSyntaxError('missing "', source, start)


def _split_word(text: str, offset: int) -> Iterator[Token]:
    pos = 0
    for m in ASSIGN_BREAK_RE.finditer(text):
        if m.start() > pos:
            yield Token("word", text[pos:m.start()], offset + pos, offset + m.start())
        yield Token("word", m.group(), offset + m.start(), offset + m.end())
        pos = m.end()
    if pos < len(text):
        yield Token("word", text[pos:], offset + pos, offset + len(text))


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, text, offset, end)."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m or m.lastgroup is None:
            # Only trailing whitespace is left
            break
        kind = m.lastgroup
        start = m.start(kind)
        if kind in ("comment", "sep"):
            pos = m.end()
            continue
        if kind == "string":
            end = _scan_string(source, start)
            yield Token("string", source[start:end], start, end)
            pos = end
            continue
        if kind == "word":
            yield from _split_word(m.group(kind), start)
        else:
            yield Token(kind, m.group(kind), start, m.end())
        pos = m.end()


def unescape(raw: str, source: str = "", offset: int = 0) -> str:
    """Decode the body of a quoted string token (quotes included in `raw`)."""
    out = []
    body = raw[1:-1]
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            esc = body[i + 1] if i + 1 < len(body) else ""
            if esc not in ESCAPES:
                raise TackSyntaxError(f"bad escape \\{esc}", source, offset + 1 + i)
            out.append(ESCAPES[esc])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def parse_int(text: str) -> int:
    """Base-10 integer literal of any length."""
    try:
        return int(text)
    except ValueError:
        if not INT_RE.match(text):
            raise
    digits = text.lstrip("+-")
    value = 0
    for start in range(0, len(digits), _INT_CHUNK):
        chunk = digits[start:start + _INT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return -value if text.startswith("-") else value


def atom(text: str, source: str = "", offset: int = 0) -> Element:
    """Classify a bare token as a number, boolean or Word."""
    if INT_RE.match(text):
        return parse_int(text)
    if DECIMAL_RE.match(text):
        return float(text)
    if text in BOOLEANS:
        return BOOLEANS[text]
    if text.startswith("#"):
        if HEX_RE.match(text):
            return int(text[1:], 16)
        raise TackSyntaxError(f"invalid hex literal {text}", source, offset)
    return Word(text)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token], source: str = ""):
        self.tokens = iter(token_iter)
        self.source = source
        self.buffer: list[Token] = []
        # End offset of the last consumed token
        self.offset = 0

    def peek(self, ahead: int = 0) -> Optional[Token]:
        while len(self.buffer) <= ahead:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[ahead]

    def advance(self) -> Optional[Token]:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is not None:
            self.offset = tok.end
        return tok

    def _error(self, message: str, offset: int) -> TackSyntaxError:
        return TackSyntaxError(message, self.source, offset)

    def parse_form(self, top_level: bool = True) -> Optional[Element]:
        """Parse exactly one form, or return None at end of input.

        At the top level a word immediately followed by `=` starts a
        Definition whose body is the next form.
        """
        tok = self.peek()
        if tok is None:
            return None
        if top_level and tok.kind == "word" and tok.text != ASSIGN:
            nxt = self.peek(1)
            if nxt is not None and nxt.kind == "word" and nxt.text == ASSIGN:
                name = atom(tok.text, self.source, tok.offset)
                if isinstance(name, Word):
                    self.advance()
                    self.advance()
                    body = self._parse_element()
                    if body is None:
                        raise self._error(f"missing definition body for {tok.text}", nxt.offset)
                    return Definition(name, body)
        return self._parse_element()

    def _parse_element(self) -> Optional[Element]:
        # Each entry is (opening brace, items so far) for one unclosed quotation
        open_blocks: list[tuple[Token, list[Element]]] = []
        while True:
            tok = self.advance()
            if tok is None:
                if open_blocks:
                    raise self._error("missing }", open_blocks[-1][0].offset)
                return None
            if tok.kind == "lbrace":
                open_blocks.append((tok, []))
                continue
            if tok.kind == "rbrace":
                if not open_blocks:
                    raise self._error("missing {", tok.offset)
                _, items = open_blocks.pop()
                value: Element = Quotation(items)
            elif tok.kind == "string":
                value = unescape(tok.text, self.source, tok.offset)
            else:
                value = atom(tok.text, self.source, tok.offset)
            if not open_blocks:
                return value
            open_blocks[-1][1].append(value)

    def parse_all(self) -> Iterator[Element]:
        while True:
            form = self.parse_form()
            if form is None:
                break
            yield form


class Reader:
    """Incremental reader: hands out one top-level form per call.

    `offset` is how much of the source has been consumed, so a caller can keep
    the rest of the text for later.
    """

    def __init__(self, source: str):
        self.source = source
        self.stream = TokenStream(lex(source), source)

    def read_form(self) -> Optional[Element]:
        return self.stream.parse_form()

    @property
    def offset(self) -> int:
        return self.stream.offset

    @property
    def remaining(self) -> str:
        return self.source[self.offset:]

    def __iter__(self) -> Iterator[Element]:
        return self.stream.parse_all()


def parse(source: str) -> Quotation:
    """Parse a whole source text into one top-level Quotation."""
    return Quotation(TokenStream(lex(source), source).parse_all())
