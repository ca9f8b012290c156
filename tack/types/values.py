"""Helpers over the closed value set: equality, type names and rendering.

Two renderings exist:
- display form: what `echo`, `str` and `flatten` produce. Strings are raw.
- source form: text that reads back as the same value. Strings are quoted
  and escaped. Elements nested inside quotations and sequences always use
  source form.

Values nest without limit (a program can build a quotation a million levels
deep), so equality and rendering walk an explicit work-list instead of
recursing. Integers are arbitrary precision and render in full.
"""

from __future__ import annotations

from tack import Value
from tack.types.quotation import Definition, Quotation
from tack.types.word import Word

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\0": "\\0",
}

# Digits per chunk when rendering integers past the interpreter's str() limit
_CHUNK_DIGITS = 4000
_CHUNK = 10 ** _CHUNK_DIGITS


class _Text(str):
    """Literal output queued on the rendering work-list."""


def is_equal(a: Value, b: Value) -> bool:
    """Deep equality; unlike Python, true is not 1 and a list is not a quotation."""
    pending = [(a, b)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if isinstance(a, Quotation) and isinstance(b, Quotation):
            a, b = a.items, b.items
        elif isinstance(a, Definition) and isinstance(b, Definition):
            if a.name != b.name:
                return False
            pending.append((a.body, b.body))
            continue
        if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
            if type(a) != type(b) or len(a) != len(b):
                return False
            pending.extend(zip(a, b))
            continue
        if isinstance(a, bool) or isinstance(b, bool):
            if type(a) != type(b) or a != b:
                return False
            continue
        if isinstance(a, (int, float)) and isinstance(b, (int, float)):
            if a != b:
                return False
            continue
        if type(a) != type(b) or a != b:
            return False
    return True


def type_name(value: Value) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Quotation):
        return "quotation"
    if isinstance(value, list):
        return "sequence"
    if isinstance(value, Word):
        return "word"
    return type(value).__name__


def quote_string(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def int_digits(n: int) -> str:
    """Decimal digits of `n`, however many there are."""
    try:
        return str(n)
    except ValueError:
        pass
    sign = "-" if n < 0 else ""
    n = abs(n)
    chunks = []
    while n:
        n, low = divmod(n, _CHUNK)
        chunks.append(low)
    head = str(chunks.pop())
    return sign + head + "".join(f"{chunk:0{_CHUNK_DIGITS}d}" for chunk in reversed(chunks))


def _queue_items(work: list, items, opening: str, closing: str, empty: str) -> None:
    # Pushed in reverse: the work-list pops from the end
    if not items:
        work.append(_Text(empty))
        return
    work.append(_Text(closing))
    for index in range(len(items) - 1, -1, -1):
        work.append(items[index])
        work.append(_Text(" " if index else opening))


def source_form(value: Value) -> str:
    parts: list[str] = []
    work: list = [value]
    while work:
        item = work.pop()
        if isinstance(item, _Text):
            parts.append(item)
        elif isinstance(item, bool):
            parts.append("true" if item else "false")
        elif isinstance(item, str):
            parts.append(quote_string(item))
        elif isinstance(item, int):
            parts.append(int_digits(item))
        elif isinstance(item, float):
            parts.append(repr(item))
        elif isinstance(item, Quotation):
            _queue_items(work, item.items, "{ ", " }", "{}")
        elif isinstance(item, list):
            _queue_items(work, item, "[ ", " ]", "[]")
        elif isinstance(item, Definition):
            work.append(item.body)
            work.append(_Text(f"{item.name} = "))
        else:
            parts.append(str(item))
    return "".join(parts)


def display(value: Value) -> str:
    if isinstance(value, str):
        return value
    return source_form(value)
