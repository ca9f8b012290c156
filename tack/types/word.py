"""Words: the names inside a quotation.

A word is any run of characters that is not whitespace, a brace, a double
quote or `;`, and that does not read as a number, a boolean or a `#` literal.
Each distinct name has a single Word instance, so the expander and the
dictionary compare names by identity.
"""

from __future__ import annotations

import re
import sys
from typing import ClassVar

NAME_RE = re.compile(r'[^\s{}";]+\Z')


def is_name(text: str) -> bool:
    """True when `text` could be written as a single word token."""
    return bool(NAME_RE.match(text))


class Word:
    """A bare name inside a quotation, resolved against the dictionary when run."""

    __slots__ = ("id",)

    _table: ClassVar[dict[str, Word]] = {}

    def __new__(cls, name: str) -> Word:
        word = cls._table.get(name)
        if word is None:
            if not is_name(name):
                raise ValueError(f"not a word name: {name!r}")
            word = super().__new__(cls)
            word.id = sys.intern(name)
            cls._table[word.id] = word
        return word

    def __eq__(self, other: object) -> bool:
        return self is other or (isinstance(other, Word) and self.id == other.id)

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Word({self.id!r})"

    def __str__(self):
        return self.id
