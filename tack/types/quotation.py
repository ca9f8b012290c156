"""Quotations: immutable blocks that are both code and data.

A Quotation holds a tuple of elements. Elements are literals (int, float, str,
bool, list), Words, nested Quotations and, at the top level of a parse,
Definitions. Nothing mutates a Quotation after construction; the expander
builds new ones.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from tack import Element
from tack.types.word import Word


class Quotation:
    __slots__ = ("items",)

    def __init__(self, items: Iterable[Element] = ()):
        self.items: tuple[Element, ...] = tuple(items)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Element:
        return self.items[index]

    def __eq__(self, other: object) -> bool:
        from tack.types.values import is_equal
        return isinstance(other, Quotation) and is_equal(self.items, other.items)

    # Structural equality on a container that may hold lists
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Quotation({list(self.items)!r})"

    def __str__(self) -> str:
        from tack.types.values import source_form
        return source_form(self)


class Definition:
    """A parsed top-level `name = form` assignment."""

    __slots__ = ("name", "body")

    def __init__(self, name: Word, body: Element):
        self.name = name
        self.body = body

    def __eq__(self, other: object) -> bool:
        from tack.types.values import is_equal
        return (
            isinstance(other, Definition)
            and self.name == other.name
            and is_equal(self.body, other.body)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Definition({self.name!r}, {self.body!r})"
