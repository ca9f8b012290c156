"""The word dictionary.

A Dictionary maps case-sensitive names to definitions: native Primitives or
Interpreted values bound by `name = form`. Re-definition replaces the entry
(shadowing, not merging); nothing is ever deleted.

A Dictionary is plain mutable state with no locking. It is passed explicitly
to every evaluation, so independent interpreters never share one; do not
mutate a single Dictionary from several threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Union

from tack import PrimitiveFn, Value
from tack.errors import UndefinedWordError
from tack.types.effect import StackEffect, infer
from tack.types.quotation import Quotation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Primitive:
    name: str
    fn: PrimitiveFn
    effect: StackEffect = field(default_factory=StackEffect.unknown)
    # pick/roll: effect when the index is a literal preceding the word
    indexed: Optional[Callable[[int], StackEffect]] = None
    doc: str = ""


@dataclass(frozen=True)
class Interpreted:
    name: str
    body: Value
    effect: StackEffect


Entry = Union[Primitive, Interpreted]


class Dictionary:
    """Name -> definition mapping shared by one interpreter's evaluations."""

    __slots__ = ("entries",)

    def __init__(self):
        self.entries: dict[str, Entry] = {}

    def register(self, primitive: Primitive) -> None:
        self.entries[primitive.name] = primitive

    def define(self, name: str, body: Value) -> Interpreted:
        """Bind `name` to a user value, inferring its stack effect.

        Quotations run when the word is invoked; any other value is pushed.
        """
        if isinstance(body, Quotation):
            effect = infer(body, self)
        else:
            effect = StackEffect.literal()
        entry = Interpreted(name, body, effect)
        if name in self.entries:
            logger.debug("redefining %s", name)
        self.entries[name] = entry
        return entry

    def lookup(self, name: str) -> Entry:
        try:
            return self.entries[name]
        except KeyError:
            raise UndefinedWordError(name) from None

    def effect_of(self, name: str, previous: Value = None) -> StackEffect:
        """Effect of invoking `name`; unknown words are inexact."""
        entry = self.entries.get(name)
        if entry is None:
            return StackEffect.unknown()
        if isinstance(entry, Primitive):
            if (
                entry.indexed is not None
                and isinstance(previous, int)
                and not isinstance(previous, bool)
                and previous >= 0
            ):
                return entry.indexed(previous)
            return entry.effect
        return entry.effect

    def names(self) -> list[str]:
        return list(self.entries)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"<Dictionary of {len(self.entries)} words>"
