"""The native word set.

`register` fills a dictionary with every primitive; the language-level words
(`dup`, `while`, `repl`, ...) come from the prelude on top of these.
"""
from __future__ import annotations

from tack.builtin import arith_builtin, control_builtin, data_builtin, io_builtin, stack_builtin
from tack.types.dictionary import Dictionary

MODULES = (stack_builtin, control_builtin, data_builtin, arith_builtin, io_builtin)


def register(dictionary: Dictionary) -> None:
    """Register all primitives into the given dictionary."""
    for module in MODULES:
        module.register(dictionary)


def new_dictionary() -> Dictionary:
    dictionary = Dictionary()
    register(dictionary)
    return dictionary
