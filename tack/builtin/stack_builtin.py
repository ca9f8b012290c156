"""Stack shuffling primitives: pick, roll, drop, clear.

Depth counts from the top: 0 is the top item, 1 the one beneath it. The
index operand itself is popped before depth is counted.
"""
from __future__ import annotations

from tack.errors import StackUnderflowError
from tack.evaluation.machine import Machine
from tack.types.dictionary import Dictionary, Primitive
from tack.types.effect import StackEffect
from tack.types.values import source_form


def pick(vm: Machine) -> None:
    """( xn ... x0 n -- xn ... x0 xn ): copy the item at depth n to the top."""
    n = vm.pop_index()
    if n >= len(vm.stack):
        raise StackUnderflowError(f"pick {source_form(n)} on a stack of {len(vm.stack)} items")
    vm.push(vm.stack[-1 - n])


def roll(vm: Machine) -> None:
    """( xn ... x0 n -- xn-1 ... x0 xn ): move the item at depth n to the top.

    Items above it shift down by one, keeping their order.
    """
    n = vm.pop_index()
    if n >= len(vm.stack):
        raise StackUnderflowError(f"roll {source_form(n)} on a stack of {len(vm.stack)} items")
    vm.push(vm.stack.pop(-1 - n))


def drop(vm: Machine) -> None:
    vm.pop()


def clear(vm: Machine) -> None:
    vm.stack.clear()


def register(dictionary: Dictionary) -> None:
    """Register the stack primitives into the given dictionary."""
    for primitive in (
        Primitive(
            "pick", pick, StackEffect.unknown(1),
            indexed=lambda n: StackEffect(n + 2, n + 2),
            doc="( xn ... x0 n -- xn ... x0 xn )",
        ),
        Primitive(
            "roll", roll, StackEffect.unknown(1),
            indexed=lambda n: StackEffect(n + 2, n + 1),
            doc="( xn ... x0 n -- xn-1 ... x0 xn )",
        ),
        Primitive("drop", drop, StackEffect(1, 0), doc="( x -- )"),
        Primitive("clear", clear, StackEffect.unknown(), doc="( ... -- )"),
    ):
        dictionary.register(primitive)
