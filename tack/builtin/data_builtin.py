"""Sequence and string primitives.

Sequences are Python lists, but no primitive mutates a list it was given:
each one leaves a fresh list on the stack. A saved copy of the stack (as
taken by `try`) therefore keeps seeing the sequences it saw.
"""
from __future__ import annotations

from tack.errors import EmptySequenceError, TypeMismatchError
from tack.evaluation.machine import Machine
from tack.reader.parser import HEX_RE, INT_RE, parse_int
from tack.types.dictionary import Dictionary, Primitive
from tack.types.effect import StackEffect
from tack.types.quotation import Quotation
from tack.types.values import display, source_form, type_name


# -------------------------------
# Sequences
# -------------------------------
def shift(vm: Machine) -> None:
    """( seq -- rest first )"""
    seq = vm.pop_as(list, "sequence")
    if not seq:
        raise EmptySequenceError("shift on empty sequence")
    vm.push(seq[1:])
    vm.push(seq[0])


def pop(vm: Machine) -> None:
    """( seq -- rest last )"""
    seq = vm.pop_as(list, "sequence")
    if not seq:
        raise EmptySequenceError("pop on empty sequence")
    vm.push(seq[:-1])
    vm.push(seq[-1])


def push(vm: Machine) -> None:
    """( seq x -- seq' )"""
    value = vm.pop()
    seq = vm.pop_as(list, "sequence")
    vm.push(seq + [value])


def unshift(vm: Machine) -> None:
    """( seq x -- seq' )"""
    value = vm.pop()
    seq = vm.pop_as(list, "sequence")
    vm.push([value] + seq)


def append(vm: Machine) -> None:
    """( seq1 seq2 -- seq1+seq2 )"""
    rhs = vm.pop_as(list, "sequence")
    lhs = vm.pop_as(list, "sequence")
    vm.push(lhs + rhs)


def gather(vm: Machine) -> None:
    """( x1 ... xn n -- seq )"""
    n = vm.pop_index()
    vm.push(vm.pop_n(n))


def explode(vm: Machine) -> None:
    """( seq -- x1 ... xn )"""
    vm.stack.extend(vm.pop_as(list, "sequence"))


def snapshot(vm: Machine) -> None:
    """( -- seq ): copy of the whole stack, bottom first."""
    vm.push(list(vm.stack))


def length(vm: Machine) -> None:
    """( seq|str|quotation -- n )"""
    vm.push(len(vm.pop_as((list, str, Quotation), "sequence, string or quotation")))


# -------------------------------
# Strings
# -------------------------------
def strcat(vm: Machine) -> None:
    """( a b -- ab ): the item beneath the top is the left-hand side."""
    right = vm.pop_as(str, "string")
    left = vm.pop_as(str, "string")
    vm.push(left + right)


def flatten(vm: Machine) -> None:
    """( seq sep -- str ): join the display forms of the items with sep."""
    sep = vm.pop_as(str, "string")
    seq = vm.pop_as(list, "sequence")
    vm.push(sep.join(display(item) for item in seq))


def lines(vm: Machine) -> None:
    """( str -- seq )"""
    vm.push(vm.pop_as(str, "string").splitlines())


def to_str(vm: Machine) -> None:
    """( x -- str )"""
    vm.push(display(vm.pop()))


def to_int(vm: Machine) -> None:
    """( x -- n ): numbers are truncated, strings read as decimal or `#` hex integers."""
    value = vm.pop_as((int, float, str), "number or string")
    if isinstance(value, str):
        text = value.strip()
        if INT_RE.match(text):
            vm.push(parse_int(text))
        elif HEX_RE.match(text):
            vm.push(int(text[1:], 16))
        else:
            raise TypeMismatchError(f"cannot convert {source_form(value)} to integer")
        return
    try:
        vm.push(int(value))
    except (ValueError, OverflowError):
        raise TypeMismatchError(f"cannot convert {type_name(value)} {value} to integer") from None


def to_hex(vm: Machine) -> None:
    """( n -- str ): `255 hex` is "#ff", which reads back as 255."""
    n = vm.pop_index()
    vm.push(f"#{n:x}")


def register(dictionary: Dictionary) -> None:
    """Register sequence and string primitives into the given dictionary."""
    for primitive in (
        Primitive("shift", shift, StackEffect(1, 2), doc="( seq -- rest first )"),
        Primitive("pop", pop, StackEffect(1, 2), doc="( seq -- rest last )"),
        Primitive("push", push, StackEffect(2, 1), doc="( seq x -- seq' )"),
        Primitive("unshift", unshift, StackEffect(2, 1), doc="( seq x -- seq' )"),
        Primitive("append", append, StackEffect(2, 1), doc="( seq1 seq2 -- seq )"),
        Primitive("gather", gather, StackEffect.unknown(1), doc="( x1 ... xn n -- seq )"),
        Primitive("explode", explode, StackEffect.unknown(1), doc="( seq -- x1 ... xn )"),
        Primitive("snapshot", snapshot, StackEffect(0, 1), doc="( -- seq )"),
        Primitive("len", length, StackEffect(1, 1), doc="( seq -- n )"),
        Primitive("strcat", strcat, StackEffect(2, 1), doc="( a b -- ab )"),
        Primitive("flatten", flatten, StackEffect(2, 1), doc="( seq sep -- str )"),
        Primitive("lines", lines, StackEffect(1, 1), doc="( str -- seq )"),
        Primitive("str", to_str, StackEffect(1, 1), doc="( x -- str )"),
        Primitive("int", to_int, StackEffect(1, 1), doc="( x -- n )"),
        Primitive("hex", to_hex, StackEffect(1, 1), doc="( n -- str )"),
    ):
        dictionary.register(primitive)
