"""Arithmetic and comparison primitives.

Binary words take their left operand from beneath the top: `7 2 -` is 5.
Integers are arbitrary precision; mixing one that does not fit a float with
a decimal raises RangeError rather than a Python OverflowError.
"""
from __future__ import annotations

import operator
from typing import Callable

from tack import Value
from tack.errors import DivideByZeroError, RangeError, TypeMismatchError
from tack.evaluation.machine import Machine
from tack.types.dictionary import Dictionary, Primitive
from tack.types.effect import StackEffect
from tack.types.values import is_equal

NUMBER = (int, float)


def _apply(op: Callable[[Value, Value], Value], lhs: Value, rhs: Value) -> Value:
    try:
        return op(lhs, rhs)
    except OverflowError as ex:
        raise RangeError(f"number too large: {ex}") from ex


def _operands(vm: Machine) -> tuple[Value, Value]:
    rhs = vm.pop_as(NUMBER, "number")
    lhs = vm.pop_as(NUMBER, "number")
    return lhs, rhs


def _binary(op: Callable[[Value, Value], Value]) -> Callable[[Machine], None]:
    def word(vm: Machine) -> None:
        lhs, rhs = _operands(vm)
        vm.push(_apply(op, lhs, rhs))
    return word


def div(vm: Machine) -> None:
    """Floor division on integers, true division otherwise."""
    lhs, rhs = _operands(vm)
    if rhs == 0:
        raise DivideByZeroError("divided by zero")
    if isinstance(lhs, int) and isinstance(rhs, int):
        vm.push(lhs // rhs)
    else:
        vm.push(_apply(operator.truediv, lhs, rhs))


def mod(vm: Machine) -> None:
    lhs, rhs = _operands(vm)
    if rhs == 0:
        raise DivideByZeroError("divided by zero")
    vm.push(_apply(operator.mod, lhs, rhs))


def neg(vm: Machine) -> None:
    vm.push(-vm.pop_as(NUMBER, "number"))


def equals(vm: Machine) -> None:
    """Structural equality over any two values."""
    rhs = vm.pop()
    lhs = vm.pop()
    vm.push(is_equal(lhs, rhs))


def _compare(op: Callable[[Value, Value], bool]) -> Callable[[Machine], None]:
    def word(vm: Machine) -> None:
        rhs = vm.pop_as(NUMBER + (str,), "number or string")
        lhs = vm.pop_as(NUMBER + (str,), "number or string")
        if isinstance(lhs, str) != isinstance(rhs, str):
            raise TypeMismatchError("cannot compare a string with a number")
        vm.push(op(lhs, rhs))
    return word


def register(dictionary: Dictionary) -> None:
    """Register arithmetic and comparison primitives into the given dictionary."""
    binary = StackEffect(2, 1)
    for primitive in (
        Primitive("+", _binary(operator.add), binary, doc="( a b -- a+b )"),
        Primitive("-", _binary(operator.sub), binary, doc="( a b -- a-b )"),
        Primitive("*", _binary(operator.mul), binary, doc="( a b -- a*b )"),
        Primitive("/", div, binary, doc="( a b -- a/b )"),
        Primitive("mod", mod, binary, doc="( a b -- a%b )"),
        Primitive("~", neg, StackEffect(1, 1), doc="( a -- -a )"),
        Primitive("==", equals, binary, doc="( a b -- bool )"),
        Primitive("<", _compare(operator.lt), binary, doc="( a b -- bool )"),
        Primitive(">", _compare(operator.gt), binary, doc="( a b -- bool )"),
    ):
        dictionary.register(primitive)
