"""Words that reach the host or the reader: echo, capture, prompt, parse, load,
plus the introspection words inspect, words and debug.
"""
from __future__ import annotations

from tack.evaluation.machine import Machine
from tack.reader.parser import parse as parse_source
from tack.types.dictionary import Dictionary, Primitive
from tack.types.effect import StackEffect
from tack.types.values import display, source_form


def echo(vm: Machine) -> None:
    vm.host.write(display(vm.pop()) + "\n")


def capture(vm: Machine) -> None:
    """( -- line ); EndOfInput from the host ends the session."""
    vm.push(vm.host.read_line())


def prompt(vm: Machine) -> None:
    """( text -- line )"""
    vm.host.write(display(vm.pop()))
    capture(vm)


def parse(vm: Machine) -> None:
    """( source -- quotation )"""
    vm.push(parse_source(vm.pop_as(str, "string")))


def load(vm: Machine) -> None:
    """( designator -- source )"""
    vm.push(vm.host.load_source(vm.pop_as(str, "string")))


def inspect(vm: Machine) -> None:
    """( name -- ): write a word's stack effect and definition."""
    name = vm.pop_as(str, "string")
    entry = vm.dictionary.lookup(name)
    if isinstance(entry, Primitive):
        vm.host.write(f"{name} {entry.doc or entry.effect} = <builtin>\n")
    else:
        vm.host.write(f"{name} {entry.effect} = {source_form(entry.body)}\n")


def words(vm: Machine) -> None:
    """( -- seq ): every defined name, in definition order."""
    vm.push(vm.dictionary.names())


def debug(vm: Machine) -> None:
    """( -- ): write the code still waiting to run, innermost first."""
    for kind, code in vm.pending():
        vm.host.write(f"{kind} {source_form(code)}\n")


def register(dictionary: Dictionary) -> None:
    """Register host and reader primitives into the given dictionary."""
    for primitive in (
        Primitive("echo", echo, StackEffect(1, 0), doc="( x -- )"),
        Primitive("capture", capture, StackEffect(0, 1), doc="( -- line )"),
        Primitive("prompt", prompt, StackEffect(1, 1), doc="( text -- line )"),
        Primitive("parse", parse, StackEffect(1, 1), doc="( source -- q )"),
        Primitive("load", load, StackEffect(1, 1), doc="( designator -- source )"),
        Primitive("inspect", inspect, StackEffect(1, 0), doc="( name -- )"),
        Primitive("words", words, StackEffect(0, 1), doc="( -- seq )"),
        Primitive("debug", debug, StackEffect(0, 0), doc="( -- )"),
    ):
        dictionary.register(primitive)
