"""Control primitives: eval, if, expand, try, fail, bye, quote.

None of these recurse into the evaluator. `eval` and `if` schedule the chosen
quotation on the machine's work-list; `try` leaves a handler marker beneath its
body; `expand` only builds a new quotation.
"""
from __future__ import annotations

from tack.errors import TypeMismatchError, UserError
from tack.evaluation.expander import expand as expand_template, pattern_names
from tack.evaluation.machine import Machine
from tack.types.dictionary import Dictionary, Primitive
from tack.types.effect import StackEffect
from tack.types.quotation import Definition, Quotation
from tack.types.word import Word


def eval_word(vm: Machine) -> None:
    """( q -- ... ): run a quotation on the current stack; other values stay put."""
    value = vm.pop()
    if isinstance(value, Quotation):
        vm.call(value)
    else:
        vm.push(value)


def if_word(vm: Machine) -> None:
    """( b then else -- ... )"""
    alternative = vm.pop_as(Quotation, "quotation")
    consequent = vm.pop_as(Quotation, "quotation")
    test = vm.pop_as(bool, "boolean")
    vm.call(consequent if test else alternative)


def expand(vm: Machine) -> None:
    """( v1 ... vn pattern template -- quotation )"""
    template = vm.pop_as(Quotation, "quotation")
    pattern = vm.pop_as(Quotation, "quotation")
    values = vm.pop_n(len(pattern_names(pattern)))
    vm.push(expand_template(pattern, template, values))


def try_word(vm: Machine) -> None:
    """( body handler -- ... ): run body; on error restore the stack, push the error, run handler."""
    handler = vm.pop_as(Quotation, "quotation")
    body = vm.pop_as(Quotation, "quotation")
    vm.guard(body, handler)


def fail(vm: Machine) -> None:
    raise UserError(vm.pop())


def bye(vm: Machine) -> None:
    vm.halt()


def quote(vm: Machine) -> None:
    """( -- x ): push the next element without running it; a word is pushed as its name."""
    item = vm.take_next()
    if isinstance(item, Definition):
        raise TypeMismatchError(f"cannot quote the definition of {item.name}")
    vm.push(item.id if isinstance(item, Word) else item)


def register(dictionary: Dictionary) -> None:
    """Register the control primitives into the given dictionary."""
    for primitive in (
        Primitive("eval", eval_word, StackEffect.unknown(1), doc="( q -- ... )"),
        Primitive("if", if_word, StackEffect.unknown(3), doc="( b then else -- ... )"),
        Primitive(
            "expand", expand, StackEffect.unknown(2),
            doc="( v1 ... vn pattern template -- q )",
        ),
        Primitive("try", try_word, StackEffect.unknown(2), doc="( body handler -- ... )"),
        Primitive("fail", fail, StackEffect.unknown(1), doc="( x -- )"),
        Primitive("bye", bye, StackEffect.unknown(), doc="( -- )"),
        Primitive("quote", quote, StackEffect.unknown(), doc="( -- x )"),
    ):
        dictionary.register(primitive)
