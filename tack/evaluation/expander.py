"""Run-time template expansion for the `expand` word.

`bind` destructures the top of the stack against a pattern of names;
`substitute` rewrites a template, replacing every bound Word (at any depth)
with its value as a literal element. Names the pattern does not bind stay
Words and resolve when the result is evaluated. Inside the template a pattern
name shadows any dictionary word of the same name.

Both functions are pure: the template is never modified, and equal inputs
give structurally equal outputs.
"""

from __future__ import annotations

from tack import Element, Value
from tack.errors import StackUnderflowError, TypeMismatchError
from tack.types.quotation import Definition, Quotation
from tack.types.values import source_form, type_name
from tack.types.word import Word

_END = object()


def pattern_names(pattern: Quotation) -> list[Word]:
    names = []
    for item in pattern:
        if not isinstance(item, Word):
            raise TypeMismatchError(
                f"expand pattern may only hold names, found {type_name(item)} {source_form(item)}"
            )
        names.append(item)
    return names


def bind(pattern: Quotation, values: list[Value]) -> dict[Word, Value]:
    """Pair pattern names with values; the last name gets the last (top) value.

    Repeated names keep the rightmost binding.
    """
    names = pattern_names(pattern)
    if len(values) != len(names):
        raise StackUnderflowError(
            f"expand needs {len(names)} values, found {len(values)}"
        )
    return dict(zip(names, values))


def _open(node: Quotation | Definition) -> tuple:
    children = node.items if isinstance(node, Quotation) else (node.body,)
    return node, iter(children), []


def substitute(template: Element, bindings: dict[Word, Value]) -> Element:
    if isinstance(template, Word):
        return bindings.get(template, template)
    if not isinstance(template, (Quotation, Definition)):
        return template
    # Rebuild bottom-up on an explicit stack; templates nest without limit
    pending = [_open(template)]
    while True:
        node, children, built = pending[-1]
        child = next(children, _END)
        if child is _END:
            pending.pop()
            if isinstance(node, Quotation):
                rebuilt = Quotation(built)
            else:
                rebuilt = Definition(node.name, built[0])
            if not pending:
                return rebuilt
            pending[-1][2].append(rebuilt)
        elif isinstance(child, Word):
            built.append(bindings.get(child, child))
        elif isinstance(child, (Quotation, Definition)):
            pending.append(_open(child))
        else:
            built.append(child)


def expand(pattern: Quotation, template: Quotation, values: list[Value]) -> Quotation:
    return substitute(template, bind(pattern, values))
