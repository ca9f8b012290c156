"""Stack effects: how many items a word consumes and produces.

Effects are folded left to right over a quotation body. An inexact effect
(an unknown word, or a primitive whose effect depends on run-time data such
as `if` or `eval`) stops the fold; what has been accumulated so far is still
a valid lower bound on the inputs, which is all the evaluator relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tack.types.quotation import Definition, Quotation
from tack.types.word import Word

if TYPE_CHECKING:
    from tack.types.dictionary import Dictionary


@dataclass(frozen=True)
class StackEffect:
    inputs: int = 0
    outputs: int = 0
    exact: bool = True

    @classmethod
    def literal(cls) -> StackEffect:
        return cls(0, 1)

    @classmethod
    def unknown(cls, inputs: int = 0) -> StackEffect:
        return cls(inputs, 0, False)

    def then(self, rhs: StackEffect) -> StackEffect:
        """Effect of running `self` followed by `rhs`."""
        inputs, outputs = self.inputs, self.outputs
        if outputs < rhs.inputs:
            inputs += rhs.inputs - outputs
            outputs = 0
        else:
            outputs -= rhs.inputs
        return StackEffect(inputs, outputs + rhs.outputs, self.exact and rhs.exact)

    def __str__(self) -> str:
        out = str(self.outputs) if self.exact else "?"
        return f"( {self.inputs} -- {out} )"


def infer(body: Quotation, dictionary: Dictionary) -> StackEffect:
    effect = StackEffect()
    previous = None
    for item in body:
        if isinstance(item, Word):
            step = dictionary.effect_of(item.id, previous)
        elif isinstance(item, Definition):
            step = StackEffect()
        else:
            step = StackEffect.literal()
        effect = effect.then(step)
        if not effect.exact:
            break
        previous = item
    return effect
