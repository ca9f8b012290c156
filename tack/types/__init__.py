from tack.types.word import Word
from tack.types.quotation import Quotation, Definition
from tack.types.effect import StackEffect
from tack.types.dictionary import Dictionary, Primitive, Interpreted

__all__ = [
    "Word",
    "Quotation",
    "Definition",
    "StackEffect",
    "Dictionary",
    "Primitive",
    "Interpreted",
]
