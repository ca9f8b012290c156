"""Error taxonomy for the Tack runtime.

Every runtime failure is a TackError. Each error carries a `payload`: the value
that `try` pushes for its handler. Built-in errors use the String
"<Kind>: <message>"; `fail` lets user code choose the payload.

EndOfInput is deliberately outside the hierarchy: it ends a session and is
never caught by `try`.
"""

from __future__ import annotations

from typing import Any


class TackError(Exception):
    """ Base class for all Tack errors"""

    kind = "Error"

    @property
    def payload(self) -> Any:
        return f"{self.kind}: {self}"


class TackSyntaxError(TackError):
    """ Raised when source text cannot be parsed"""

    kind = "SyntaxError"

    def __init__(self, message: str, source: str = "", offset: int = 0):
        self.message = message
        self.offset = offset
        self.line = source.count("\n", 0, offset) + 1
        self.column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        super().__init__(f"{message} at line {self.line}, column {self.column}")


class UndefinedWordError(TackError):
    """ Raised when a word is not in the dictionary"""

    kind = "UndefinedWordError"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"can't understand {name}")


class StackUnderflowError(TackError):
    """ Raised when a word needs more items than the stack holds"""

    kind = "StackUnderflowError"


class TypeMismatchError(TackError):
    """ Raised when a primitive receives a value of the wrong variant"""

    kind = "TypeMismatchError"


class EmptySequenceError(TackError):
    """ Raised by shift/pop on an empty sequence"""

    kind = "EmptySequenceError"


class DivideByZeroError(TackError):
    """ Raised when dividing by zero"""

    kind = "DivideByZeroError"


class RangeError(TackError):
    """ Raised when a number is too large for the operation applied to it"""

    kind = "RangeError"


class SourceLoadError(TackError):
    """ Raised when the host cannot provide source text for a designator"""

    kind = "SourceLoadError"


class UserError(TackError):
    """ Raised by the `fail` word; the payload is whatever the program supplied"""

    kind = "UserError"

    def __init__(self, value: Any):
        self.value = value
        super().__init__(repr(value))

    @property
    def payload(self) -> Any:
        return self.value


class EndOfInput(Exception):
    """ Signals that the host has no more input; ends a session gracefully"""
