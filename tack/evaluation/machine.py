"""Core evaluator for Tack: a stack machine driven by an explicit work-list.

Quotations never run through Python recursion. The machine keeps a list of
frames (quotations in progress) and `try` markers; words such as `eval`, `if`
and `try`, and every user-defined word, schedule frames instead of calling
back into the evaluator. Scheduling first drops finished frames, so a call in
tail position replaces its caller and `loop`/`while` run in constant space.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from tack import Element, Value
from tack.errors import StackUnderflowError, TackError, TypeMismatchError
from tack.host import BufferHost, Host
from tack.types.dictionary import Dictionary, Interpreted
from tack.types.frames import Frame, Handler
from tack.types.quotation import Definition, Quotation
from tack.types.values import source_form, type_name
from tack.types.word import Word

logger = logging.getLogger(__name__)


class Machine:
    """One evaluation context: a value stack, a dictionary, a host and a work-list."""

    __slots__ = ("stack", "dictionary", "host", "frames", "halted", "_floor")

    def __init__(
        self,
        dictionary: Dictionary,
        stack: Optional[list[Value]] = None,
        host: Optional[Host] = None,
    ):
        self.stack: list[Value] = stack if stack is not None else []
        self.dictionary = dictionary
        self.host: Host = host if host is not None else BufferHost()
        self.frames: list[Frame | Handler] = []
        self.halted = False
        self._floor = 0

    # -------------------------------
    # Stack access
    # -------------------------------
    def push(self, value: Value) -> None:
        self.stack.append(value)

    def pop(self) -> Value:
        if not self.stack:
            raise StackUnderflowError("stack underflow")
        return self.stack.pop()

    def pop_n(self, n: int) -> list[Value]:
        """Pop n items, returned bottom first."""
        if n > len(self.stack):
            raise StackUnderflowError(f"need {source_form(n)} items, found {len(self.stack)}")
        if n == 0:
            return []
        items = self.stack[-n:]
        del self.stack[-n:]
        return items

    def pop_as(self, kind: type | tuple[type, ...], name: str) -> Value:
        """Pop the top item, requiring it to be of `kind`."""
        value = self.pop()
        kinds = kind if isinstance(kind, tuple) else (kind,)
        # bool is an int subclass but never a Number here
        if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
            raise TypeMismatchError(
                f"expected {name}, found {type_name(value)} {source_form(value)}"
            )
        return value

    def pop_index(self) -> int:
        n = self.pop_as(int, "non-negative integer")
        if n < 0:
            raise TypeMismatchError(f"expected non-negative integer, found {source_form(n)}")
        return n

    # -------------------------------
    # Scheduling
    # -------------------------------
    def call(self, quotation: Quotation) -> None:
        """Schedule a quotation to run next, on the shared stack."""
        self._prune()
        if quotation.items:
            self.frames.append(Frame(quotation))

    def guard(self, body: Quotation, handler: Quotation) -> None:
        """Run `body`; on a TackError restore the stack and run `handler`."""
        self._prune()
        self.frames.append(Handler(list(self.stack), handler))
        self.frames.append(Frame(body))

    def _prune(self) -> None:
        """Drop finished frames above the floor; this is what makes tail calls free."""
        frames = self.frames
        while len(frames) > self._floor:
            top = frames[-1]
            if isinstance(top, Frame) and top.done:
                frames.pop()
            else:
                break

    def take_next(self) -> Element:
        """Consume the element that follows the running word, for `quote`.

        When the running quotation is exhausted the next element of its
        caller is taken; a `try` marker ends the search.
        """
        for index in range(len(self.frames) - 1, self._floor - 1, -1):
            frame = self.frames[index]
            if isinstance(frame, Handler):
                break
            if not frame.done:
                item = frame.items[frame.index]
                frame.index += 1
                return item
        raise StackUnderflowError("nothing left to quote")

    def pending(self) -> Iterator[tuple[str, Quotation]]:
        """Code still to run, innermost first: ("code", rest) or ("catch", handler)."""
        for marker in reversed(self.frames):
            if isinstance(marker, Handler):
                yield "catch", marker.handler
            elif not marker.done:
                yield "code", Quotation(marker.items[marker.index:])

    def halt(self) -> None:
        self.halted = True

    # -------------------------------
    # Execution
    # -------------------------------
    def evaluate(self, quotation: Quotation) -> list[Value]:
        """Run `quotation` to completion and return the stack."""
        floor = self._floor
        self._floor = len(self.frames)
        self.halted = False
        try:
            self.call(quotation)
            self.run()
        finally:
            del self.frames[self._floor:]
            self._floor = floor
        return self.stack

    def run(self) -> None:
        frames = self.frames
        while len(frames) > self._floor and not self.halted:
            top = frames[-1]
            if isinstance(top, Handler):
                # The guarded body completed normally
                frames.pop()
                continue
            if top.done:
                frames.pop()
                continue
            item = top.items[top.index]
            top.index += 1
            try:
                self.step(item)
            except TackError as err:
                self.recover(err)

    def step(self, item: Element) -> None:
        if isinstance(item, Word):
            self.invoke(item.id)
        elif isinstance(item, Definition):
            self.dictionary.define(item.name.id, item.body)
            logger.debug("defined %s", item.name)
        else:
            self.push(item)

    def invoke(self, name: str) -> None:
        entry = self.dictionary.lookup(name)
        if isinstance(entry, Interpreted):
            if isinstance(entry.body, Quotation):
                if len(self.stack) < entry.effect.inputs:
                    raise StackUnderflowError(
                        f"{name} needs {entry.effect.inputs} items, found {len(self.stack)}"
                    )
                self.call(entry.body)
            else:
                self.push(entry.body)
        else:
            entry.fn(self)

    def recover(self, err: TackError) -> None:
        """Unwind to the innermost `try` marker, or re-raise when there is none."""
        frames = self.frames
        for index in range(len(frames) - 1, self._floor - 1, -1):
            marker = frames[index]
            if isinstance(marker, Handler):
                del frames[index:]
                self.stack[:] = marker.saved
                logger.debug("caught %s", err.payload)
                self.push(err.payload)
                self.call(marker.handler)
                return
        raise err


def evaluate(
    quotation: Quotation,
    stack: list[Value],
    dictionary: Dictionary,
    host: Optional[Host] = None,
) -> list[Value]:
    """Execute `quotation` against `stack` and `dictionary`; returns the stack."""
    return Machine(dictionary, stack, host).evaluate(quotation)
