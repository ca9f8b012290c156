from __future__ import annotations

import logging
from typing import Literal

from tack import Value
from tack.builtins import register
from tack.errors import EndOfInput
from tack.evaluation.machine import Machine
from tack.host import BufferHost, Host
from tack.reader.parser import parse
from tack.types.dictionary import Dictionary
from tack.types.quotation import Quotation
from tack.types.word import Word

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Tack code.
    Maintains one Dictionary, one stack and one host across calls; separate
    instances share nothing. Not safe to use from several threads at once.
    """

    def __init__(
        self,
        host: Host | None = None,
        prelude: str | None | Literal['auto'] = 'auto',
    ):
        self.host: Host = host if host is not None else BufferHost()
        self.dictionary: Dictionary = Dictionary()
        register(self.dictionary)
        self.machine = Machine(self.dictionary, host=self.host)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from tack.modules.prelude_loader import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    @property
    def stack(self) -> list[Value]:
        return self.machine.stack

    def eval_prelude(self, code: str) -> None:
        """Evaluate library code; it must leave the stack as it found it."""
        depth = len(self.stack)
        self.machine.evaluate(parse(code))
        if len(self.stack) != depth:
            logger.debug("prelude left %d items on the stack", len(self.stack) - depth)

    def eval(self, code: str) -> list[Value]:
        """Parse and evaluate `code`; returns the stack."""
        return self.machine.evaluate(parse(code))

    def run(self, quotation: Quotation) -> list[Value]:
        return self.machine.evaluate(quotation)

    def call(self, name: str, *args: Value) -> list[Value]:
        """Push `args` and invoke the word `name`."""
        self.stack.extend(args)
        return self.machine.evaluate(Quotation([Word(name)]))

    def run_file(self, designator: str) -> list[Value]:
        """Load, parse and run a script; errors propagate to the caller."""
        logger.debug("interpreting %s", designator)
        return self.call("interpret", designator)

    def repl(self) -> None:
        """Run the read-eval-print loop until the host runs out of input or `bye`."""
        try:
            self.call("repl")
        except EndOfInput:
            logger.debug("end of input")
