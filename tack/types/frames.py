from tack import Value
from tack.types.quotation import Quotation


class Frame:
    """A quotation in progress on the machine's work-list."""

    __slots__ = ("items", "index")

    def __init__(self, quotation: Quotation):
        self.items = quotation.items
        self.index = 0

    @property
    def done(self) -> bool:
        return self.index >= len(self.items)


class Handler:
    """Marker left by `try` beneath its body's frames."""

    __slots__ = ("saved", "handler")

    def __init__(self, saved: list[Value], handler: Quotation):
        self.saved = saved
        self.handler = handler
