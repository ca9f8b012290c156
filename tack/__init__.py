# Core type aliases for Tack's data model.
# We use plain Python types (int, float, str, bool, list) for runtime values,
# plus two small classes from tack.types: Word (a name reference) and
# Quotation (an immutable block of code/data).
#
# Naming guidance:
# - Element: Use in reader/expander code to denote anything that can sit inside
#   a quotation (literals, Words, nested Quotations, Definitions).
# - Value:   Use in evaluator/runtime code to denote values that live on the stack.
# Both aliases resolve to `Any`; the closed value set is enforced by the
# primitives, not by the type checker.

import logging
from typing import Any, Callable

# Runtime value alias
Value = Any
# Quotation element alias
Element = Value

# Primitive function type: native words receive the running Machine
PrimitiveFn = Callable[..., None]

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.3.0"
