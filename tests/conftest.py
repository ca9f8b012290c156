import pytest

from tack.host import BufferHost
from tack.interpreter import Interpreter

# Most tests want the full language (primitives plus the core prelude) talking
# to an in-memory host, so output and input can be asserted on directly.
# `bare` skips the prelude for tests about the primitives themselves.


@pytest.fixture
def host():
    return BufferHost()


@pytest.fixture
def interp(host):
    return Interpreter(host=host)


@pytest.fixture
def bare(host):
    return Interpreter(host=host, prelude=None)
