import io

import pytest

from archscript.interpreter import Interpreter
from archscript.types import Environment


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def interp(out):
    return Interpreter(stdout=out)


@pytest.fixture
def run(interp):
    """Evaluate text in the shared interpreter and return the canonical text of the result."""
    def _run(code):
        return interp.eval(code).source()
    return _run


@pytest.fixture
def env():
    return Environment()
