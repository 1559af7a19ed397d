# tests/conftest.py
# Put src/ on sys.path so `import blparse` works without an install,
# and expose shared fixtures for the parser tests.

import sys
import pathlib

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_STR = str(ROOT / "src")

if SRC_STR not in sys.path:
    sys.path.insert(0, SRC_STR)

from blparse.tokenizer import END_OF_INPUT, TokenStream  # noqa: E402

DATA = ROOT / "tests" / "data"


@pytest.fixture
def data_dir() -> pathlib.Path:
    return DATA


@pytest.fixture
def stream():
    """stream("PROGRAM p IS ...") -> TokenStream ending with END_OF_INPUT."""
    def make(text: str) -> TokenStream:
        return TokenStream(text.split() + [END_OF_INPUT])
    return make
