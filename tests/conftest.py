# tests/conftest.py
# Ensure the project root (the folder that contains 'blocktext' and 'tests') is on
# sys.path so that `import blocktext` works without an install.

import sys
import pathlib

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from blocktext.index import build_index  # noqa: E402
from blocktext.parser import ParseContext  # noqa: E402


@pytest.fixture
def index():
    return build_index()


@pytest.fixture
def context():
    return ParseContext()
