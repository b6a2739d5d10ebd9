"""
Shared pytest setup: puts src/ on sys.path the same way the run_*.py
entry points do, and provides common fixtures.
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import pytest

from fakes import FIXED_NOW


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
