"""
Pytest configuration and shared fixtures for all tinycompiler tests.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from tinycompiler.compiler.driver import CompilerDriver


@pytest.fixture(scope="session")
def session_compiler():
    """
    Session-scoped compiler shared across ALL tests.

    The driver is stateless (fresh lexer/parser per call), so sharing it
    cannot leak state between tests.
    """
    return CompilerDriver()


@pytest.fixture(scope="class")
def compiler(session_compiler):
    """Class-scoped compiler - shared across all tests in a class."""
    return session_compiler


@pytest.fixture
def no_color(monkeypatch):
    """Plain diagnostics regardless of the caller's environment."""
    monkeypatch.setenv("NO_COLOR", "1")
