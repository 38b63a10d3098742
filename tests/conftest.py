"""Shared fixtures for exemplify tests."""

import logging
from pathlib import Path

import pytest

from exemplify.core import ExampleStore, ParserSettings

logging.getLogger("exemplify").setLevel(logging.DEBUG)

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "test_code"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the marked-up TypeScript fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def first_fixture() -> Path:
    return FIXTURES_DIR / "test.ts"


@pytest.fixture
def second_fixture() -> Path:
    return FIXTURES_DIR / "test2.ts"


@pytest.fixture
def settings() -> ParserSettings:
    return ParserSettings()


@pytest.fixture
def store() -> ExampleStore:
    return ExampleStore()
