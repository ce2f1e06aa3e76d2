"""Shared test fixtures for snyk-api tests."""

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from snyk_api.client import Client

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_API_URL = "https://api.snyk.io"
TEST_ORG_ID = "8bcff720-99a4-4442-bb35-31f7a74d27b0"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def client() -> Client:
    """Client with the default origin and retry budget."""
    return Client("mock-token")


@pytest.fixture
def load_fixture():
    """Load a JSON fixture from tests/fixtures by file name."""

    def _load(name: str) -> Any:
        return json.loads((FIXTURES_DIR / name).read_text())

    return _load


@pytest.fixture
def fixture_text():
    """Raw text of a fixture file."""

    def _read(name: str) -> str:
        return (FIXTURES_DIR / name).read_text()

    return _read
