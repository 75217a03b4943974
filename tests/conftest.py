import os

import pytest
from dotenv import load_dotenv
from fakes import FakeSearchClient

from context.session_store import SessionStore
from orchestrator.core import SearchOrchestrator

# Load environment variables from .env file for tests
load_dotenv()


@pytest.fixture(scope="session")
def api_key():
    """Fixture to provide the API key from environment variables."""
    key = os.getenv("GOOGLE_API_KEY")
    if not key:
        pytest.skip("GOOGLE_API_KEY environment variable not set")
    return key


@pytest.fixture
def mock_env(monkeypatch):
    """Fixture to mock environment variables for testing."""
    env_vars = {
        "GOOGLE_API_KEY": "test-api-key",
        "GEMINI_MODEL": "gemini-test",
        "SESSION_MAX_ENTRIES": "50",
        "SESSION_TTL_SECONDS": "600",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def fake_client():
    return FakeSearchClient()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def orchestrator(fake_client, store):
    return SearchOrchestrator(client=fake_client, store=store)
