"""Root conftest: shared test configuration."""

import os

import pytest

# Settings are cached at first import of app.main; pin test values before that.
os.environ.setdefault("API_TOKEN", "test-token")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def api_token() -> str:
    return os.environ["API_TOKEN"]


@pytest.fixture
def auth_headers(api_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_token}"}
