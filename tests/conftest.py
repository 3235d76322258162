"""Shared test fixtures.

The app is wired to the in-memory account store and session store through
FastAPI dependency overrides, so no spreadsheet, database or Redis is needed.
"""

import os

# Settings are read at import time
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.main import app  # noqa: E402
from src.sb_account.infrastructure.factory import get_account_repository  # noqa: E402
from src.sb_account.infrastructure.memory import InMemoryAccountRepository  # noqa: E402
from src.sb_gateway.session.store import InMemorySessionStore, get_session_store  # noqa: E402


@pytest.fixture
def repo() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def sessions() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
async def client(
    repo: InMemoryAccountRepository, sessions: InMemorySessionStore
) -> AsyncClient:
    """Async HTTP client with a fresh account store and session store."""
    app.dependency_overrides[get_account_repository] = lambda: repo
    app.dependency_overrides[get_session_store] = lambda: sessions
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
