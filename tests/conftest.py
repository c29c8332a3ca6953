from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from core import db
from main import app


@pytest.fixture
def tx(monkeypatch):
    """
    Replace `db.transaction()` with a fake that yields a mocked connection
    and records whether the block committed or rolled back.
    """
    conn = MagicMock()
    conn.fetchrow = AsyncMock(return_value=None)
    conn.execute = AsyncMock(return_value="OK")
    conn.executemany = AsyncMock(return_value=None)
    state = SimpleNamespace(conn=conn, committed=False, rolled_back=False)

    @asynccontextmanager
    async def fake_transaction():
        try:
            yield conn
        except Exception:
            state.rolled_back = True
            raise
        state.committed = True

    monkeypatch.setattr(db, "transaction", fake_transaction)
    return state


@pytest.fixture
async def client():
    """Async test client; the lifespan (pool + schema) is not started."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
