"""
PaddyHub Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service error paths
    ├── sqlite_stores:   The three stores pointed at throwaway SQLite files
    └── test_client:     HTTPX AsyncClient wired to the app over ASGITransport
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Must run before any paddyhub import: settings and the default stores are
# built at import time.
_BOOT_DIR = tempfile.mkdtemp(prefix="paddyhub_test_")
for _name, _var in (("car", "CAR_DATABASE_URL"), ("qr", "QR_DATABASE_URL"), ("stock", "STOCK_DATABASE_URL")):
    os.environ[_var] = f"sqlite+aiosqlite:///{_BOOT_DIR}/{_name}.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from paddyhub import database  # noqa: E402
from paddyhub.database import CarBase, DocumentStore, QrBase, StockBase  # noqa: E402

# Register every table on its base
import paddyhub.models.car_arrival  # noqa: E402,F401
import paddyhub.models.scan  # noqa: E402,F401
import paddyhub.models.stock  # noqa: E402,F401


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list_scans_failure(mock_db_session):
            mock_db_session.execute.side_effect = RuntimeError("boom")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.get_bind = MagicMock()
    session.get_bind.return_value.dialect.name = "sqlite"
    return session


@pytest_asyncio.fixture
async def sqlite_stores(tmp_path, monkeypatch):
    """
    Swap the three live stores for fresh SQLite databases in tmp_path.

    Tables are created up front; engines are disposed after the test so no
    connection outlives the event loop it was opened on.
    """
    fresh = {
        "car": DocumentStore("car", f"sqlite+aiosqlite:///{tmp_path}/car.db", CarBase.metadata),
        "qr": DocumentStore("qr", f"sqlite+aiosqlite:///{tmp_path}/qr.db", QrBase.metadata),
        "stock": DocumentStore("stock", f"sqlite+aiosqlite:///{tmp_path}/stock.db", StockBase.metadata),
    }
    for name, store in fresh.items():
        await store.create_all()
        monkeypatch.setattr(database.stores, name, store)

    yield database.stores

    for store in fresh.values():
        await store.dispose()


@pytest_asyncio.fixture
async def test_client(sqlite_stores):
    """
    HTTPX AsyncClient talking straight to the FastAPI app.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from paddyhub.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
