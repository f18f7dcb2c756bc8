"""
HotWheels API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked session, seeded SQLite
       catalog, API client).

Fixtures:
    ├── mock_db_session:   AsyncMock standing in for AsyncSession (service tests)
    ├── sample_rows:       Raw catalog rows as the database would return them
    ├── test_settings:     Settings with a known storage account, bucket and ceiling
    ├── catalog_db:        Real SQLite catalog (aiosqlite) seeded with sample_rows
    ├── empty_catalog_db:  Same table, no rows
    └── test_client:       HTTPX AsyncClient talking to the app over ASGITransport,
                           wired to catalog_db
"""

import os
import tempfile

# Override settings BEFORE any application import: config.settings and the
# database engine are built at import time.
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="hotwheels_test_"), "unused.db")
)
os.environ["STORAGE_ACCOUNT_ID"] = "test-account"
os.environ["STORAGE_DOMAIN"] = "storage.example.com"
os.environ["BUCKET_NAME"] = "test-bucket"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict, List  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hotwheels_api.config import Settings  # noqa: E402
from hotwheels_api.database import get_db_session  # noqa: E402

IMAGE_BASE_URL = "https://test-account.storage.example.com/test-bucket"

CREATE_CATALOG_TABLE = text(
    "CREATE TABLE HotWheels ("
    " id TEXT PRIMARY KEY,"
    " nombre TEXT,"
    " serie TEXT,"
    " anio INTEGER,"
    " portada TEXT,"
    " categoria TEXT"
    ")"
)
INSERT_CATALOG_ROW = text(
    "INSERT INTO HotWheels (id, nombre, serie, anio, portada, categoria)"
    " VALUES (:id, :nombre, :serie, :anio, :portada, :categoria)"
)


@pytest.fixture
def mock_db_session():
    """
    Mock AsyncSession.

    Usage:
        result = MagicMock()
        result.mappings.return_value.all.return_value = rows
        mock_db_session.execute.return_value = result
    """
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def sample_rows() -> List[Dict]:
    """Catalog rows in the shape the catalog loader writes them."""
    return [
        {
            "id": "ID000101",
            "nombre": "Twin Mill",
            "serie": "HW Legends",
            "anio": 2021,
            "portada": "ID000101.webp",
            "categoria": '["TH"]',
        },
        {
            "id": "ID000209",
            "nombre": "Bone Shaker",
            "serie": "HW Dream Garage",
            "anio": 2022,
            "portada": "ID000209.webp",
            "categoria": '["STH", "TH"]',
        },
        {
            "id": "ID000305",
            "nombre": "Deora II",
            "serie": "HW Surf's Up",
            "anio": 2023,
            "portada": None,
            "categoria": None,
        },
    ]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        storage_account_id="test-account",
        storage_domain="storage.example.com",
        bucket_name="test-bucket",
        max_records=16000,
    )


async def _build_catalog(path: str, rows: List[Dict]):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    async with engine.begin() as conn:
        await conn.execute(CREATE_CATALOG_TABLE)
        if rows:
            await conn.execute(INSERT_CATALOG_ROW, rows)
    return engine


@pytest_asyncio.fixture
async def catalog_db(tmp_path, sample_rows) -> AsyncGenerator[async_sessionmaker, None]:
    """Session factory bound to a fresh SQLite catalog holding sample_rows."""
    engine = await _build_catalog(str(tmp_path / "catalog.db"), sample_rows)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def empty_catalog_db(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Session factory bound to a SQLite catalog with the table but no rows."""
    engine = await _build_catalog(str(tmp_path / "empty.db"), [])
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


def _client_for(session_factory: async_sessionmaker):
    from hotwheels_api.main import app

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    return app


@pytest_asyncio.fixture
async def test_client(catalog_db) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient for the app, reading from the seeded SQLite catalog.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/all-models")
            assert response.status_code == 200
    """
    app = _client_for(catalog_db)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def empty_client(empty_catalog_db) -> AsyncGenerator[AsyncClient, None]:
    """Same as test_client, against an empty catalog."""
    app = _client_for(empty_catalog_db)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
