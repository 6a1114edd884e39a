"""Shared fixtures for backend tests."""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import create_engine, create_session_factory
from app.main import create_app
from app.models import Base
from app.services.blob_store import BlobStore
from app.services.catalog import Catalog

PDF_BYTES = b'%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer\n%%EOF\n'


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary SQLite database and upload dir.

    Returns:
        Settings instance isolated to this test.
    """
    return Settings(
        DATABASE_URL=f'sqlite+aiosqlite:///{tmp_path / "catalog.db"}',
        UPLOAD_DIR=str(tmp_path / 'uploads'),
        MAX_FILE_SIZE=64 * 1024,
        CLIENT_URL='http://localhost:3000',
    )


@pytest.fixture
def client(settings):
    """Test client with the application lifespan running.

    Yields:
        FastAPI TestClient.
    """
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def session_factory(settings):
    """Session factory over a freshly created schema.

    Yields:
        async_sessionmaker bound to the test database.
    """
    engine = create_engine(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
async def catalog(session_factory):
    """Catalog bound to a single session.

    Yields:
        Catalog instance.
    """
    async with session_factory() as session:
        yield Catalog(session)


@pytest.fixture
def blob_store(settings):
    """Blob store rooted in the temporary upload dir.

    Returns:
        BlobStore instance with its directory created.
    """
    store = BlobStore(settings.UPLOAD_DIR)
    store.ensure_ready()
    return store


@pytest.fixture
def pdf_bytes():
    """Minimal PDF-looking payload.

    Returns:
        Bytes of a tiny PDF document.
    """
    return PDF_BYTES
