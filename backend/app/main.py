"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import Settings
from app.database import create_engine, create_session_factory, describe_database
from app.errors import register_exception_handlers
from app.models import Base
from app.schemas.common import HealthResponse
from app.services.blob_store import BlobStore
from app.services.catalog import Catalog
from app.services.reconciliation import reconcile

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database, create tables and check storage on startup."""
    settings: Settings = app.state.settings
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    blob_store = BlobStore(settings.UPLOAD_DIR)
    blob_store.ensure_ready()

    logger.info(f"Database: {describe_database(settings.database_url)}")
    logger.info(f"Uploads: {blob_store.base_path.resolve()}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.blob_store = blob_store

    if settings.RECONCILE_ON_STARTUP:
        async with session_factory() as session:
            app.state.reconciliation = await reconcile(Catalog(session), blob_store)

    yield

    # Cleanup
    await engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    app = FastAPI(
        title="PDF Upload API",
        version="1.0.0",
        description="Upload, catalog, search and download PDF files.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check(request: Request, response: Response):
        """Verify API and database connectivity."""
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            async with request.app.state.session_factory() as db:
                await db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Health check could not reach the database: {e}")
            response.status_code = 503
            return HealthResponse(success=False, message="Database unavailable", timestamp=timestamp, database="error")
        return HealthResponse(message="Backend is running", timestamp=timestamp, database="connected")

    # Register routers
    from app.routes.files import router as files_router
    from app.routes.stats import router as stats_router
    app.include_router(files_router)
    app.include_router(stats_router)

    return app


app = create_app()
