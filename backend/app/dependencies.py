"""FastAPI providers that assemble the services for one request."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import get_db
from app.services.blob_store import BlobStore
from app.services.catalog import Catalog
from app.services.query_service import QueryService
from app.services.upload_pipeline import UploadPipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_catalog(db: AsyncSession = Depends(get_db)) -> Catalog:
    return Catalog(db)


def get_upload_pipeline(
    settings: Settings = Depends(get_settings),
    blob_store: BlobStore = Depends(get_blob_store),
    catalog: Catalog = Depends(get_catalog),
) -> UploadPipeline:
    return UploadPipeline(blob_store, catalog, display_timezone=settings.DISPLAY_TIMEZONE)


def get_query_service(
    settings: Settings = Depends(get_settings),
    blob_store: BlobStore = Depends(get_blob_store),
    catalog: Catalog = Depends(get_catalog),
) -> QueryService:
    return QueryService(
        catalog,
        blob_store,
        recent_days=settings.RECENT_UPLOAD_DAYS,
        display_timezone=settings.DISPLAY_TIMEZONE,
    )
