"""Read-side views over the catalog: listing, stats, download and delete."""
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from app.errors import NotFoundError, StorageError
from app.models.base import utcnow
from app.models.pdf_file import PdfFile
from app.services.blob_store import BlobStore
from app.services.catalog import Catalog
from app.services.formatting import FileView, format_file_size, to_file_view

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@dataclass
class FileListing:
    files: list[FileView]
    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)


@dataclass
class UsageStats:
    total_files: int
    total_size: str
    recent_uploads: int


@dataclass
class DownloadTarget:
    path: str
    filename: str
    media_type: str = PDF_MEDIA_TYPE


def parse_file_id(file_id: str) -> uuid.UUID:
    """Ids that are not UUIDs cannot exist in the catalog."""
    try:
        return uuid.UUID(str(file_id))
    except ValueError as e:
        raise NotFoundError("File not found") from e


class QueryService:
    def __init__(
        self,
        catalog: Catalog,
        blob_store: BlobStore,
        recent_days: int = 7,
        display_timezone: str = "UTC",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.catalog = catalog
        self.blob_store = blob_store
        self.recent_days = recent_days
        self.display_timezone = display_timezone
        self.clock = clock

    async def list_files(self, search: Optional[str] = None, page: int = 1, page_size: int = 10) -> FileListing:
        search = (search or "").strip() or None
        result = await self.catalog.list_page(search=search, page=page, page_size=page_size)
        return FileListing(
            files=[to_file_view(r, self.display_timezone) for r in result.records],
            page=page,
            page_size=page_size,
            total=result.total,
        )

    async def stats(self) -> UsageStats:
        since = self.clock() - timedelta(days=self.recent_days)
        stats = await self.catalog.aggregate_stats(since)
        return UsageStats(
            total_files=stats.count,
            total_size=format_file_size(stats.total_size_bytes),
            recent_uploads=stats.recent_count,
        )

    async def get_download(self, file_id: str) -> DownloadTarget:
        record = await self._require(file_id)
        if not await self.blob_store.exists(record.storage_path):
            logger.warning(f"Blob missing for file {record.id} at {record.storage_path}")
            raise NotFoundError("Physical file not found")
        return DownloadTarget(path=record.storage_path, filename=f"{record.custom_name}.pdf")

    async def delete(self, file_id: str) -> PdfFile:
        """Remove the catalog row, then the blob. The row removal is what counts."""
        record = await self.catalog.delete_by_id(parse_file_id(file_id))
        if not record:
            raise NotFoundError("File not found")
        try:
            removed = await self.blob_store.remove(record.storage_path)
        except StorageError as e:
            logger.error(f"File {record.id} deleted but its blob could not be removed: {e.message}")
        else:
            if not removed:
                logger.warning(f"File {record.id} deleted; blob was already missing at {record.storage_path}")
        logger.info(f"Deleted file {record.id} ({record.storage_name})")
        return record

    async def _require(self, file_id: str) -> PdfFile:
        record = await self.catalog.get_by_id(parse_file_id(file_id))
        if not record:
            raise NotFoundError("File not found")
        return record
