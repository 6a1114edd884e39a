"""Upload pipeline: name resolution, blob write and catalog insert per file.

Items are processed in request order and each one commits on its own. There
is no transaction spanning the blob store and the catalog: if an item fails,
files committed before it stay in place and the whole call fails. The blob of
the failing item is removed again when its catalog insert fails, and every
committed item is logged so a partial batch can be reconciled.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from app.errors import FileServiceError, StorageError
from app.models.base import utcnow
from app.models.pdf_file import PdfFile
from app.services.blob_store import BlobStore
from app.services.catalog import Catalog
from app.services.formatting import FileView, to_file_view

logger = logging.getLogger(__name__)

DEFAULT_DECLARED_NAME = "unnamed.pdf"
DEFAULT_MIME_TYPE = "application/pdf"
_MAX_NAME = 255


@dataclass
class UploadItem:
    content: bytes
    declared_name: Optional[str]
    custom_name: Optional[str] = None
    mime_type: str = DEFAULT_MIME_TYPE


def build_items(
    files: list[tuple[bytes, Optional[str], str]],
    custom_names: list[Optional[str]],
) -> list[UploadItem]:
    """Pair each (content, declared name, mime type) with its custom name, if any."""
    items = []
    for index, (content, declared_name, mime_type) in enumerate(files):
        custom = custom_names[index] if index < len(custom_names) else None
        items.append(UploadItem(content=content, declared_name=declared_name, custom_name=custom, mime_type=mime_type))
    return items


def resolve_original_name(declared_name: Optional[str]) -> str:
    name = (declared_name or "").strip()
    return (name or DEFAULT_DECLARED_NAME)[:_MAX_NAME]


def resolve_display_name(original_name: str, custom_name: Optional[str]) -> str:
    """Trimmed custom name, else the original name without its .pdf extension."""
    if custom_name and custom_name.strip():
        return custom_name.strip()[:_MAX_NAME]
    name = original_name
    if name.lower().endswith(".pdf"):
        name = name[:-4]
    return name.strip() or "unnamed"


class UploadPipeline:
    def __init__(
        self,
        blob_store: BlobStore,
        catalog: Catalog,
        display_timezone: str = "UTC",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.blob_store = blob_store
        self.catalog = catalog
        self.display_timezone = display_timezone
        self.clock = clock

    async def upload_batch(self, items: list[UploadItem]) -> list[FileView]:
        results = []
        for position, item in enumerate(items):
            try:
                record = await self._upload_one(item)
            except FileServiceError:
                logger.error(
                    f"Upload batch failed at item {position + 1}/{len(items)}; "
                    f"{len(results)} earlier file(s) remain committed: "
                    f"{[r.id for r in results]}"
                )
                raise
            results.append(to_file_view(record, self.display_timezone))
        return results

    async def _upload_one(self, item: UploadItem) -> PdfFile:
        original_name = resolve_original_name(item.declared_name)
        custom_name = resolve_display_name(original_name, item.custom_name)

        blob = await self.blob_store.store(item.content, original_name)
        record = PdfFile(
            id=uuid.uuid4(),
            custom_name=custom_name,
            original_name=original_name,
            storage_name=blob.storage_name,
            storage_path=blob.storage_path,
            size_bytes=len(item.content),
            mime_type=item.mime_type,
            uploaded_at=self.clock(),
        )
        try:
            record = await self.catalog.insert(record)
        except FileServiceError:
            await self._discard_blob(blob.storage_path)
            raise
        logger.info(f"Stored file {record.id} as {record.storage_name} ({record.size_bytes} bytes)")
        return record

    async def _discard_blob(self, storage_path: str) -> None:
        try:
            await self.blob_store.remove(storage_path)
        except StorageError as e:
            logger.error(f"Orphaned blob left at {storage_path}: {e.message}")
