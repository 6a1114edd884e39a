"""Startup check that the catalog and the blob store agree.

Uploads and deletes are not atomic across the two stores, so a crash can
leave a record without its blob or a blob without its record. Nothing is
deleted here apart from temporary files from interrupted writes; mismatches
are reported so they can be fixed by hand.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path

from app.services.blob_store import BlobStore
from app.services.catalog import Catalog

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    missing_blobs: list[str] = field(default_factory=list)
    size_mismatches: list[str] = field(default_factory=list)
    orphan_blobs: list[str] = field(default_factory=list)
    partials_removed: int = 0

    @property
    def consistent(self) -> bool:
        return not (self.missing_blobs or self.size_mismatches or self.orphan_blobs)


async def reconcile(catalog: Catalog, blob_store: BlobStore) -> ReconciliationReport:
    report = ReconciliationReport()
    report.partials_removed = await blob_store.remove_partials()
    if report.partials_removed:
        logger.info(f"Removed {report.partials_removed} interrupted upload(s)")

    known_names = set()
    for record in await catalog.all_records():
        known_names.add(Path(record.storage_path).name)
        size = await blob_store.size(record.storage_path)
        if size is None:
            report.missing_blobs.append(str(record.id))
            logger.warning(f"File {record.id} has no blob at {record.storage_path}")
        elif size != record.size_bytes:
            report.size_mismatches.append(str(record.id))
            logger.warning(
                f"File {record.id} blob size {size} does not match recorded {record.size_bytes}"
            )

    for name in await blob_store.list_storage_names():
        if name not in known_names:
            report.orphan_blobs.append(name)
            logger.warning(f"Blob {name} has no catalog record")

    if report.consistent:
        logger.info("Catalog and blob store are consistent")
    return report
