"""Catalog of PDF metadata backed by the pdf_files table."""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import case, desc, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import CatalogConflictError, DependencyError
from app.models.pdf_file import PdfFile

logger = logging.getLogger(__name__)

# largest LIMIT/OFFSET the drivers accept (signed 64-bit)
MAX_SQL_INT = 2**63 - 1


@dataclass
class CatalogPage:
    records: list[PdfFile]
    total: int


@dataclass
class CatalogStats:
    count: int
    total_size_bytes: int
    recent_count: int


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class Catalog:
    """Insert, list, look up and delete PdfFile rows.

    Each write commits on its own, so a reader sees either none or all of a
    single record, never a half-inserted batch item.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, record: PdfFile) -> PdfFile:
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise CatalogConflictError(f"File record {record.id} conflicts with an existing row") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DependencyError(f"Could not insert file record {record.id}: {e}") from e
        await self.db.refresh(record)
        return record

    async def list_page(self, search: str | None = None, page: int = 1, page_size: int = 10) -> CatalogPage:
        """One page of records, newest first, plus the total matching count."""
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be >= 1")

        conditions = []
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    PdfFile.custom_name.ilike(pattern, escape="\\"),
                    PdfFile.original_name.ilike(pattern, escape="\\"),
                )
            )

        offset = (page - 1) * page_size
        try:
            if offset <= MAX_SQL_INT:
                # total comes from the same statement as the rows
                query = (
                    select(PdfFile, func.count().over().label("total"))
                    .where(*conditions)
                    .order_by(desc(PdfFile.uploaded_at), desc(PdfFile.id))
                    .limit(min(page_size, MAX_SQL_INT))
                    .offset(offset)
                )
                rows = (await self.db.execute(query)).all()
                if rows:
                    return CatalogPage(records=[r[0] for r in rows], total=rows[0].total)
            total = await self.db.scalar(select(func.count()).select_from(PdfFile).where(*conditions))
        except SQLAlchemyError as e:
            raise DependencyError(f"Could not list file records: {e}") from e
        return CatalogPage(records=[], total=total or 0)

    async def get_by_id(self, file_id: uuid.UUID) -> PdfFile | None:
        try:
            return await self.db.get(PdfFile, file_id)
        except SQLAlchemyError as e:
            raise DependencyError(f"Could not load file record {file_id}: {e}") from e

    async def delete_by_id(self, file_id: uuid.UUID) -> PdfFile | None:
        """Delete a record and return it, or None if there was nothing to delete."""
        try:
            record = await self.db.get(PdfFile, file_id)
            if not record:
                return None
            await self.db.delete(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DependencyError(f"Could not delete file record {file_id}: {e}") from e
        return record

    async def aggregate_stats(self, since: datetime) -> CatalogStats:
        """Count, total size and count uploaded at or after `since`, in one read."""
        query = select(
            func.count(PdfFile.id),
            func.coalesce(func.sum(PdfFile.size_bytes), 0),
            func.coalesce(func.sum(case((PdfFile.uploaded_at >= since, 1), else_=0)), 0),
        )
        try:
            count, total_size, recent = (await self.db.execute(query)).one()
        except SQLAlchemyError as e:
            raise DependencyError(f"Could not compute file statistics: {e}") from e
        return CatalogStats(count=int(count), total_size_bytes=int(total_size), recent_count=int(recent))

    async def all_records(self) -> list[PdfFile]:
        try:
            result = await self.db.execute(select(PdfFile).order_by(PdfFile.uploaded_at))
        except SQLAlchemyError as e:
            raise DependencyError(f"Could not read file records: {e}") from e
        return list(result.scalars().all())
