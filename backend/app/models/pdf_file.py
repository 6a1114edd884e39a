"""PdfFile model - PDF metadata (actual bytes live in the blob store)."""
import uuid
from sqlalchemy import String, BigInteger, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, UploadTimestampMixin


class PdfFile(Base, UploadTimestampMixin):
    __tablename__ = "pdf_files"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    custom_name: Mapped[str] = mapped_column(String(255), nullable=False)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    storage_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    storage_path: Mapped[str] = mapped_column(String(500), nullable=False)
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        Index("idx_pdf_files_custom_name", "custom_name"),
        Index("idx_pdf_files_uploaded_at", "uploaded_at"),
    )

    def __repr__(self) -> str:
        return f"<PdfFile {self.id} {self.custom_name!r}>"
