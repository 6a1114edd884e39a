"""Human-readable renderings of stored files used in API responses."""
from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from app.models.pdf_file import PdfFile

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]
UPLOAD_DATE_FORMAT = "%d/%m/%Y, %H:%M:%S"


@dataclass
class FileView:
    id: str
    custom_name: str
    original_name: str
    file_name: str
    file_size: str
    upload_date: str
    download_url: str


def format_file_size(size_bytes: int) -> str:
    """Render a byte count with 1024-based units, e.g. 1536 -> "1.5 KB"."""
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{size_bytes / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def format_upload_date(value: datetime, tz_name: str = "UTC") -> str:
    """Localized display string. Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(tz_name)).strftime(UPLOAD_DATE_FORMAT)


def download_url(file_id) -> str:
    return f"/api/download/{file_id}"


def to_file_view(record: PdfFile, tz_name: str = "UTC") -> FileView:
    return FileView(
        id=str(record.id),
        custom_name=record.custom_name,
        original_name=record.original_name,
        file_name=record.storage_name,
        file_size=format_file_size(record.size_bytes),
        upload_date=format_upload_date(record.uploaded_at, tz_name),
        download_url=download_url(record.id),
    )
