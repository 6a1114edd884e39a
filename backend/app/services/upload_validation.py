"""Request-level checks for multipart uploads, run before anything is stored."""
import json

from app.errors import ValidationError

ALLOWED_MIME_TYPES = frozenset({"application/pdf", "application/x-pdf"})


def parse_custom_names(raw: str | None) -> list[str | None]:
    """Parse the customNames form field: a JSON array of strings (or nulls)."""
    if raw is None or not raw.strip():
        return []
    try:
        names = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError("Invalid format for custom names") from e
    if not isinstance(names, list) or not all(n is None or isinstance(n, str) for n in names):
        raise ValidationError("Invalid format for custom names")
    return names


def check_batch_size(count: int, max_files: int) -> None:
    if count == 0:
        raise ValidationError("No files selected")
    if count > max_files:
        raise ValidationError(f"Too many files. Maximum {max_files} files per upload.")


def check_file(filename: str | None, content_type: str | None, size: int, max_size: int) -> None:
    """Reject non-PDF MIME types and files over the size limit."""
    if (content_type or "").lower() not in ALLOWED_MIME_TYPES:
        raise ValidationError(f"Only PDF files are allowed: {filename or 'unnamed'}")
    if size > max_size:
        limit_mb = max_size / (1024 * 1024)
        raise ValidationError(f"File too large: {filename or 'unnamed'}. Maximum {limit_mb:g}MB allowed.")
