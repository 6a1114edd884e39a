"""Tests for size and date formatting."""

from datetime import datetime, timezone

import pytest

from app.services.formatting import format_file_size, format_upload_date


@pytest.mark.parametrize(
    ('size_bytes', 'expected'),
    [
        (0, '0 Bytes'),
        (1, '1 Bytes'),
        (1023, '1023 Bytes'),
        (1024, '1 KB'),
        (1536, '1.5 KB'),
        (1234567, '1.18 MB'),
        (10 * 1024 * 1024, '10 MB'),
        (3 * 1024 ** 3, '3 GB'),
        (2048 * 1024 ** 3, '2048 GB'),
    ],
)
def test_format_file_size(size_bytes, expected):
    """Test 1024-based units with trailing zeros dropped."""
    assert format_file_size(size_bytes) == expected


def test_format_upload_date_aware():
    """Test aware datetimes are rendered in the display timezone."""
    value = datetime(2026, 3, 5, 14, 7, 9, tzinfo=timezone.utc)

    assert format_upload_date(value) == '05/03/2026, 14:07:09'
    assert format_upload_date(value, 'America/Sao_Paulo') == '05/03/2026, 11:07:09'


def test_format_upload_date_naive_is_utc():
    """Test naive datetimes (as returned by SQLite) are treated as UTC."""
    value = datetime(2026, 12, 31, 23, 59, 0)

    assert format_upload_date(value) == '31/12/2026, 23:59:00'
