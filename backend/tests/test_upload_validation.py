"""Tests for request-level upload checks and error mapping."""

import pytest

from app.errors import (
    INTERNAL_ERROR_MESSAGE,
    DependencyError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from app.services.upload_validation import check_batch_size, check_file, parse_custom_names

MAX = 10 * 1024 * 1024


def test_parse_custom_names():
    """Test absent, empty and populated customNames fields."""
    assert parse_custom_names(None) == []
    assert parse_custom_names('  ') == []
    assert parse_custom_names('[]') == []
    assert parse_custom_names('["Alpha", null, "Beta"]') == ['Alpha', None, 'Beta']


@pytest.mark.parametrize('raw', ['[', '"Alpha"', '{"0": "Alpha"}', '[["nested"]]', '[3]'])
def test_parse_custom_names_malformed(raw):
    """Test anything but a JSON array of strings is rejected."""
    with pytest.raises(ValidationError):
        parse_custom_names(raw)


def test_check_batch_size():
    """Test batches must hold between one and the maximum number of files."""
    check_batch_size(1, 10)
    check_batch_size(10, 10)
    with pytest.raises(ValidationError, match='No files selected'):
        check_batch_size(0, 10)
    with pytest.raises(ValidationError):
        check_batch_size(11, 10)


@pytest.mark.parametrize('mime', ['application/pdf', 'application/x-pdf', 'Application/PDF'])
def test_check_file_accepts_pdf(mime):
    """Test both PDF MIME types pass at exactly the size limit."""
    check_file('a.pdf', mime, MAX, MAX)


@pytest.mark.parametrize('mime', [None, '', 'text/plain', 'image/png'])
def test_check_file_rejects_other_types(mime):
    """Test non-PDF MIME types are rejected."""
    with pytest.raises(ValidationError, match='Only PDF'):
        check_file('a.pdf', mime, 10, MAX)


def test_check_file_rejects_oversized():
    """Test one byte over the limit is rejected with the limit in the message."""
    with pytest.raises(ValidationError, match='10MB'):
        check_file('a.pdf', 'application/pdf', MAX + 1, MAX)


def test_error_status_and_public_message():
    """Test client errors keep their message and server errors are generic."""
    assert ValidationError('bad').status_code == 400
    assert ValidationError('bad').public_message == 'bad'
    assert NotFoundError('File not found').status_code == 404
    for error in (StorageError('/srv/uploads/x: EIO'), DependencyError('connection refused')):
        assert error.status_code == 500
        assert error.public_message == INTERNAL_ERROR_MESSAGE
