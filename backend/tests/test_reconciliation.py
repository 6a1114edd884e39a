"""Tests for the startup catalog / blob store reconciliation."""

from pathlib import Path

from app.services.reconciliation import reconcile
from app.services.upload_pipeline import UploadItem, UploadPipeline


async def test_consistent_store(catalog, blob_store, pdf_bytes):
    """Test a clean store reports nothing."""
    await UploadPipeline(blob_store, catalog).upload_batch([UploadItem(content=pdf_bytes, declared_name='a.pdf')])

    report = await reconcile(catalog, blob_store)

    assert report.consistent
    assert report.partials_removed == 0


async def test_reports_mismatches(catalog, blob_store, pdf_bytes):
    """Test missing blobs, wrong sizes, orphans and partial writes are found."""
    pipeline = UploadPipeline(blob_store, catalog)
    missing, resized = await pipeline.upload_batch([
        UploadItem(content=pdf_bytes, declared_name='missing.pdf'),
        UploadItem(content=pdf_bytes, declared_name='resized.pdf'),
    ])
    base = Path(blob_store.base_path)
    (base / missing.file_name).unlink()
    (base / resized.file_name).write_bytes(b'truncated')
    (base / 'pdf-1-ff-orphan.pdf').write_bytes(pdf_bytes)
    (base / '.deadbeef.part').write_bytes(b'half')

    report = await reconcile(catalog, blob_store)

    assert report.missing_blobs == [missing.id]
    assert report.size_mismatches == [resized.id]
    assert report.orphan_blobs == ['pdf-1-ff-orphan.pdf']
    assert report.partials_removed == 1
    assert not report.consistent
    assert not (base / '.deadbeef.part').exists()
