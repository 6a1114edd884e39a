"""Files API routes: upload, list, download, delete."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File as FastAPIFile, Form, Query, UploadFile
from fastapi.responses import FileResponse

from app.config import Settings
from app.dependencies import get_query_service, get_settings, get_upload_pipeline
from app.schemas.common import MessageResponse
from app.schemas.file import FilesResponse, Pagination, UploadedFile, UploadResponse
from app.services.query_service import QueryService
from app.services.upload_pipeline import UploadPipeline, build_items
from app.services.upload_validation import check_batch_size, check_file, parse_custom_names

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/upload", response_model=UploadResponse)
async def upload_files(
    pdf_files: Optional[list[UploadFile]] = FastAPIFile(None, alias="pdfFiles"),
    custom_names: Optional[str] = Form(None, alias="customNames"),
    settings: Settings = Depends(get_settings),
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
):
    """Upload up to MAX_FILES_PER_UPLOAD PDFs, optionally with display names.

    Every file is checked before any of them is stored, so a rejected request
    leaves no records or blobs behind.
    """
    uploads = pdf_files or []
    check_batch_size(len(uploads), settings.MAX_FILES_PER_UPLOAD)
    names = parse_custom_names(custom_names)

    files = []
    for upload in uploads:
        check_file(upload.filename, upload.content_type, upload.size or 0, settings.MAX_FILE_SIZE)
        # read one byte past the limit in case the part size was not reported
        contents = await upload.read(settings.MAX_FILE_SIZE + 1)
        check_file(upload.filename, upload.content_type, len(contents), settings.MAX_FILE_SIZE)
        files.append((contents, upload.filename, upload.content_type.lower()))

    results = await pipeline.upload_batch(build_items(files, names))
    return UploadResponse(
        message=f"{len(results)} file(s) uploaded successfully",
        files=[UploadedFile.model_validate(r) for r in results],
    )


@router.get("/files", response_model=FilesResponse)
async def list_files(
    search: Optional[str] = Query(None, description="Substring of custom or original name"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    service: QueryService = Depends(get_query_service),
):
    """List files newest first, optionally filtered by name."""
    listing = await service.list_files(search=search, page=page, page_size=limit)
    return FilesResponse(
        files=[UploadedFile.model_validate(f) for f in listing.files],
        pagination=Pagination(
            page=listing.page,
            limit=listing.page_size,
            total=listing.total,
            total_pages=listing.total_pages,
        ),
    )


@router.get("/download/{file_id}")
async def download_file(
    file_id: str,
    service: QueryService = Depends(get_query_service),
):
    """Stream a stored PDF under its display name."""
    target = await service.get_download(file_id)
    return FileResponse(path=target.path, filename=target.filename, media_type=target.media_type)


@router.delete("/files/{file_id}", response_model=MessageResponse)
async def delete_file(
    file_id: str,
    service: QueryService = Depends(get_query_service),
):
    """Delete a file record and its stored blob."""
    await service.delete(file_id)
    return MessageResponse(message="File deleted successfully")
