"""File request/response schemas."""
from app.schemas.base import ApiResponse, CamelModel


class UploadedFile(CamelModel):
    id: str
    custom_name: str
    original_name: str
    file_name: str
    file_size: str
    upload_date: str
    download_url: str


class UploadResponse(ApiResponse):
    message: str
    files: list[UploadedFile]


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class FilesResponse(ApiResponse):
    files: list[UploadedFile]
    pagination: Pagination


class Stats(CamelModel):
    total_files: int
    total_size: str
    recent_uploads: int


class StatsResponse(ApiResponse):
    stats: Stats
