"""Shared Pydantic schemas."""
from pydantic import BaseModel
from app.schemas.base import ApiResponse


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class MessageResponse(ApiResponse):
    message: str


class HealthResponse(ApiResponse):
    message: str
    timestamp: str
    database: str
