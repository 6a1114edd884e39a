"""Import all models so SQLAlchemy metadata knows about them."""
from app.models.base import Base
from app.models.pdf_file import PdfFile

__all__ = ["Base", "PdfFile"]
