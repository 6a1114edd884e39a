"""Application configuration from environment variables."""
from sqlalchemy.engine import URL
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config comes from env vars or .env.backend file."""

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5000
    CLIENT_URL: str = "http://localhost:3000"  # comma separated for several origins

    # Blob storage
    UPLOAD_DIR: str = "./uploads"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024
    MAX_FILES_PER_UPLOAD: int = 10

    # Database (DATABASE_URL wins when set)
    DATABASE_URL: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "pdf_upload"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""

    RECENT_UPLOAD_DAYS: int = 7
    DISPLAY_TIMEZONE: str = "UTC"
    RECONCILE_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env.backend"
        env_file_encoding = "utf-8"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CLIENT_URL.split(",") if o.strip()]
