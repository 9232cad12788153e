# gemini_relay/core/config.py
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./gemini_relay.db"
    AUTO_CREATE_TABLES: bool = True

    # Gemini
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-pro"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 120.0
    EMPTY_REPLY_PLACEHOLDER: str = "(no reply)"

    # Conversations
    TITLE_MAX_CHARS: int = 30

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_FILESIZE_MB: int = 50
    ALLOWED_MIME_TYPES: str = (
        "image/jpeg,image/png,image/gif,application/pdf,application/msword,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
        "text/plain"
    )
    PUBLIC_BASE_URL: str = "http://localhost:3001"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    ALLOWED_ORIGINS: str = "*"
    MAX_BODY_MB: int = 60
    LOG_LEVEL: str = "INFO"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string to list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def get_allowed_mime_types(self) -> List[str]:
        return [mime.strip() for mime in self.ALLOWED_MIME_TYPES.split(",") if mime.strip()]

    def is_mime_type_supported(self, mime_type: str) -> bool:
        return mime_type in self.get_allowed_mime_types()

    @property
    def max_filesize_bytes(self) -> int:
        return self.MAX_FILESIZE_MB * 1024 * 1024

    @property
    def max_body_bytes(self) -> int:
        return self.MAX_BODY_MB * 1024 * 1024

    def get_upload_dir(self) -> Path:
        path = Path(self.UPLOAD_DIR)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def public_url(self, file_path: str) -> str:
        """Absolute URL for a stored file path such as /uploads/<name>"""
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}{file_path}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
