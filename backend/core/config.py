"""
Lexora Configuration Module
===========================
Centralized configuration management using Pydantic Settings.
All environment variables are validated and typed.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_CONTENT_TYPE = "text/plain"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses Pydantic v2 settings management for type safety and validation.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # === Application ===
    app_name: str = Field(default="Lexora", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")

    # === Upload Limits ===
    max_file_size_mb: int = Field(default=10, description="Maximum file size in MB")
    accepted_content_types: list[str] = Field(
        default=[PDF_CONTENT_TYPE, DOCX_CONTENT_TYPE, TEXT_CONTENT_TYPE],
        description="MIME types accepted for upload"
    )
    upload_chunk_size: int = Field(
        default=1024 * 1024,
        description="Chunk size in bytes used when reading uploads"
    )

    # === In-memory Stores ===
    max_sessions: int = Field(
        default=1000,
        description="Sessions kept in memory before the oldest are evicted"
    )
    max_chat_documents: int = Field(
        default=1000,
        description="Documents with chat history kept before the oldest are evicted"
    )
    max_chat_exchanges: int = Field(
        default=50,
        description="Exchanges kept per document; older ones are dropped"
    )

    # === Server Configuration ===
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"],
        description="Origins allowed by the CORS middleware"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # === Logging ===
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator(
        "max_file_size_mb",
        "upload_chunk_size",
        "max_sessions",
        "max_chat_documents",
        "max_chat_exchanges",
    )
    @classmethod
    def ensure_positive(cls, v: int) -> int:
        """Reject zero or negative sizes."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    settings = Settings()
    return settings


# Reserved document id served by the results page preview
DEMO_DOCUMENT_ID = "demo-document"
