from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    # Project settings
    PROJECT_NAME: str = "Learning Center Document Extraction API"
    API_V1_STR: str = "/api/v1"

    # API URL for documentation and external references
    API_URL: str = "http://localhost:8000"

    # CORS settings
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000"]

    # Environment
    ENV: str = "development"
    WORKERS: int = 1

    # Logging
    LOG_LEVEL: str = "INFO"
    ENABLE_JSON_LOGS: Optional[bool] = None  # None: JSON everywhere except development

    # Upload limits
    MAX_UPLOAD_SIZE_MB: int = 100

    # Content processing settings
    CHUNK_SIZE: int = 2000  # characters per chunk for AI ingestion

    # Extraction behaviour
    PDF_EXTRACTION_ENABLED: bool = False
    PPTX_SLIDE_ORDER: str = "numeric"  # Options: numeric, archive

    @field_validator("PPTX_SLIDE_ORDER")
    @classmethod
    def validate_slide_order(cls, v):
        v = v.lower()
        if v not in ["numeric", "archive"]:
            raise ValueError("PPTX_SLIDE_ORDER must be 'numeric' or 'archive'")
        return v

    @field_validator("CHUNK_SIZE", "MAX_UPLOAD_SIZE_MB")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be a positive integer")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return v

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding='utf-8',
        extra='ignore'
    )


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance"""
    return Settings()


# Initialize settings
settings = get_settings()
