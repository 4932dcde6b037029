from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # API
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "CSV Lens"
    VERSION: str = "0.1.0"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # None = console only

    # Request limits (the profiling/cleaning core enforces none itself)
    MAX_ROWS: int = 200_000
    MAX_COLUMNS: int = 1_000
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024

    # Export
    DEFAULT_OUTPUT_DELIMITER: str = ","

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False


settings = Settings()
