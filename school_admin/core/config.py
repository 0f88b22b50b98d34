from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    # Pool bounds: at most pool_size + max_overflow units of work are open at once.
    db_pool_size: int = Field(5, alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(5, alias="DB_MAX_OVERFLOW")
    db_pool_timeout: float = Field(30.0, alias="DB_POOL_TIMEOUT")
    db_pool_recycle: int = Field(300, alias="DB_POOL_RECYCLE")

    db_retry_delay: float = Field(5.0, alias="DB_RETRY_DELAY")
    db_max_retries: int = Field(0, alias="DB_MAX_RETRIES")  # 0 = until stopped

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
