from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, with_async_driver


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "qna"

    # Full connection URL; when set it wins over the POSTGRES_* parts
    DATABASE_URL: str | None = None

    # Connection pool
    DB_MAX_CONNECTIONS: int = 5
    DB_POOL_TIMEOUT: float = 30.0
    DB_CREATE_TABLES: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # HTTP server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/qna")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        """
        Return the URL handed to `create_async_engine`.

        - An explicit `DATABASE_URL` is used as-is, except that bare `postgres://` /
          `postgresql://` URLs are pointed at the configured async driver.
        - Otherwise the URL is assembled from the `POSTGRES_*` parts.
        """
        if self.DATABASE_URL:
            return with_async_driver(self.DATABASE_URL, self.POSTGRES_DRIVER)

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Upper-case LOG_LEVEL before the Literal check so `LOG_LEVEL=debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("DB_MAX_CONNECTIONS")
    @classmethod
    def positive_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DB_MAX_CONNECTIONS must be at least 1")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # unrelated variables in .env (e.g. RUST_LOG from older deployments) are ignored
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached with lru_cache.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
