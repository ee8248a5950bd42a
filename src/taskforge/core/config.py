"""Application settings.

Values are read, highest priority first, from init kwargs, ``TASKFORGE_*``
environment variables, a ``.env`` file, and the defaults below. Nested
sections use ``__`` as the delimiter, e.g. ``TASKFORGE_POOL__POOL_SIZE=20``.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PoolConfig(BaseModel):
    """Connection pool sizing for the backing store."""

    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_recycle: int = Field(default=1800)
    pool_pre_ping: bool = True


class DbConfig(BaseModel):
    """Everything the database client needs to build its engine."""

    url: str
    pool: PoolConfig = Field(default_factory=PoolConfig)
    echo: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TASKFORGE_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    project_name: str = "Taskforge API"
    version: str = "0.1.0"
    description: str = "Task records with filtering, search, sorting and pagination"
    author: Optional[str] = None
    email: Optional[str] = None

    database_url: str = "sqlite:///./taskforge.db"
    database_echo: bool = False
    auto_create_schema: bool = True
    pool: PoolConfig = Field(default_factory=PoolConfig)

    api_tokens: List[str] = Field(default_factory=list)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    def db_config(self) -> DbConfig:
        return DbConfig(url=self.database_url, pool=self.pool, echo=self.database_echo)


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return Settings()
