"""
PostgreSQL settings for the pgvector chunk index.

Only read when VECTOR_STORE_STORE_TYPE=pgvector; the in-memory index
never opens a connection.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL

from legally.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Connection and pool parameters (``POSTGRES_*``)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: SecretStr = Field(default=SecretStr("postgres"), description="PostgreSQL password")
    db: str = Field(default="legally", description="Database holding the document_chunks table")
    sslmode: Literal["disable", "prefer", "require"] = Field(
        default="prefer",
        description="'require' for managed Postgres (Supabase, RDS)",
    )

    pool_size: int = Field(default=10, ge=1, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, description="Connections allowed beyond pool_size")
    pool_timeout: int = Field(default=30, ge=1, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    @property
    def async_database_url(self) -> str:
        """
        asyncpg URL for SQLAlchemy, with the password escaped.

        asyncpg takes ``ssl`` rather than libpq's ``sslmode``.
        """
        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.user,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.db,
            query={"ssl": "require"} if self.sslmode == "require" else {},
        )
        return url.render_as_string(hide_password=False)
