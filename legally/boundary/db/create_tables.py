"""
Database table creation script.

Enables the pgvector extension and creates all tables defined in ORM
models using SQLAlchemy metadata.

Dependencies: sqlalchemy, legally.configs
System role: Database schema initialization

Usage:
    python -m legally.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from legally.boundary.db.base import Base
from legally.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from legally.boundary.db.models.document_chunk_model import DocumentChunkModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create the vector extension and all registered tables.

    Idempotent: uses IF NOT EXISTS semantics, so safe to run repeatedly.

    Args:
        engine: Engine to use; defaults to the application engine

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created")


if __name__ == "__main__":
    from legally.observability.logger import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
