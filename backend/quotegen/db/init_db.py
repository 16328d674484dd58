"""
Database bootstrapping.
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from quotegen.db.base import Base
from quotegen.core.logging import get_logger

# Registers every model with Base.metadata
import quotegen.models  # noqa: F401

logger = get_logger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create all database tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "Database tables initialized",
        extra={"tables": sorted(Base.metadata.tables.keys())},
    )
