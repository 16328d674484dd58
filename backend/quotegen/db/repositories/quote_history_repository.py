"""
Quote history repository for database operations.
History rows are only ever inserted and read.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.repositories.base_repository import BaseRepository
from quotegen.models.quote_history import QuoteHistoryItem


class QuoteHistoryRepository(BaseRepository[QuoteHistoryItem]):
    """Repository for quote history operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(QuoteHistoryItem, session)
