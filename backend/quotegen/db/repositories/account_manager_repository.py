"""
Account manager repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.repositories.base_repository import BaseRepository
from quotegen.models.account_manager import AccountManager


class AccountManagerRepository(BaseRepository[AccountManager]):
    """Repository for account manager operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(AccountManager, session)
