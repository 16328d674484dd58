"""
Account manager service with business logic.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.services.base_service import BaseService
from quotegen.db.repositories.account_manager_repository import AccountManagerRepository
from quotegen.schemas.account_manager import (
    AccountManagerCreate,
    AccountManagerUpdate,
    AccountManagerResponse,
)


class AccountManagerService(BaseService):
    """Service for account manager operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.account_manager_repo = AccountManagerRepository(session)

    async def list_account_managers(self) -> tuple[List[AccountManagerResponse], int]:
        """List every account manager ordered by id."""
        managers = await self.account_manager_repo.list_all()
        return [AccountManagerResponse.model_validate(m) for m in managers], len(managers)

    async def replace_account_managers(
        self,
        managers: List[AccountManagerCreate],
    ) -> tuple[List[AccountManagerResponse], int]:
        """Clear the list and insert the given managers."""
        await self.account_manager_repo.replace_all([m.model_dump() for m in managers])
        await self.session.commit()
        return await self.list_account_managers()

    async def get_account_manager(self, manager_id: str) -> Optional[AccountManagerResponse]:
        """Get account manager by id."""
        manager = await self.account_manager_repo.get(manager_id)
        if not manager:
            return None
        return AccountManagerResponse.model_validate(manager)

    async def add_account_manager(self, manager_data: AccountManagerCreate) -> AccountManagerResponse:
        """Insert an account manager, overwriting one with the same id."""
        manager = await self.account_manager_repo.upsert(**manager_data.model_dump())
        await self.session.commit()
        return AccountManagerResponse.model_validate(manager)

    async def update_account_manager(
        self,
        manager_id: str,
        manager_data: AccountManagerUpdate,
    ) -> AccountManagerResponse:
        """Overwrite the manager stored under manager_id, creating it if absent."""
        manager = await self.account_manager_repo.upsert(id=manager_id, **manager_data.model_dump())
        await self.session.commit()
        return AccountManagerResponse.model_validate(manager)

    async def delete_account_manager(self, manager_id: str) -> bool:
        """Delete an account manager."""
        deleted = await self.account_manager_repo.delete(manager_id)
        await self.session.commit()
        return deleted
