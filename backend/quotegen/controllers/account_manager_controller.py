"""
Account manager controller.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.controllers.base_controller import BaseController
from quotegen.services.account_manager_service import AccountManagerService
from quotegen.services.excel_import_service import ExcelImportService
from quotegen.schemas.account_manager import (
    AccountManagerCreate,
    AccountManagerUpdate,
    AccountManagerResponse,
    AccountManagerListResponse,
    AccountManagerImportResponse,
)


class AccountManagerController(BaseController):
    """Controller for account manager operations."""

    def __init__(self, session: AsyncSession):
        self.account_manager_service = AccountManagerService(session)
        self.import_service = ExcelImportService(session)

    async def list_account_managers(self) -> AccountManagerListResponse:
        """List every account manager."""
        managers, total = await self.account_manager_service.list_account_managers()
        return AccountManagerListResponse(items=managers, total=total)

    async def replace_account_managers(self, managers: List[AccountManagerCreate]) -> AccountManagerListResponse:
        """Replace the whole account manager list."""
        items, total = await self.account_manager_service.replace_account_managers(managers)
        return AccountManagerListResponse(items=items, total=total)

    async def get_account_manager(self, manager_id: str) -> Optional[AccountManagerResponse]:
        """Get an account manager by id."""
        return await self.account_manager_service.get_account_manager(manager_id)

    async def add_account_manager(self, manager_data: AccountManagerCreate) -> AccountManagerResponse:
        """Add an account manager."""
        return await self.account_manager_service.add_account_manager(manager_data)

    async def update_account_manager(
        self,
        manager_id: str,
        manager_data: AccountManagerUpdate,
    ) -> AccountManagerResponse:
        """Update an account manager."""
        return await self.account_manager_service.update_account_manager(manager_id, manager_data)

    async def delete_account_manager(self, manager_id: str) -> bool:
        """Delete an account manager."""
        return await self.account_manager_service.delete_account_manager(manager_id)

    async def import_account_managers(self, filename: str, content: bytes) -> AccountManagerImportResponse:
        """Replace the account manager list from an uploaded file."""
        return await self.import_service.import_account_managers(filename, content)
