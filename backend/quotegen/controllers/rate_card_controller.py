"""
Rate card controller.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.controllers.base_controller import BaseController
from quotegen.services.rate_card_service import RateCardService
from quotegen.services.excel_import_service import ExcelImportService
from quotegen.schemas.rate_card import (
    RateCardItemCreate,
    RateCardItemUpdate,
    RateCardItemResponse,
    RateCardResponse,
    RateCardImportResponse,
)


class RateCardController(BaseController):
    """Controller for rate card operations."""

    def __init__(self, session: AsyncSession):
        self.rate_card_service = RateCardService(session)
        self.import_service = ExcelImportService(session)

    async def get_rate_card(self) -> RateCardResponse:
        """Get the whole rate card."""
        return await self.rate_card_service.get_rate_card()

    async def replace_rate_card(self, items: List[RateCardItemCreate]) -> RateCardResponse:
        """Replace the whole rate card."""
        return await self.rate_card_service.replace_rate_card(items)

    async def get_item(self, item_id: str) -> Optional[RateCardItemResponse]:
        """Get a rate card item by id."""
        return await self.rate_card_service.get_item(item_id)

    async def add_item(self, item_data: RateCardItemCreate) -> RateCardItemResponse:
        """Add a rate card item."""
        return await self.rate_card_service.add_item(item_data)

    async def update_item(self, item_id: str, item_data: RateCardItemUpdate) -> RateCardItemResponse:
        """Update a rate card item."""
        return await self.rate_card_service.update_item(item_id, item_data)

    async def delete_item(self, item_id: str) -> bool:
        """Delete a rate card item."""
        return await self.rate_card_service.delete_item(item_id)

    async def update_standard_cost(self, item_id: str, standard_cost: float) -> Optional[RateCardItemResponse]:
        """Change the standard cost of one item."""
        return await self.rate_card_service.update_standard_cost(item_id, standard_cost)

    async def import_rate_card(self, filename: str, content: bytes) -> RateCardImportResponse:
        """Replace the rate card from an uploaded CSV or XLSX file."""
        return await self.import_service.import_rate_card(filename, content)
