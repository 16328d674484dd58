"""
Rate card service with business logic.
"""

import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.services.base_service import BaseService
from quotegen.db.repositories.rate_card_repository import RateCardRepository
from quotegen.schemas.rate_card import (
    RateCardItemCreate,
    RateCardItemUpdate,
    RateCardItemResponse,
    RateCardResponse,
)

logger = logging.getLogger(__name__)


class RateCardService(BaseService):
    """Service for rate card operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.rate_card_repo = RateCardRepository(session)

    async def get_rate_card(self) -> RateCardResponse:
        """Get every rate card item ordered by id."""
        items = await self.rate_card_repo.list_all()
        return RateCardResponse(
            items=[RateCardItemResponse.model_validate(item) for item in items],
            total=len(items),
        )

    async def replace_rate_card(self, items: List[RateCardItemCreate]) -> RateCardResponse:
        """Clear the rate card and insert the given items."""
        await self.rate_card_repo.replace_all([item.model_dump() for item in items])
        await self.session.commit()
        logger.info("Rate card replaced", extra={"item_count": len(items)})
        return await self.get_rate_card()

    async def get_item(self, item_id: str) -> Optional[RateCardItemResponse]:
        """Get rate card item by id."""
        item = await self.rate_card_repo.get(item_id)
        if not item:
            return None
        return RateCardItemResponse.model_validate(item)

    async def add_item(self, item_data: RateCardItemCreate) -> RateCardItemResponse:
        """Insert an item; an existing item with the same id is overwritten."""
        item = await self.rate_card_repo.upsert(**item_data.model_dump())
        await self.session.commit()
        return RateCardItemResponse.model_validate(item)

    async def update_item(self, item_id: str, item_data: RateCardItemUpdate) -> RateCardItemResponse:
        """Overwrite the item stored under item_id, creating it if absent."""
        item = await self.rate_card_repo.upsert(id=item_id, **item_data.model_dump())
        await self.session.commit()
        return RateCardItemResponse.model_validate(item)

    async def delete_item(self, item_id: str) -> bool:
        """Delete a rate card item."""
        deleted = await self.rate_card_repo.delete(item_id)
        await self.session.commit()
        return deleted

    async def update_standard_cost(self, item_id: str, standard_cost: float) -> Optional[RateCardItemResponse]:
        """Change one item's standard cost. Returns None for unknown ids."""
        item = await self.rate_card_repo.update_standard_cost(item_id, standard_cost)
        if not item:
            return None
        await self.session.commit()
        logger.info(
            "Standard cost updated",
            extra={"item_id": item_id, "standard_cost": standard_cost},
        )
        return RateCardItemResponse.model_validate(item)
