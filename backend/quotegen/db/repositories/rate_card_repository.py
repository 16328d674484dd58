"""
Rate card repository for database operations.
"""

from typing import Dict, Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from quotegen.db.repositories.base_repository import BaseRepository
from quotegen.models.rate_card import RateCardItem


class RateCardRepository(BaseRepository[RateCardItem]):
    """Repository for rate card item operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(RateCardItem, session)

    async def get_many(self, item_ids: Iterable[str]) -> Dict[str, RateCardItem]:
        """Fetch the given items keyed by id. Unknown ids are simply absent."""
        ids = set(item_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(RateCardItem).where(RateCardItem.id.in_(ids))
        )
        return {item.id: item for item in result.scalars().all()}

    async def update_standard_cost(self, item_id: str, standard_cost: float) -> Optional[RateCardItem]:
        """Overwrite the standard cost of one item."""
        item = await self.get(item_id)
        if not item:
            return None
        item.standard_cost = standard_cost
        await self.session.flush()
        return item
