"""
Quote service: prices selections against the rate card and keeps quote history.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.services.base_service import BaseService
from quotegen.db.repositories.rate_card_repository import RateCardRepository
from quotegen.db.repositories.quote_history_repository import QuoteHistoryRepository
from quotegen.models.quote_history import QuoteHistoryItem
from quotegen.schemas.quote import (
    QuoteSelection,
    QuoteHeader,
    QuoteLineItem,
    QuoteResponse,
    FullQuoteResponse,
    AnalysisSummary,
    AnalysisReport,
    QuoteHistoryItemResponse,
)
from quotegen.utils.quote_calculator import (
    price_selections,
    analyze_selections,
    build_analysis_report,
)

logger = logging.getLogger(__name__)


class QuoteService(BaseService):
    """Service for quote generation, analysis and history."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.rate_card_repo = RateCardRepository(session)
        self.history_repo = QuoteHistoryRepository(session)

    async def generate_quote(self, selections: List[QuoteSelection]) -> QuoteResponse:
        """Price selections without saving anything."""
        rate_card = await self._load_rate_card(selections)
        items, total = price_selections(selections, rate_card)
        return QuoteResponse(items=items, total=total)

    async def generate_full_quote(
        self,
        header: QuoteHeader,
        selections: List[QuoteSelection],
    ) -> FullQuoteResponse:
        """Price selections and append the result to quote history."""
        rate_card = await self._load_rate_card(selections)
        items, total = price_selections(selections, rate_card)

        now = datetime.now(timezone.utc)
        history_id = self._new_history_id(now)
        await self.history_repo.create(
            id=history_id,
            timestamp=now,
            items=[item.model_dump() for item in items],
            total=total,
            **header.model_dump(),
        )
        await self.session.commit()

        logger.info(
            "Quote saved to history",
            extra={
                "history_id": history_id,
                "line_items": len(items),
                "requested": len(selections),
            },
        )
        return FullQuoteResponse(header=header, items=items, total=total, history_id=history_id)

    async def generate_analysis(self, selections: List[QuoteSelection]) -> AnalysisSummary:
        """Price selections and compute unit margins."""
        rate_card = await self._load_rate_card(selections)
        return analyze_selections(selections, rate_card)

    async def list_history(self) -> tuple[List[QuoteHistoryItemResponse], int]:
        """List every saved quote ordered by id (oldest first)."""
        entries = await self.history_repo.list_all()
        return [self._build_history_response(entry) for entry in entries], len(entries)

    async def get_history_item(self, history_id: str) -> Optional[QuoteHistoryItemResponse]:
        """Get a saved quote by id."""
        entry = await self.history_repo.get(history_id)
        if not entry:
            return None
        return self._build_history_response(entry)

    async def get_analysis_report(self, history_id: str) -> Optional[AnalysisReport]:
        """Build the revenue/cost/profit report for a saved quote."""
        entry = await self.get_history_item(history_id)
        if not entry:
            return None
        return build_analysis_report(entry.header, entry.items)

    async def _load_rate_card(self, selections: List[QuoteSelection]) -> dict:
        """Fetch only the rate card rows the selections refer to."""
        return await self.rate_card_repo.get_many(s.item_id for s in selections)

    @staticmethod
    def _new_history_id(now: datetime) -> str:
        """Timestamp-derived id: quote-{epoch ms}-{random suffix}."""
        return f"quote-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:8]}"

    @staticmethod
    def _build_history_response(entry: QuoteHistoryItem) -> QuoteHistoryItemResponse:
        timestamp = entry.timestamp
        if timestamp.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return QuoteHistoryItemResponse(
            id=entry.id,
            timestamp=timestamp,
            header=QuoteHeader(
                client_name=entry.client_name,
                project_name=entry.project_name,
                account_manager=entry.account_manager,
                project_duration=entry.project_duration,
            ),
            items=[QuoteLineItem.model_validate(item) for item in entry.items],
            total=entry.total,
        )
