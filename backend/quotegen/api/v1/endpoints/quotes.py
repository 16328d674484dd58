"""
Quote generation API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.session import get_db
from quotegen.controllers.quote_controller import QuoteController
from quotegen.schemas.quote import (
    QuoteRequest,
    FullQuoteRequest,
    QuoteResponse,
    FullQuoteResponse,
    AnalysisSummary,
)

router = APIRouter()


@router.post("/generate", response_model=QuoteResponse)
async def generate_quote(
    request: QuoteRequest,
    db: AsyncSession = Depends(get_db),
) -> QuoteResponse:
    """Price (item id, quantity, duration) selections against the rate card."""
    controller = QuoteController(db)
    return await controller.generate_quote(request.selections)


@router.post("/generate-full", response_model=FullQuoteResponse)
async def generate_full_quote(
    request: FullQuoteRequest,
    db: AsyncSession = Depends(get_db),
) -> FullQuoteResponse:
    """Price selections under a header and record the quote in history."""
    controller = QuoteController(db)
    return await controller.generate_full_quote(request.header, request.selections)


@router.post("/analysis", response_model=AnalysisSummary)
async def generate_analysis(
    request: QuoteRequest,
    db: AsyncSession = Depends(get_db),
) -> AnalysisSummary:
    """Price selections and report unit margins."""
    controller = QuoteController(db)
    return await controller.generate_analysis(request.selections)
