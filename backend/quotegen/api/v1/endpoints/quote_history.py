"""
Quote history and export endpoints.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.session import get_db
from quotegen.controllers.quote_controller import QuoteController, ExportResult
from quotegen.schemas.quote import (
    QuoteHistoryItemResponse,
    QuoteHistoryListResponse,
    AnalysisReport,
)

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Quote history item not found",
    )


def _content_disposition(filename: str) -> str:
    # header values must be latin-1; non-ASCII names travel in filename*
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "").replace("\\", "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _download(result: ExportResult) -> StreamingResponse:
    if result is None:
        raise _not_found()
    output, filename, media_type = result
    return StreamingResponse(
        output,
        media_type=media_type,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.get("", response_model=QuoteHistoryListResponse)
async def list_quote_history(
    db: AsyncSession = Depends(get_db),
) -> QuoteHistoryListResponse:
    """List saved quotes."""
    controller = QuoteController(db)
    return await controller.list_history()


@router.get("/{history_id}", response_model=QuoteHistoryItemResponse)
async def get_quote_history_item(
    history_id: str,
    db: AsyncSession = Depends(get_db),
) -> QuoteHistoryItemResponse:
    """Get a saved quote by id."""
    controller = QuoteController(db)
    entry = await controller.get_history_item(history_id)
    if not entry:
        raise _not_found()
    return entry


@router.get("/{history_id}/analysis", response_model=AnalysisReport)
async def get_quote_analysis_report(
    history_id: str,
    db: AsyncSession = Depends(get_db),
) -> AnalysisReport:
    """Revenue, cost and profit breakdown of a saved quote."""
    controller = QuoteController(db)
    report = await controller.get_analysis_report(history_id)
    if not report:
        raise _not_found()
    return report


@router.get("/{history_id}/export/quote.xlsx")
async def export_quote_excel(
    history_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Download a saved quote as a spreadsheet."""
    controller = QuoteController(db)
    return _download(await controller.export_quote_excel(history_id))


@router.get("/{history_id}/export/quote.pdf")
async def export_quote_pdf(
    history_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Download a saved quote as a PDF."""
    controller = QuoteController(db)
    return _download(await controller.export_quote_pdf(history_id))


@router.get("/{history_id}/export/analysis.xlsx")
async def export_analysis_excel(
    history_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Download the cost analysis of a saved quote as a spreadsheet."""
    controller = QuoteController(db)
    return _download(await controller.export_analysis_excel(history_id))


@router.get("/{history_id}/export/analysis.pdf")
async def export_analysis_pdf(
    history_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Download the cost analysis of a saved quote as a PDF."""
    controller = QuoteController(db)
    return _download(await controller.export_analysis_pdf(history_id))


@router.get("/{history_id}/export/report.xlsx")
async def export_history_report(
    history_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Download a saved quote with its project header block."""
    controller = QuoteController(db)
    return _download(await controller.export_history_report(history_id))
