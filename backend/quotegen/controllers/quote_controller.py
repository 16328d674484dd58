"""
Quote controller.
Coordinates pricing, quote history and document export.
"""

import io
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.controllers.base_controller import BaseController
from quotegen.services.quote_service import QuoteService
from quotegen.services.excel_export_service import ExcelExportService
from quotegen.services.pdf_export_service import PdfExportService
from quotegen.schemas.quote import (
    QuoteSelection,
    QuoteHeader,
    QuoteResponse,
    FullQuoteResponse,
    AnalysisSummary,
    AnalysisReport,
    QuoteHistoryItemResponse,
    QuoteHistoryListResponse,
)
from quotegen.utils.formatters import export_filename
from quotegen.utils.quote_calculator import build_analysis_report

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

# (stream, download file name, media type); None when the history entry is unknown
ExportResult = Optional[Tuple[io.BytesIO, str, str]]


class QuoteController(BaseController):
    """Controller for quote operations."""

    def __init__(self, session: AsyncSession):
        self.quote_service = QuoteService(session)
        self.excel_export_service = ExcelExportService()
        self.pdf_export_service = PdfExportService()

    async def generate_quote(self, selections: List[QuoteSelection]) -> QuoteResponse:
        """Price selections."""
        return await self.quote_service.generate_quote(selections)

    async def generate_full_quote(
        self,
        header: QuoteHeader,
        selections: List[QuoteSelection],
    ) -> FullQuoteResponse:
        """Price selections under a header and record the quote in history."""
        return await self.quote_service.generate_full_quote(header, selections)

    async def generate_analysis(self, selections: List[QuoteSelection]) -> AnalysisSummary:
        """Price selections with unit margins."""
        return await self.quote_service.generate_analysis(selections)

    async def list_history(self) -> QuoteHistoryListResponse:
        """List saved quotes."""
        entries, total = await self.quote_service.list_history()
        return QuoteHistoryListResponse(items=entries, total=total)

    async def get_history_item(self, history_id: str) -> Optional[QuoteHistoryItemResponse]:
        """Get a saved quote."""
        return await self.quote_service.get_history_item(history_id)

    async def get_analysis_report(self, history_id: str) -> Optional[AnalysisReport]:
        """Get the cost analysis report for a saved quote."""
        return await self.quote_service.get_analysis_report(history_id)

    async def export_quote_excel(self, history_id: str) -> ExportResult:
        entry = await self.quote_service.get_history_item(history_id)
        if not entry:
            return None
        output = self.excel_export_service.export_quote(entry.header, entry.items, entry.total)
        return output, export_filename("quote", entry.header.project_name, "xlsx"), XLSX_MEDIA_TYPE

    async def export_quote_pdf(self, history_id: str) -> ExportResult:
        entry = await self.quote_service.get_history_item(history_id)
        if not entry:
            return None
        output = self.pdf_export_service.export_quote(
            entry.header, entry.items, entry.total, generated_at=entry.timestamp
        )
        return output, export_filename("quote", entry.header.project_name, "pdf"), PDF_MEDIA_TYPE

    async def export_analysis_excel(self, history_id: str) -> ExportResult:
        report = await self.quote_service.get_analysis_report(history_id)
        if not report:
            return None
        output = self.excel_export_service.export_analysis(report)
        return output, export_filename("analysis", report.header.project_name, "xlsx"), XLSX_MEDIA_TYPE

    async def export_analysis_pdf(self, history_id: str) -> ExportResult:
        entry = await self.quote_service.get_history_item(history_id)
        if not entry:
            return None
        report = build_analysis_report(entry.header, entry.items)
        output = self.pdf_export_service.export_analysis(report, generated_at=entry.timestamp)
        return output, export_filename("analysis", report.header.project_name, "pdf"), PDF_MEDIA_TYPE

    async def export_history_report(self, history_id: str) -> ExportResult:
        """Export a saved quote with its header block as a spreadsheet."""
        entry = await self.quote_service.get_history_item(history_id)
        if not entry:
            return None
        output = self.excel_export_service.export_history_report(entry)
        return output, export_filename("quote_report", entry.header.project_name, "xlsx"), XLSX_MEDIA_TYPE
