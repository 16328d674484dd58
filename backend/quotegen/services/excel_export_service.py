"""
Excel export service for quotes and analysis reports.
"""

import logging
import io
from typing import List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from quotegen.core.exceptions import ExportError
from quotegen.schemas.quote import (
    QuoteHeader,
    QuoteLineItem,
    AnalysisReport,
    QuoteHistoryItemResponse,
)
from quotegen.utils.formatters import format_percentage, format_timestamp

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")
MONEY_FORMAT = "#,##0.00"
EMPTY_DESCRIPTION = "—"

QUOTE_COLUMNS = [
    "S.No", "Item Ref No", "Category", "Subcategory", "Description",
    "Quantity", "Duration", "Standard Cost", "Total",
]
REPORT_COLUMNS = [
    "S.No", "Item Ref No", "Category", "Subcategory", "Description",
    "Quantity", "Duration", "Unit Cost", "Total",
]
ANALYSIS_COLUMNS = [
    "#", "Ref", "Description", "Qty", "Dur", "Ops Cost",
    "Std Cost", "Margin", "Margin %", "Revenue", "Profit",
]


class ExcelExportService:
    """Service for exporting quotes and analysis reports to Excel."""

    def export_quote(self, header: QuoteHeader, items: Sequence[QuoteLineItem], total: float) -> io.BytesIO:
        """Export a quote as a single-sheet workbook with a grand total row."""
        wb = Workbook()
        ws = wb.active
        ws.title = "Quote"

        self._write_table_header(ws, 1, QUOTE_COLUMNS)
        row = self._write_line_items(ws, 2, items)
        self._write_grand_total(ws, row, len(QUOTE_COLUMNS), total)
        self._autosize(ws, QUOTE_COLUMNS)

        logger.info("Quote exported to Excel", extra={"project_name": header.project_name, "line_items": len(items)})
        return self._save(wb)

    def export_analysis(self, report: AnalysisReport) -> io.BytesIO:
        """Export a cost analysis report: per-item margins then the financial summary."""
        wb = Workbook()
        ws = wb.active
        ws.title = "Analysis"

        self._write_table_header(ws, 1, ANALYSIS_COLUMNS)
        row = 2
        for index, item in enumerate(report.items, start=1):
            values = [
                index,
                item.item_ref_no,
                item.detailed_description or EMPTY_DESCRIPTION,
                item.quantity,
                item.duration,
                item.ops_cost,
                item.standard_cost,
                item.margin,
                format_percentage(item.margin_percentage),
                item.total,
                item.total_item_margin,
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=row, column=col, value=value)
                if col in (6, 7, 8, 10, 11):
                    cell.number_format = MONEY_FORMAT
            row += 1

        row += 1
        summary = [
            ("Total Revenue:", report.total_revenue),
            ("Total Cost:", report.total_cost),
            ("Total Profit:", report.total_profit),
        ]
        for label, value in summary:
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=value).number_format = MONEY_FORMAT
            row += 1
        ws.cell(row=row, column=1, value="Overall Margin:").font = Font(bold=True)
        ws.cell(row=row, column=2, value=format_percentage(report.overall_margin_percentage))

        self._autosize(ws, ANALYSIS_COLUMNS)

        logger.info(
            "Analysis exported to Excel",
            extra={"project_name": report.header.project_name, "line_items": len(report.items)},
        )
        return self._save(wb)

    def export_history_report(self, entry: QuoteHistoryItemResponse) -> io.BytesIO:
        """Export a saved quote: header field/value block, item table, grand total."""
        wb = Workbook()
        ws = wb.active
        ws.title = "Quote Report"

        fields = [
            ("Client Name", entry.header.client_name),
            ("Project Name", entry.header.project_name),
            ("Account Manager", entry.header.account_manager),
            ("Project Duration", entry.header.project_duration),
            ("Generated Date", format_timestamp(entry.timestamp)),
        ]
        row = 1
        for label, value in fields:
            ws.cell(row=row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=row, column=2, value=value)
            row += 1

        row += 1
        self._write_table_header(ws, row, REPORT_COLUMNS)
        row = self._write_line_items(ws, row + 1, entry.items)
        row += 1
        self._write_grand_total(ws, row, len(REPORT_COLUMNS), entry.total)
        self._autosize(ws, REPORT_COLUMNS)

        logger.info("Quote history report exported", extra={"history_id": entry.id})
        return self._save(wb)

    def _write_table_header(self, ws: Worksheet, row: int, columns: List[str]) -> None:
        for col, title in enumerate(columns, start=1):
            cell = ws.cell(row=row, column=col, value=title)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")

    def _write_line_items(self, ws: Worksheet, row: int, items: Sequence[QuoteLineItem]) -> int:
        """Write one row per line item starting at row; returns the next free row."""
        for index, item in enumerate(items, start=1):
            values = [
                index,
                item.item_ref_no,
                item.category,
                item.subcategory,
                item.detailed_description or EMPTY_DESCRIPTION,
                item.quantity,
                item.duration,
                item.standard_cost,
                item.total,
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=row, column=col, value=value)
                if col in (8, 9):
                    cell.number_format = MONEY_FORMAT
            row += 1
        return row

    def _write_grand_total(self, ws: Worksheet, row: int, last_column: int, total: float) -> None:
        label = ws.cell(row=row, column=last_column - 1, value="Grand Total:")
        label.font = Font(bold=True)
        label.alignment = Alignment(horizontal="right")
        value = ws.cell(row=row, column=last_column, value=total)
        value.font = Font(bold=True)
        value.number_format = MONEY_FORMAT

    def _autosize(self, ws: Worksheet, columns: List[str]) -> None:
        for col, title in enumerate(columns, start=1):
            letter = get_column_letter(col)
            width = max(
                (len(str(cell.value)) for cell in ws[letter] if cell.value is not None),
                default=len(title),
            )
            ws.column_dimensions[letter].width = min(max(width, len(title)) + 2, 60)

    def _save(self, wb: Workbook) -> io.BytesIO:
        output = io.BytesIO()
        try:
            wb.save(output)
        except (OSError, ValueError) as e:
            logger.error(f"Error saving workbook: {e}", exc_info=True)
            raise ExportError(f"Failed to write Excel file: {str(e)}") from e
        output.seek(0)
        return output
