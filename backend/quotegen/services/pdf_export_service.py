"""
PDF export service for quotes and cost analysis reports.
"""

import io
import logging
from datetime import datetime
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from quotegen.core.exceptions import ExportError
from quotegen.schemas.quote import QuoteHeader, QuoteLineItem, AnalysisReport
from quotegen.utils.formatters import format_currency, format_percentage, format_timestamp

logger = logging.getLogger(__name__)

PRIMARY_CLR = HexColor("#3b82f6")
RULE_CLR = HexColor("#c8c8c8")
BORDER_CLR = HexColor("#c8c8c8")
ROW_ALT_BG = HexColor("#f5f7fa")
LABEL_CLR = HexColor("#646464")
POSITIVE_CLR = HexColor("#22c55e")
NEGATIVE_CLR = HexColor("#dc2626")
WARNING_CLR = HexColor("#eab308")

# (tint, accent) per financial summary card
REVENUE_CARD = (HexColor("#eff6ff"), PRIMARY_CLR)
PROFIT_CARD = (HexColor("#f0fdf4"), POSITIVE_CLR)
MARGIN_CARD = (HexColor("#fef9e7"), WARNING_CLR)

PAGE_SIZE = A4
MARGIN = 15 * mm
CONTENT_WIDTH = PAGE_SIZE[0] - 2 * MARGIN
CARD_GAP = 5 * mm

AUTHOR = "QuoteGen"
CREATOR = "QuoteGen Application"
FOOTER_TEXT = "Generated by QuoteGen Application"
EMPTY_DESCRIPTION = "—"

QUOTE_COLUMNS = ["Item Ref No", "Category", "Subcategory", "Description",
                 "Standard Cost", "Quantity", "Duration", "Total"]
QUOTE_WIDTHS = [20 * mm, 20 * mm, 22 * mm, 44 * mm, 24 * mm, 13 * mm, 13 * mm, 24 * mm]

ANALYSIS_COLUMNS = ["#", "Ref", "Description", "Qty", "Dur", "Ops Cost",
                    "Std Cost", "Margin", "Margin %", "Revenue", "Profit"]
ANALYSIS_WIDTHS = [7 * mm, 15 * mm, 30 * mm, 9 * mm, 9 * mm, 18 * mm,
                   18 * mm, 18 * mm, 14 * mm, 21 * mm, 21 * mm]
MARGIN_COLUMNS = (7, 8)
PROFIT_COLUMN = 10


class _NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output so every footer can show 'Page i of n'."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.saveState()
        self.setStrokeColor(RULE_CLR)
        self.setLineWidth(0.3 * mm)
        self.line(MARGIN, 15 * mm, width - MARGIN, 15 * mm)
        self.setFont("Helvetica", 8)
        self.setFillColor(LABEL_CLR)
        self.drawString(MARGIN, 10 * mm, FOOTER_TEXT)
        self.drawRightString(width - MARGIN, 10 * mm, f"Page {self._pageNumber} of {page_count}")
        self.restoreState()


def _sign_color(value: float):
    return NEGATIVE_CLR if value < 0 else POSITIVE_CLR


class PdfExportService:
    """Service for exporting quotes and analysis reports to PDF."""

    def __init__(self):
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "QuoteTitle",
            parent=styles["Title"],
            alignment=0,
            textColor=PRIMARY_CLR,
            fontName="Helvetica-Bold",
            fontSize=24,
            leading=28,
            spaceAfter=0,
        )
        self.section_style = ParagraphStyle("QuoteSection", parent=styles["Heading3"], spaceBefore=6)
        self.cell_style = ParagraphStyle("QuoteCell", parent=styles["BodyText"], fontSize=8, leading=10)

    def export_quote(
        self,
        header: QuoteHeader,
        items: Sequence[QuoteLineItem],
        total: float,
        generated_at: Optional[datetime] = None,
    ) -> io.BytesIO:
        """Render a quote: project block, item table, grand total."""
        story = [
            *self._title("PROJECT QUOTE"),
            *self._project_block(header, generated_at),
            Paragraph("Quote Items", self.section_style),
        ]

        rows = [QUOTE_COLUMNS]
        for item in items:
            rows.append([
                item.item_ref_no,
                Paragraph(escape(item.category), self.cell_style),
                Paragraph(escape(item.subcategory), self.cell_style),
                Paragraph(escape(item.detailed_description or EMPTY_DESCRIPTION), self.cell_style),
                format_currency(item.standard_cost),
                str(item.quantity),
                str(item.duration),
                format_currency(item.total),
            ])
        story.append(self._item_table(rows, QUOTE_WIDTHS, numeric_from=4))
        story.append(Spacer(1, 6 * mm))
        story.append(self._grand_total(total))

        output = self._build(story, "Project Quote", "Quote")
        logger.info("Quote exported to PDF", extra={"project_name": header.project_name, "line_items": len(items)})
        return output

    def export_analysis(self, report: AnalysisReport, generated_at: Optional[datetime] = None) -> io.BytesIO:
        """Render a cost analysis report: project block, financial summary, per-item table."""
        story = [
            *self._title("COST ANALYSIS REPORT"),
            *self._project_block(report.header, generated_at),
            Paragraph("Financial Summary", self.section_style),
            self._summary_cards([
                ("Total Revenue", format_currency(report.total_revenue), REVENUE_CARD),
                ("Total Profit", format_currency(report.total_profit), PROFIT_CARD),
                ("Overall Margin", format_percentage(report.overall_margin_percentage), MARGIN_CARD),
            ]),
            Paragraph("Detailed Analysis", self.section_style),
        ]

        rows = [ANALYSIS_COLUMNS]
        for index, item in enumerate(report.items, start=1):
            rows.append([
                str(index),
                item.item_ref_no,
                Paragraph(escape(item.detailed_description or EMPTY_DESCRIPTION), self.cell_style),
                str(item.quantity),
                str(item.duration),
                format_currency(item.ops_cost),
                format_currency(item.standard_cost),
                format_currency(item.margin),
                format_percentage(item.margin_percentage),
                format_currency(item.total),
                format_currency(item.total_item_margin),
            ])
        table = self._item_table(rows, ANALYSIS_WIDTHS, numeric_from=3, font_size=7)
        table.setStyle(TableStyle(self.margin_colors(report.items)))
        story.append(table)
        story.append(Spacer(1, 4 * mm))
        story.append(Paragraph("Summary", self.section_style))

        totals = Table(
            [
                ["Total Revenue:", format_currency(report.total_revenue),
                 "Total Profit:", format_currency(report.total_profit)],
                ["Total Cost:", format_currency(report.total_cost),
                 "Overall Margin:", format_percentage(report.overall_margin_percentage)],
            ],
            hAlign="LEFT",
        )
        totals.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTNAME", (2, 0), (2, -1), "Helvetica-Bold"),
            ("TEXTCOLOR", (3, 0), (3, 0), _sign_color(report.total_profit)),
            ("TEXTCOLOR", (3, 1), (3, 1), _sign_color(report.overall_margin_percentage)),
            ("BOX", (0, 0), (-1, -1), 0.5, BORDER_CLR),
        ]))
        story.append(totals)

        output = self._build(story, "Cost Analysis Report", "Cost Analysis")
        logger.info(
            "Analysis exported to PDF",
            extra={"project_name": report.header.project_name, "line_items": len(report.items)},
        )
        return output

    @staticmethod
    def margin_colors(items: Sequence) -> List[tuple]:
        """TEXTCOLOR commands: Margin, Margin % and Profit cells red below zero, green otherwise."""
        commands = []
        for row, item in enumerate(items, start=1):
            for column in MARGIN_COLUMNS:
                commands.append(("TEXTCOLOR", (column, row), (column, row), _sign_color(item.margin)))
            commands.append(
                ("TEXTCOLOR", (PROFIT_COLUMN, row), (PROFIT_COLUMN, row), _sign_color(item.total_item_margin))
            )
        return commands

    def _title(self, text: str) -> List:
        return [
            Paragraph(text, self.title_style),
            HRFlowable(width="100%", thickness=0.5 * mm, color=RULE_CLR, spaceBefore=2 * mm, spaceAfter=2 * mm),
        ]

    def _project_block(self, header: QuoteHeader, generated_at: Optional[datetime]) -> List:
        generated = format_timestamp(generated_at or datetime.now())
        block = Table(
            [
                ["Client Name:", header.client_name, "Account Manager:", header.account_manager],
                ["Project Name:", header.project_name, "Project Duration:", header.project_duration],
                ["", "", "Generated:", generated],
            ],
            hAlign="LEFT",
        )
        block.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTNAME", (2, 0), (2, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
        ]))
        return [Paragraph("Project Information", self.section_style), block]

    def _summary_cards(self, cards) -> Table:
        """Side by side tinted boxes, label above value."""
        card_width = (CONTENT_WIDTH - CARD_GAP * (len(cards) - 1)) / len(cards)
        labels, values, widths = [], [], []
        style = [
            ("FONTSIZE", (0, 0), (-1, 0), 9),
            ("TEXTCOLOR", (0, 0), (-1, 0), LABEL_CLR),
            ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 1), (-1, 1), 12),
            ("LEADING", (0, 1), (-1, 1), 15),
            ("TOPPADDING", (0, 0), (-1, 0), 2 * mm),
            ("BOTTOMPADDING", (0, 1), (-1, 1), 2 * mm),
        ]
        for index, (label, value, (tint, accent)) in enumerate(cards):
            column = index * 2
            if index:
                labels.append("")
                values.append("")
                widths.append(CARD_GAP)
            labels.append(label)
            values.append(value)
            widths.append(card_width)
            style += [
                ("BACKGROUND", (column, 0), (column, 1), tint),
                ("BOX", (column, 0), (column, 1), 0.5 * mm, accent),
                ("TEXTCOLOR", (column, 1), (column, 1), accent),
            ]
        table = Table([labels, values], colWidths=widths, hAlign="LEFT")
        table.setStyle(TableStyle(style))
        return table

    def _grand_total(self, total: float) -> Table:
        box = Table([[f"Grand Total: {format_currency(total)}"]], hAlign="RIGHT")
        box.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), PRIMARY_CLR),
            ("TEXTCOLOR", (0, 0), (-1, -1), white),
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 12),
            ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
            ("LEFTPADDING", (0, 0), (-1, -1), 4 * mm),
            ("RIGHTPADDING", (0, 0), (-1, -1), 4 * mm),
            ("TOPPADDING", (0, 0), (-1, -1), 3 * mm),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3 * mm),
        ]))
        return box

    def _item_table(self, rows: List[list], widths: List[float], numeric_from: int, font_size: int = 8) -> Table:
        table = Table(rows, colWidths=widths, repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), PRIMARY_CLR),
            ("TEXTCOLOR", (0, 0), (-1, 0), white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), font_size),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("ALIGN", (numeric_from, 1), (-1, -1), "RIGHT"),
            ("BOX", (0, 0), (-1, -1), 0.25, BORDER_CLR),
            ("INNERGRID", (0, 0), (-1, -1), 0.25, BORDER_CLR),
        ]
        for row in range(2, len(rows), 2):
            style.append(("BACKGROUND", (0, row), (-1, row), ROW_ALT_BG))
        table.setStyle(TableStyle(style))
        return table

    def _build(self, story: List, title: str, subject: str) -> io.BytesIO:
        output = io.BytesIO()
        doc = SimpleDocTemplate(
            output,
            pagesize=PAGE_SIZE,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=20 * mm,
            title=title,
            subject=subject,
            author=AUTHOR,
            creator=CREATOR,
        )
        try:
            doc.build(story, canvasmaker=_NumberedCanvas)
        except (LayoutError, ValueError, IndexError, AttributeError) as e:
            # LayoutError: a single row taller than a page
            logger.error(f"Error rendering PDF: {e}", exc_info=True)
            raise ExportError(f"Failed to render PDF: {str(e)}") from e
        output.seek(0)
        return output
