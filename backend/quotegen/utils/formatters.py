"""
Number, currency and file name formatting for exported documents.
"""

import re
from datetime import date, datetime

from quotegen.core.config import settings


def format_number(value: float) -> str:
    """Format with thousand separators and two decimals: 1234.5 -> '1,234.50'."""
    return f"{value:,.2f}"


def format_currency(value: float) -> str:
    """Format as currency: 1234.5 -> 'Kshs 1,234.50'."""
    return f"{settings.CURRENCY_LABEL} {format_number(value)}"


def format_percentage(value: float) -> str:
    """Format a percentage with one decimal: 20 -> '20.0%'."""
    return f"{value:.1f}%"


def format_timestamp(value: datetime) -> str:
    """Human readable timestamp used in report headers."""
    return value.strftime("%b %d, %Y %I:%M %p")


def export_filename(kind: str, project_name: str, extension: str, on: date | None = None) -> str:
    """
    Build a download file name.

    Format: {kind}_{project name, whitespace runs -> '_'}_{YYYY-MM-DD}.{extension}
    """
    day = (on or date.today()).isoformat()
    project = re.sub(r"\s+", "_", project_name.strip()) or "untitled"
    return f"{kind}_{project}_{day}.{extension}"
