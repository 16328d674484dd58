"""
Quote, analysis and quote history Pydantic schemas.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Any, List, Optional
from datetime import datetime


class QuoteSelection(BaseModel):
    """One requested rate card item with its quantity and duration."""
    item_id: str
    quantity: int = Field(..., ge=0)
    duration: int = Field(..., ge=0)

    @model_validator(mode="before")
    @classmethod
    def accept_triple(cls, data: Any) -> Any:
        """Accept the compact [item_id, quantity, duration] form."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError("Selection must be [item_id, quantity, duration]")
            item_id, quantity, duration = data
            return {"item_id": item_id, "quantity": quantity, "duration": duration}
        return data


class QuoteRequest(BaseModel):
    """Schema for pricing a list of selections."""
    selections: List[QuoteSelection] = []


class QuoteHeader(BaseModel):
    """Free-text header printed on a quote."""
    client_name: str = Field("", max_length=255)
    project_name: str = Field("", max_length=255)
    account_manager: str = Field("", max_length=255)
    project_duration: str = Field("", max_length=255)


class FullQuoteRequest(QuoteRequest):
    """Schema for generating a quote with header and saving it to history."""
    header: QuoteHeader


class QuoteLineItem(BaseModel):
    """A rate card item priced for a quantity and duration."""
    id: str
    item_ref_no: str
    category: str
    subcategory: str
    detailed_description: str
    ops_cost: float
    standard_cost: float
    quantity: int
    duration: int
    total: float


class QuoteResponse(BaseModel):
    """Priced line items and their grand total."""
    items: List[QuoteLineItem]
    total: float


class FullQuoteResponse(QuoteResponse):
    """A priced quote with its header and the history entry it was saved as."""
    header: QuoteHeader
    history_id: Optional[str] = None


class AnalysisItem(QuoteLineItem):
    """A priced line item with its unit margin."""
    margin: float
    margin_percentage: float


class AnalysisSummary(BaseModel):
    """
    Margin analysis of a selection list.

    total_margin sums unit margins; total_profit sums line totals (revenue).
    """
    items: List[AnalysisItem]
    total_margin: float
    total_profit: float


class QuoteHistoryItemResponse(BaseModel):
    """A quote snapshot as saved at generation time."""
    id: str
    timestamp: datetime
    header: QuoteHeader
    items: List[QuoteLineItem]
    total: float


class QuoteHistoryListResponse(BaseModel):
    """Schema for quote history list response."""
    items: List[QuoteHistoryItemResponse]
    total: int


class AnalysisReportItem(AnalysisItem):
    """Analysis line scaled by quantity and duration."""
    total_cost: float
    total_item_margin: float


class AnalysisReport(BaseModel):
    """Revenue, cost and profit report for a saved quote."""
    header: QuoteHeader
    items: List[AnalysisReportItem]
    total_revenue: float
    total_cost: float
    total_profit: float
    total_margin: float
    overall_margin_percentage: float
