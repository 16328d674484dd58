"""
Rate card Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import List


class RateCardItemBase(BaseModel):
    """Catalog fields shared by every rate card schema."""
    item_ref_no: str = Field(..., min_length=1, max_length=100)
    category: str = Field("", max_length=255)
    subcategory: str = Field("", max_length=255)
    detailed_description: str = ""
    ops_cost: float
    standard_cost: float


class RateCardItemCreate(RateCardItemBase):
    """Schema for inserting a rate card item under a caller-chosen id."""
    id: str = Field(..., min_length=1, max_length=100)


class RateCardItemUpdate(RateCardItemBase):
    """Schema for overwriting a rate card item; the id comes from the path."""
    pass


class RateCardItemResponse(RateCardItemCreate):
    """Schema for rate card item response."""

    class Config:
        from_attributes = True


class RateCardReplace(BaseModel):
    """Schema for replacing the whole rate card."""
    items: List[RateCardItemCreate]


class RateCardResponse(BaseModel):
    """Schema for the full rate card."""
    items: List[RateCardItemResponse]
    total: int


class StandardCostUpdate(BaseModel):
    """Schema for changing one item's standard cost."""
    standard_cost: float


class RateCardImportResponse(BaseModel):
    """Result of a rate card file upload."""
    imported: int
    skipped: int
    warnings: List[str] = []
    items: List[RateCardItemResponse]
