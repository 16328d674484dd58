"""
Account manager Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class AccountManagerBase(BaseModel):
    """Base account manager schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)


class AccountManagerCreate(AccountManagerBase):
    """Schema for creating an account manager."""
    id: str = Field(..., min_length=1, max_length=100)


class AccountManagerUpdate(AccountManagerBase):
    """Schema for updating an account manager; the id comes from the path."""
    pass


class AccountManagerResponse(AccountManagerCreate):
    """Schema for account manager response."""

    class Config:
        from_attributes = True


class AccountManagerReplace(BaseModel):
    """Schema for replacing the whole account manager list."""
    managers: List[AccountManagerCreate]


class AccountManagerListResponse(BaseModel):
    """Schema for account manager list response."""
    items: List[AccountManagerResponse]
    total: int


class AccountManagerImportResponse(BaseModel):
    """Result of an account manager file upload."""
    imported: int
    items: List[AccountManagerResponse]
