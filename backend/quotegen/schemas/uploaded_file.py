"""
Uploaded file Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import List


class UploadedFileCreate(BaseModel):
    """Schema for registering an uploaded file."""
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., max_length=255)
    size: int = Field(..., ge=0)
    blob_id: str = Field(..., min_length=1, max_length=255)


class UploadedFileResponse(UploadedFileCreate):
    """Schema for uploaded file response."""

    class Config:
        from_attributes = True


class UploadedFileListResponse(BaseModel):
    """Schema for uploaded file list response."""
    items: List[UploadedFileResponse]
    total: int
