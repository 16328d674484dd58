"""
Uploaded file registry endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.session import get_db
from quotegen.controllers.uploaded_file_controller import UploadedFileController
from quotegen.schemas.uploaded_file import (
    UploadedFileCreate,
    UploadedFileResponse,
    UploadedFileListResponse,
)

router = APIRouter()


@router.post("", response_model=UploadedFileResponse, status_code=status.HTTP_201_CREATED)
async def track_uploaded_file(
    file_data: UploadedFileCreate,
    db: AsyncSession = Depends(get_db),
) -> UploadedFileResponse:
    """Register an uploaded file; an entry with the same id is overwritten."""
    controller = UploadedFileController(db)
    return await controller.track_file(file_data)


@router.get("", response_model=UploadedFileListResponse)
async def list_uploaded_files(
    db: AsyncSession = Depends(get_db),
) -> UploadedFileListResponse:
    """List registered files."""
    controller = UploadedFileController(db)
    return await controller.list_files()
