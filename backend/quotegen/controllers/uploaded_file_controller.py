"""
Uploaded file controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.controllers.base_controller import BaseController
from quotegen.services.uploaded_file_service import UploadedFileService
from quotegen.schemas.uploaded_file import (
    UploadedFileCreate,
    UploadedFileResponse,
    UploadedFileListResponse,
)


class UploadedFileController(BaseController):
    """Controller for uploaded file registry operations."""

    def __init__(self, session: AsyncSession):
        self.uploaded_file_service = UploadedFileService(session)

    async def track_file(self, file_data: UploadedFileCreate) -> UploadedFileResponse:
        """Register an uploaded file."""
        return await self.uploaded_file_service.track_file(file_data)

    async def list_files(self) -> UploadedFileListResponse:
        """List registered files."""
        files, total = await self.uploaded_file_service.list_files()
        return UploadedFileListResponse(items=files, total=total)
