"""
Uploaded file registry service.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.services.base_service import BaseService
from quotegen.db.repositories.uploaded_file_repository import UploadedFileRepository
from quotegen.schemas.uploaded_file import UploadedFileCreate, UploadedFileResponse


class UploadedFileService(BaseService):
    """Service for tracking uploaded files."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.uploaded_file_repo = UploadedFileRepository(session)

    async def track_file(self, file_data: UploadedFileCreate) -> UploadedFileResponse:
        """Record file metadata; re-tracking an id overwrites it."""
        uploaded = await self.uploaded_file_repo.upsert(**file_data.model_dump())
        await self.session.commit()
        return UploadedFileResponse.model_validate(uploaded)

    async def list_files(self) -> tuple[List[UploadedFileResponse], int]:
        """List every tracked file ordered by id."""
        files = await self.uploaded_file_repo.list_all()
        return [UploadedFileResponse.model_validate(f) for f in files], len(files)
