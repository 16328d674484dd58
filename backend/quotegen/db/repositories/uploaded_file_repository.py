"""
Uploaded file repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.repositories.base_repository import BaseRepository
from quotegen.models.uploaded_file import UploadedFile


class UploadedFileRepository(BaseRepository[UploadedFile]):
    """Repository for uploaded file metadata."""

    def __init__(self, session: AsyncSession):
        super().__init__(UploadedFile, session)
