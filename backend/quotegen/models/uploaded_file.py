"""
Uploaded file registry model.
Only metadata is kept; content lives in blob storage under blob_id.
"""

from sqlalchemy import Column, String, BigInteger

from quotegen.db.base import Base


class UploadedFile(Base):
    """Metadata for a file uploaded by a client."""

    __tablename__ = "uploaded_files"

    id = Column(String(100), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    content_type = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False, default=0)
    blob_id = Column(String(255), nullable=False)
