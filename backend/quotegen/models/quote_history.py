"""
Quote history model.
Each row is a snapshot written once when a full quote is generated.
"""

from sqlalchemy import Column, String, Float, JSON, DateTime

from quotegen.db.base import Base


class QuoteHistoryItem(Base):
    """Append-only snapshot of a generated quote."""

    __tablename__ = "quote_history"

    id = Column(String(100), primary_key=True, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)

    # Header
    client_name = Column(String(255), nullable=False, default="")
    project_name = Column(String(255), nullable=False, default="")
    account_manager = Column(String(255), nullable=False, default="")
    project_duration = Column(String(255), nullable=False, default="")

    # Priced line items as computed at generation time
    items = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=False, default=0.0)
