"""
Rate card model: the catalog of priced service items.
"""

from sqlalchemy import Column, String, Float, Text

from quotegen.db.base import Base


class RateCardItem(Base):
    """A priced, categorized service item."""

    __tablename__ = "rate_card_items"

    id = Column(String(100), primary_key=True, index=True)
    item_ref_no = Column(String(100), nullable=False, index=True)
    category = Column(String(255), nullable=False, default="")
    subcategory = Column(String(255), nullable=False, default="")
    detailed_description = Column(Text, nullable=False, default="")
    ops_cost = Column(Float, nullable=False, default=0.0)  # internal cost per unit
    standard_cost = Column(Float, nullable=False, default=0.0)  # billed cost per unit
