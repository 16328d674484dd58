"""
Account manager model.
"""

from sqlalchemy import Column, String

from quotegen.db.base import Base


class AccountManager(Base):
    """Account manager that can be named on a quote header."""

    __tablename__ = "account_managers"

    id = Column(String(100), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
