"""
User role assignments and profiles.
Principals are opaque strings taken from the token subject.
"""

from sqlalchemy import Column, String, Enum as SQLEnum
import enum

from quotegen.db.base import Base


class UserRole(str, enum.Enum):
    """Access control role enumeration."""
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class UserRoleAssignment(Base):
    """Role registered for a principal."""

    __tablename__ = "user_roles"

    principal = Column(String(255), primary_key=True, index=True)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.USER)


class UserProfile(Base):
    """Self-maintained profile of a principal."""

    __tablename__ = "user_profiles"

    id = Column(String(255), primary_key=True, index=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="")
    account_manager_id = Column(String(100), nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
