"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from quotegen.models.rate_card import RateCardItem
from quotegen.models.quote_history import QuoteHistoryItem
from quotegen.models.account_manager import AccountManager
from quotegen.models.uploaded_file import UploadedFile
from quotegen.models.user import UserRole, UserRoleAssignment, UserProfile

__all__ = [
    "RateCardItem",
    "QuoteHistoryItem",
    "AccountManager",
    "UploadedFile",
    "UserRole",
    "UserRoleAssignment",
    "UserProfile",
]
