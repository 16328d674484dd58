"""
User role and profile repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from quotegen.db.repositories.base_repository import BaseRepository
from quotegen.models.user import UserRole, UserRoleAssignment, UserProfile


class UserRoleRepository(BaseRepository[UserRoleAssignment]):
    """Repository for principal -> role assignments."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserRoleAssignment, session, key="principal")

    async def count_admins(self) -> int:
        """Count principals holding the admin role."""
        result = await self.session.execute(
            select(func.count(UserRoleAssignment.principal)).where(
                UserRoleAssignment.role == UserRole.ADMIN
            )
        )
        return result.scalar() or 0


class UserProfileRepository(BaseRepository[UserProfile]):
    """Repository for user profiles."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserProfile, session)
