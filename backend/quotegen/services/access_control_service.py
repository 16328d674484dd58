"""
Access control service: principal roles and user profiles.
"""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.services.base_service import BaseService
from quotegen.db.repositories.user_repository import UserRoleRepository, UserProfileRepository
from quotegen.models.user import UserRole
from quotegen.schemas.user import UserProfileUpdate, UserProfileResponse

logger = logging.getLogger(__name__)


class AccessControlService(BaseService):
    """Service for role assignment and user profiles."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.role_repo = UserRoleRepository(session)
        self.profile_repo = UserProfileRepository(session)

    async def get_role(self, principal: str) -> UserRole:
        """Role registered for a principal; unregistered principals are guests."""
        assignment = await self.role_repo.get(principal)
        if not assignment:
            return UserRole.GUEST
        return assignment.role

    async def initialize(self, principal: str) -> UserRole:
        """
        Register the caller.

        The first principal to initialize while no admin exists becomes admin;
        later principals become users. Existing registrations are left alone.
        """
        assignment = await self.role_repo.get(principal)
        if assignment:
            return assignment.role

        role = UserRole.ADMIN if await self.role_repo.count_admins() == 0 else UserRole.USER
        await self.role_repo.create(principal=principal, role=role)
        await self.session.commit()
        logger.info("Principal registered", extra={"principal": principal, "role": role.value})
        return role

    async def assign_role(self, principal: str, role: UserRole) -> UserRole:
        """Set the role of any principal."""
        await self.role_repo.upsert(principal=principal, role=role)
        await self.session.commit()
        logger.info("Role assigned", extra={"principal": principal, "role": role.value})
        return role

    async def get_profile(self, principal: str) -> Optional[UserProfileResponse]:
        """Get the profile saved by a principal."""
        profile = await self.profile_repo.get(principal)
        if not profile:
            return None
        return UserProfileResponse.model_validate(profile)

    async def save_profile(self, principal: str, profile_data: UserProfileUpdate) -> UserProfileResponse:
        """Create or overwrite the caller's profile."""
        profile = await self.profile_repo.upsert(id=principal, **profile_data.model_dump())
        await self.session.commit()
        return UserProfileResponse.model_validate(profile)
