"""
Access control controller.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.controllers.base_controller import BaseController
from quotegen.services.access_control_service import AccessControlService
from quotegen.models.user import UserRole
from quotegen.schemas.user import (
    RoleResponse,
    IsAdminResponse,
    UserProfileUpdate,
    UserProfileResponse,
)


class AccessControlController(BaseController):
    """Controller for roles and user profiles."""

    def __init__(self, session: AsyncSession):
        self.access_control_service = AccessControlService(session)

    async def initialize(self, principal: str) -> RoleResponse:
        """Register the caller and return the role it ends up with."""
        role = await self.access_control_service.initialize(principal)
        return RoleResponse(role=role)

    async def get_role(self, principal: str) -> RoleResponse:
        """Get the caller's role."""
        role = await self.access_control_service.get_role(principal)
        return RoleResponse(role=role)

    async def is_admin(self, principal: str) -> IsAdminResponse:
        """Whether the caller is an admin."""
        role = await self.access_control_service.get_role(principal)
        return IsAdminResponse(is_admin=role == UserRole.ADMIN)

    async def assign_role(self, principal: str, role: UserRole) -> RoleResponse:
        """Assign a role to a principal."""
        assigned = await self.access_control_service.assign_role(principal, role)
        return RoleResponse(role=assigned)

    async def get_profile(self, principal: str) -> Optional[UserProfileResponse]:
        """Get a principal's profile."""
        return await self.access_control_service.get_profile(principal)

    async def save_profile(self, principal: str, profile_data: UserProfileUpdate) -> UserProfileResponse:
        """Save the caller's profile."""
        return await self.access_control_service.save_profile(principal, profile_data)
