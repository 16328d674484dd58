"""
Access control and user profile endpoints.
Any authenticated principal may call these; role checks are per route.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.api.v1.middleware import require_authentication, require_admin
from quotegen.db.session import get_db
from quotegen.controllers.access_control_controller import AccessControlController
from quotegen.models.user import UserRole
from quotegen.schemas.user import (
    Caller,
    RoleResponse,
    IsAdminResponse,
    RoleAssignment,
    UserProfileUpdate,
    UserProfileResponse,
)

router = APIRouter()


@router.post("/initialize", response_model=RoleResponse)
async def initialize_access_control(
    caller: Caller = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> RoleResponse:
    """Register the caller. The first principal to initialize becomes admin."""
    controller = AccessControlController(db)
    return await controller.initialize(caller.principal)


@router.get("/role", response_model=RoleResponse)
async def get_caller_role(
    caller: Caller = Depends(require_authentication),
) -> RoleResponse:
    """Get the caller's role."""
    return RoleResponse(role=caller.role)


@router.get("/is-admin", response_model=IsAdminResponse)
async def is_caller_admin(
    caller: Caller = Depends(require_authentication),
) -> IsAdminResponse:
    """Whether the caller is an admin."""
    return IsAdminResponse(is_admin=caller.role == UserRole.ADMIN)


@router.put("/roles/{principal}", response_model=RoleResponse)
async def assign_role(
    principal: str,
    assignment: RoleAssignment,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> RoleResponse:
    """Assign a role to any principal. Admin only."""
    controller = AccessControlController(db)
    return await controller.assign_role(principal, assignment.role)


@router.get("/profile", response_model=UserProfileResponse)
async def get_caller_profile(
    caller: Caller = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> UserProfileResponse:
    """Get the caller's profile."""
    controller = AccessControlController(db)
    profile = await controller.get_profile(caller.principal)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile


@router.put("/profile", response_model=UserProfileResponse)
async def save_caller_profile(
    profile_data: UserProfileUpdate,
    caller: Caller = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> UserProfileResponse:
    """Save the caller's profile."""
    controller = AccessControlController(db)
    return await controller.save_profile(caller.principal, profile_data)


@router.get("/profiles/{principal}", response_model=UserProfileResponse)
async def get_user_profile(
    principal: str,
    caller: Caller = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> UserProfileResponse:
    """Get any principal's profile. Callers may read their own; admins may read all."""
    if principal != caller.principal and caller.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: can only view your own profile",
        )
    controller = AccessControlController(db)
    profile = await controller.get_profile(principal)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile
