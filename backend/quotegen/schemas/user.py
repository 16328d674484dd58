"""
Access control and user profile schemas.
"""

from pydantic import BaseModel, Field

from quotegen.models.user import UserRole


class Caller(BaseModel):
    """The authenticated principal behind a request."""
    principal: str
    role: UserRole = UserRole.GUEST


class RoleResponse(BaseModel):
    """Role held by the caller."""
    role: UserRole


class IsAdminResponse(BaseModel):
    """Whether the caller is an admin."""
    is_admin: bool


class RoleAssignment(BaseModel):
    """Schema for assigning a role to a principal."""
    role: UserRole


class UserProfileBase(BaseModel):
    """Base user profile schema."""
    name: str = Field("", max_length=255)
    email: str = Field("", max_length=255)
    account_manager_id: str = Field("", max_length=100)
    phone: str = Field("", max_length=50)


class UserProfileUpdate(UserProfileBase):
    """Schema for saving the caller's own profile."""
    pass


class UserProfileResponse(UserProfileBase):
    """Schema for user profile response."""
    id: str

    class Config:
        from_attributes = True
