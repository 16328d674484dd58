"""
API middleware for authentication and role checks.
Centralized enforcement for all protected routes.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.core.security import decode_access_token
from quotegen.db.session import get_db
from quotegen.models.user import UserRole
from quotegen.schemas.user import Caller
from quotegen.services.access_control_service import AccessControlService

security = HTTPBearer(auto_error=False)

_ROLE_RANK = {UserRole.GUEST: 0, UserRole.USER: 1, UserRole.ADMIN: 2}


async def require_authentication(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Caller:
    """
    Centralized authentication dependency.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(caller: Caller = Depends(require_authentication)):
            ...

    Args:
        credentials: HTTP Bearer token credentials (injected by FastAPI)
        db: Database session

    Returns:
        The calling principal with its registered role (guest when unregistered)

    Raises:
        HTTPException: If the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    principal = payload.get("sub")
    if not principal:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing principal",
            headers={"WWW-Authenticate": "Bearer"},
        )

    role = await AccessControlService(db).get_role(principal)
    return Caller(principal=principal, role=role)


def _require_role(minimum: UserRole):
    async def dependency(caller: Caller = Depends(require_authentication)) -> Caller:
        if _ROLE_RANK[caller.role] < _ROLE_RANK[minimum]:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Unauthorized: {minimum.value} role required",
            )
        return caller
    return dependency


require_user = _require_role(UserRole.USER)
require_admin = _require_role(UserRole.ADMIN)
