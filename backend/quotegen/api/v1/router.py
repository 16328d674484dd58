"""
API v1 router that aggregates all endpoint routers.
Health and access control are open to any authenticated principal;
everything else requires at least the user role.
"""

from fastapi import APIRouter, Depends
from quotegen.api.v1.middleware import require_user

from quotegen.api.v1.endpoints import (
    health,
    access_control,
    rate_card,
    quotes,
    quote_history,
    account_managers,
    files,
)

api_router = APIRouter()

# Public routes
api_router.include_router(health.router, tags=["health"])

# Authenticated; role checks happen per route
api_router.include_router(access_control.router, prefix="/access-control", tags=["access-control"])

# Protected routes (user role or above)
api_router.include_router(
    rate_card.router,
    prefix="/rate-card",
    tags=["rate-card"],
    dependencies=[Depends(require_user)],
)
api_router.include_router(
    quotes.router,
    prefix="/quotes",
    tags=["quotes"],
    dependencies=[Depends(require_user)],
)
api_router.include_router(
    quote_history.router,
    prefix="/quote-history",
    tags=["quote-history"],
    dependencies=[Depends(require_user)],
)
api_router.include_router(
    account_managers.router,
    prefix="/account-managers",
    tags=["account-managers"],
    dependencies=[Depends(require_user)],
)
api_router.include_router(
    files.router,
    prefix="/files",
    tags=["files"],
    dependencies=[Depends(require_user)],
)
