"""
Account manager API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.session import get_db
from quotegen.controllers.account_manager_controller import AccountManagerController
from quotegen.schemas.account_manager import (
    AccountManagerCreate,
    AccountManagerUpdate,
    AccountManagerResponse,
    AccountManagerReplace,
    AccountManagerListResponse,
    AccountManagerImportResponse,
)

router = APIRouter()


@router.get("", response_model=AccountManagerListResponse)
async def list_account_managers(
    db: AsyncSession = Depends(get_db),
) -> AccountManagerListResponse:
    """List every account manager."""
    controller = AccountManagerController(db)
    return await controller.list_account_managers()


@router.put("", response_model=AccountManagerListResponse)
async def replace_account_managers(
    replacement: AccountManagerReplace,
    db: AsyncSession = Depends(get_db),
) -> AccountManagerListResponse:
    """Replace the whole account manager list."""
    controller = AccountManagerController(db)
    return await controller.replace_account_managers(replacement.managers)


@router.post("", response_model=AccountManagerResponse, status_code=status.HTTP_201_CREATED)
async def add_account_manager(
    manager_data: AccountManagerCreate,
    db: AsyncSession = Depends(get_db),
) -> AccountManagerResponse:
    """Add an account manager."""
    controller = AccountManagerController(db)
    return await controller.add_account_manager(manager_data)


@router.post("/import", response_model=AccountManagerImportResponse)
async def import_account_managers(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
) -> AccountManagerImportResponse:
    """Replace the account manager list from a .csv or .xlsx upload."""
    content = await file.read()
    controller = AccountManagerController(db)
    return await controller.import_account_managers(file.filename or "", content)


@router.get("/{manager_id}", response_model=AccountManagerResponse)
async def get_account_manager(
    manager_id: str,
    db: AsyncSession = Depends(get_db),
) -> AccountManagerResponse:
    """Get account manager by id."""
    controller = AccountManagerController(db)
    manager = await controller.get_account_manager(manager_id)
    if not manager:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account manager not found",
        )
    return manager


@router.put("/{manager_id}", response_model=AccountManagerResponse)
async def update_account_manager(
    manager_id: str,
    manager_data: AccountManagerUpdate,
    db: AsyncSession = Depends(get_db),
) -> AccountManagerResponse:
    """Update an account manager."""
    controller = AccountManagerController(db)
    return await controller.update_account_manager(manager_id, manager_data)


@router.delete("/{manager_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account_manager(
    manager_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete an account manager."""
    controller = AccountManagerController(db)
    deleted = await controller.delete_account_manager(manager_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Account manager not found",
        )
