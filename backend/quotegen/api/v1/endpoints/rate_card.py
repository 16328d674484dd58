"""
Rate card API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession

from quotegen.db.session import get_db
from quotegen.controllers.rate_card_controller import RateCardController
from quotegen.schemas.rate_card import (
    RateCardItemCreate,
    RateCardItemUpdate,
    RateCardItemResponse,
    RateCardReplace,
    RateCardResponse,
    StandardCostUpdate,
    RateCardImportResponse,
)

router = APIRouter()


@router.get("", response_model=RateCardResponse)
async def get_rate_card(
    db: AsyncSession = Depends(get_db),
) -> RateCardResponse:
    """Get every rate card item."""
    controller = RateCardController(db)
    return await controller.get_rate_card()


@router.put("", response_model=RateCardResponse)
async def replace_rate_card(
    rate_card: RateCardReplace,
    db: AsyncSession = Depends(get_db),
) -> RateCardResponse:
    """Replace the whole rate card."""
    controller = RateCardController(db)
    return await controller.replace_rate_card(rate_card.items)


@router.post("/items", response_model=RateCardItemResponse, status_code=status.HTTP_201_CREATED)
async def add_rate_card_item(
    item_data: RateCardItemCreate,
    db: AsyncSession = Depends(get_db),
) -> RateCardItemResponse:
    """Add a rate card item."""
    controller = RateCardController(db)
    return await controller.add_item(item_data)


@router.get("/items/{item_id}", response_model=RateCardItemResponse)
async def get_rate_card_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
) -> RateCardItemResponse:
    """Get rate card item by id."""
    controller = RateCardController(db)
    item = await controller.get_item(item_id)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rate card item not found",
        )
    return item


@router.put("/items/{item_id}", response_model=RateCardItemResponse)
async def update_rate_card_item(
    item_id: str,
    item_data: RateCardItemUpdate,
    db: AsyncSession = Depends(get_db),
) -> RateCardItemResponse:
    """Update a rate card item."""
    controller = RateCardController(db)
    return await controller.update_item(item_id, item_data)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rate_card_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a rate card item."""
    controller = RateCardController(db)
    deleted = await controller.delete_item(item_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rate card item not found",
        )


@router.patch("/items/{item_id}/standard-cost", response_model=RateCardItemResponse)
async def update_standard_cost(
    item_id: str,
    cost_data: StandardCostUpdate,
    db: AsyncSession = Depends(get_db),
) -> RateCardItemResponse:
    """Change the standard cost of one item."""
    controller = RateCardController(db)
    item = await controller.update_standard_cost(item_id, cost_data.standard_cost)
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Rate card item not found",
        )
    return item


@router.post("/import", response_model=RateCardImportResponse)
async def import_rate_card(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
) -> RateCardImportResponse:
    """Replace the rate card from a .csv or .xlsx upload."""
    content = await file.read()
    controller = RateCardController(db)
    return await controller.import_rate_card(file.filename or "", content)
