# app/api/routes/plaid.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.core.config import settings
from app.core.database import get_async_session
from app.core.plaid import PlaidClient, get_plaid_client
from app.crud.plaid_item import get_plaid_item_by_id, get_plaid_items_for_user
from app.models.user import User
from app.api.deps import get_current_user
from app.schemas.account import AccountRead
from app.schemas.plaid import (
    LinkedItemResponse,
    LinkTokenResponse,
    PlaidItemRead,
    PublicTokenExchangeRequest,
    SyncResult,
)
from app.utils.plaid_sync import link_item, sync_item_transactions

router = APIRouter(prefix="/plaid", tags=["plaid"])

@router.post("/link-token", response_model=LinkTokenResponse)
async def create_link_token(
    user: User = Depends(get_current_user),
    client: PlaidClient = Depends(get_plaid_client),
):
    """Start Plaid Link for the caller"""
    return LinkTokenResponse(link_token=await client.create_link_token(str(user.id)))

@router.post("/exchange-token", response_model=LinkedItemResponse, status_code=status.HTTP_201_CREATED)
async def exchange_public_token(
    payload: PublicTokenExchangeRequest,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    client: PlaidClient = Depends(get_plaid_client),
):
    """Finish Plaid Link: store the bank connection and import its accounts"""
    item, accounts = await link_item(user.id, payload.public_token, client, db)
    return LinkedItemResponse(
        item=PlaidItemRead.model_validate(item, from_attributes=True),
        accounts=[AccountRead.model_validate(a, from_attributes=True) for a in accounts],
    )

@router.get("/items", response_model=List[PlaidItemRead])
async def read_plaid_items(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_plaid_items_for_user(user.id, db)

@router.post("/items/{item_id}/sync", response_model=SyncResult)
async def sync_plaid_item(
    item_id: uuid.UUID,
    days: int = Query(settings.PLAID_SYNC_DAYS, ge=1, le=730, description="Trailing window to fetch"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
    client: PlaidClient = Depends(get_plaid_client),
):
    item = await get_plaid_item_by_id(item_id, user.id, db)
    if not item:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Linked institution not found")
    return await sync_item_transactions(item, client, db, days=days)
