# app/api/routes/accounts.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.schemas.account import AccountCreate, AccountRead, AccountUpdate
from app.crud.account import (
    create_account_for_user,
    get_accounts_for_user,
    get_account_by_id,
    update_account,
    delete_account_for_user,
)
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user

router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.get("", response_model=List[AccountRead])
async def read_accounts(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_accounts_for_user(user.id, db)

@router.post("", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def create_account(
    acc_in: AccountCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Create a manually tracked account (linked accounts come from Plaid)"""
    return await create_account_for_user(user.id, acc_in, db)

@router.get("/{account_id}", response_model=AccountRead)
async def read_account(
    account_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    account = await get_account_by_id(account_id, user.id, db)
    if not account:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Account not found")
    return account

@router.put("/{account_id}", response_model=AccountRead)
async def update_account_endpoint(
    account_id: uuid.UUID,
    acc_in: AccountUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    account = await get_account_by_id(account_id, user.id, db)
    if not account:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Account not found")
    return await update_account(account, acc_in, db)

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account_endpoint(
    account_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    # Deleting something that is missing or not yours is a no-op
    await delete_account_for_user(account_id, user.id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
