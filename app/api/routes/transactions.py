# app/api/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionRead,
    TransactionUpdate,
)
from app.crud.transaction import (
    create_transaction,
    get_transactions_for_user,
    get_transaction_by_id,
    update_transaction,
    delete_transaction_for_user,
)
from app.crud.account import get_account_by_id
from app.crud.category import get_category_by_id
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user

router = APIRouter(prefix="/transactions", tags=["transactions"])

async def _check_category(category_id, user: User, db: AsyncSession) -> None:
    if category_id is not None and not await get_category_by_id(category_id, user.id, db):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Invalid category")

@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    filters: TransactionFilter = Depends(),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    List the caller's transactions, newest first.

    - **account_id** / **category_id**: only transactions on that account / in that category
    - **uncategorized**: only transactions without a category
    - **start_date** / **end_date**: inclusive date range
    """
    return await get_transactions_for_user(user.id, db, filters)

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction_endpoint(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    if not await get_account_by_id(tx_in.account_id, user.id, db):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Invalid account")
    await _check_category(tx_in.category_id, user, db)
    return await create_transaction(tx_in, db)

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx

@router.put("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await _check_category(tx_in.category_id, user, db)
    return await update_transaction(tx, tx_in, db)

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await delete_transaction_for_user(transaction_id, user.id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
