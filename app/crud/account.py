# app/crud/account.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc
from app.models.account import Account
from typing import List, Optional
import uuid
from app.schemas.account import AccountCreate, AccountUpdate

async def get_accounts_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Account]:
    result = await db.execute(
        select(Account)
        .where(Account.user_id == user_id)
        .order_by(desc(Account.created_at))
    )
    return result.scalars().all()

async def get_account_by_id(account_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Account]:
    result = await db.execute(
        select(Account).where(Account.id == account_id, Account.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_account_by_plaid_id(plaid_account_id: str, user_id: uuid.UUID, db: AsyncSession) -> Optional[Account]:
    result = await db.execute(
        select(Account).where(
            Account.plaid_account_id == plaid_account_id,
            Account.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()

async def create_account_for_user(user_id: uuid.UUID, acc_in: AccountCreate, db: AsyncSession) -> Account:
    new_acc = Account(**acc_in.model_dump(), user_id=user_id)
    db.add(new_acc)
    await db.commit()
    await db.refresh(new_acc)
    return new_acc

async def update_account(account: Account, acc_in: AccountUpdate, db: AsyncSession) -> Account:
    for field, value in acc_in.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(account, field, value)
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account

async def delete_account_for_user(account_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> int:
    """Delete the account if the user owns it. Returns the number of rows removed (0 or 1)."""
    result = await db.execute(
        delete(Account).where(Account.id == account_id, Account.user_id == user_id)
    )
    await db.commit()
    return result.rowcount
