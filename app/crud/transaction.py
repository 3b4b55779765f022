# app/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc, Select
from app.models.account import Account
from app.models.transaction import Transaction
from app.models.user import utcnow
from typing import List, Optional
from datetime import date
import uuid
from app.schemas.transaction import TransactionCreate, TransactionFilter, TransactionUpdate

def owned_account_ids(user_id: uuid.UUID) -> Select:
    """Subquery of the account IDs a user owns; every transaction query is scoped through it."""
    return select(Account.id).where(Account.user_id == user_id)

def build_transaction_query(user_id: uuid.UUID, filters: Optional[TransactionFilter] = None) -> Select:
    """
    Build the listing query from a filter specification.

    Every combination of predicates is valid and an unset predicate adds no
    constraint. The ownership scope is always applied.
    """
    query = (
        select(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .where(Account.user_id == user_id)
    )
    if filters is None:
        filters = TransactionFilter()

    if filters.account_id is not None:
        query = query.where(Transaction.account_id == filters.account_id)
    if filters.category_id is not None:
        query = query.where(Transaction.category_id == filters.category_id)
    if filters.uncategorized:
        query = query.where(Transaction.category_id.is_(None))
    if filters.start_date is not None:
        query = query.where(Transaction.date >= filters.start_date)
    if filters.end_date is not None:
        query = query.where(Transaction.date <= filters.end_date)

    return query.order_by(desc(Transaction.date), desc(Transaction.created_at))

async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    filters: Optional[TransactionFilter] = None,
) -> List[Transaction]:
    result = await db.execute(build_transaction_query(user_id, filters))
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .where(Transaction.id == transaction_id, Account.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_transaction_by_plaid_id(plaid_transaction_id: str, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.plaid_transaction_id == plaid_transaction_id)
    )
    return result.scalar_one_or_none()

async def get_pending_plaid_transactions(
    account_ids: List[uuid.UUID],
    start_date: date,
    end_date: date,
    db: AsyncSession,
) -> List[Transaction]:
    """Pending provider transactions on the given accounts dated inside the window."""
    if not account_ids:
        return []
    result = await db.execute(
        select(Transaction).where(
            Transaction.account_id.in_(account_ids),
            Transaction.plaid_transaction_id.is_not(None),
            Transaction.pending.is_(True),
            Transaction.date >= start_date,
            Transaction.date <= end_date,
        )
    )
    return result.scalars().all()

async def create_transaction(tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    """Insert a transaction. The caller has already checked the account belongs to the user."""
    new_tx = Transaction(**tx_in.model_dump(), pending=False)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    changes = tx_in.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in changes.items():
        setattr(tx, field, value)
    if changes:
        tx.updated_at = utcnow()
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def delete_transaction_for_user(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> int:
    result = await db.execute(
        delete(Transaction).where(
            Transaction.id == transaction_id,
            Transaction.account_id.in_(owned_account_ids(user_id)),
        )
    )
    await db.commit()
    return result.rowcount
