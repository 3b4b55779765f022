# app/crud/plaid_item.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from app.models.plaid_item import PlaidItem
from typing import List, Optional
import uuid

async def get_plaid_items_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[PlaidItem]:
    result = await db.execute(
        select(PlaidItem)
        .where(PlaidItem.user_id == user_id)
        .order_by(desc(PlaidItem.created_at))
    )
    return result.scalars().all()

async def get_plaid_item_by_id(item_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[PlaidItem]:
    result = await db.execute(
        select(PlaidItem).where(PlaidItem.id == item_id, PlaidItem.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_plaid_item_by_plaid_id(plaid_item_id: str, db: AsyncSession) -> Optional[PlaidItem]:
    result = await db.execute(
        select(PlaidItem).where(PlaidItem.plaid_item_id == plaid_item_id)
    )
    return result.scalar_one_or_none()
