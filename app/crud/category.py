# app/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, or_
from app.models.category import Category
from typing import List, Optional
import uuid
from app.schemas.category import CategoryCreate, CategoryUpdate

def _visible_to(user_id: uuid.UUID):
    """Categories a user may read: their own plus the shared defaults."""
    return or_(Category.user_id == user_id, Category.is_default.is_(True))

async def get_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category).where(_visible_to(user_id)).order_by(Category.name)
    )
    return result.scalars().all()

async def get_category_by_id(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, _visible_to(user_id))
    )
    return result.scalar_one_or_none()

async def get_owned_category(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    """Lookup used before any mutation. Defaults never match, so they stay read-only."""
    result = await db.execute(
        select(Category).where(
            Category.id == category_id,
            Category.user_id == user_id,
            Category.is_default.is_(False),
        )
    )
    return result.scalar_one_or_none()

async def create_category_for_user(user_id: uuid.UUID, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    new_cat = Category(**cat_in.model_dump(), user_id=user_id, is_default=False)
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat

async def update_category(category: Category, cat_in: CategoryUpdate, db: AsyncSession) -> Category:
    for field, value in cat_in.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(category, field, value)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category

async def delete_category_for_user(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> int:
    result = await db.execute(
        delete(Category).where(
            Category.id == category_id,
            Category.user_id == user_id,
            Category.is_default.is_(False),
        )
    )
    await db.commit()
    return result.rowcount


# Built-in categories shared by every user
DEFAULT_CATEGORIES: List[dict] = [
    {"name": "Groceries", "category_type": "expense", "color": "#22c55e", "icon": "🛒"},
    {"name": "Dining Out", "category_type": "expense", "color": "#f97316", "icon": "🍽️"},
    {"name": "Transportation", "category_type": "expense", "color": "#3b82f6", "icon": "🚗"},
    {"name": "Housing", "category_type": "expense", "color": "#8b5cf6", "icon": "🏠"},
    {"name": "Utilities", "category_type": "expense", "color": "#eab308", "icon": "💡"},
    {"name": "Entertainment", "category_type": "expense", "color": "#ec4899", "icon": "🎬"},
    {"name": "Shopping", "category_type": "expense", "color": "#14b8a6", "icon": "🛍️"},
    {"name": "Healthcare", "category_type": "expense", "color": "#ef4444", "icon": "⚕️"},
    {"name": "Travel", "category_type": "expense", "color": "#0ea5e9", "icon": "✈️"},
    {"name": "Subscriptions", "category_type": "expense", "color": "#a855f7", "icon": "📺"},
    {"name": "Income", "category_type": "income", "color": "#10b981", "icon": "💰"},
    {"name": "Transfer", "category_type": "transfer", "color": "#6b7280", "icon": "🔁"},
]

async def seed_default_categories(db: AsyncSession) -> List[Category]:
    """Ensure the shared default categories exist; create missing ones.

    Returns the list of categories that were created (empty if none were needed).
    """
    result = await db.execute(select(Category.name).where(Category.is_default.is_(True)))
    existing_names_lower = {row[0].lower() for row in result.all()}

    categories_to_create: List[Category] = []
    for cat in DEFAULT_CATEGORIES:
        if cat["name"].lower() not in existing_names_lower:
            categories_to_create.append(
                Category(
                    user_id=None,
                    name=cat["name"],
                    category_type=cat["category_type"],
                    color=cat["color"],
                    icon=cat["icon"],
                    is_default=True,
                )
            )

    if categories_to_create:
        db.add_all(categories_to_create)
        await db.commit()

    return categories_to_create
