# app/api/routes/categories.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.crud.category import (
    create_category_for_user,
    get_categories_for_user,
    get_category_by_id,
    get_owned_category,
    update_category,
    delete_category_for_user,
)
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=List[CategoryRead])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """The caller's own categories together with the built-in defaults"""
    return await get_categories_for_user(user.id, db)

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_category_for_user(user.id, cat_in, db)

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_category_by_id(category_id, user.id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category

@router.put("/{category_id}", response_model=CategoryRead)
async def update_category_endpoint(
    category_id: uuid.UUID,
    cat_in: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    # Default categories never match here, so editing one is a 404
    category = await get_owned_category(category_id, user.id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return await update_category(category, cat_in, db)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_category_by_id(category_id, user.id, db)
    if category and category.is_default:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    # Otherwise a no-op when the category is missing or belongs to someone else
    await delete_category_for_user(category_id, user.id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
