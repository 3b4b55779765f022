# app/api/routes/budgets.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from app.schemas.budget import BudgetCreate, BudgetPerformance, BudgetRead, BudgetUpdate
from app.crud.budget import (
    create_budget_for_user,
    get_budgets_for_user,
    get_budget_by_id,
    update_budget,
    delete_budget_for_user,
)
from app.crud.category import get_category_by_id
from app.utils.analytics import calculate_budget_performance
from app.core.database import get_async_session
from app.models.user import User
from app.api.deps import get_current_user

router = APIRouter(prefix="/budgets", tags=["budgets"])

@router.get("", response_model=List[BudgetRead])
async def read_budgets(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_budgets_for_user(user.id, db)

@router.post("", response_model=BudgetRead, status_code=status.HTTP_201_CREATED)
async def create_budget(
    budget_in: BudgetCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    if not await get_category_by_id(budget_in.category_id, user.id, db):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Invalid category")
    return await create_budget_for_user(user.id, budget_in, db)

@router.get("/{budget_id}", response_model=BudgetRead)
async def read_budget(
    budget_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await get_budget_by_id(budget_id, user.id, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Budget not found")
    return budget

@router.put("/{budget_id}", response_model=BudgetRead)
async def update_budget_endpoint(
    budget_id: uuid.UUID,
    budget_in: BudgetUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await get_budget_by_id(budget_id, user.id, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Budget not found")
    if budget_in.end_date is not None and budget_in.end_date < budget.start_date:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="end_date must not be before start_date")
    return await update_budget(budget, budget_in, db)

@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget_endpoint(
    budget_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    await delete_budget_for_user(budget_id, user.id, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{budget_id}/performance", response_model=BudgetPerformance)
async def read_budget_performance(
    budget_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    How much of a budget has been used.

    Returns:
    - **spent**: outflow in the budget's category from its start date up to its end date (or today)
    - **remaining**: amount minus spent, negative when over budget
    - **percentage**: spent as a percentage of the amount
    """
    budget = await get_budget_by_id(budget_id, user.id, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Budget not found")
    return await calculate_budget_performance(budget, db)
