# app/utils/analytics.py
"""
Read-only aggregations over a user's accounts and transactions.

Every query joins transactions to accounts and filters on the account owner,
so nothing outside the caller's own data is ever summed.
"""
from datetime import date
from typing import Any, Dict, List, Optional
import uuid

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Account
from app.models.budget import Budget
from app.models.category import Category
from app.models.transaction import Transaction


def percentage_of(part: float, whole: float) -> float:
    """part as a percentage of whole; 0 when whole is not positive."""
    if whole <= 0:
        return 0.0
    return part / whole * 100


def _outflows_in_range(user_id: uuid.UUID, start_date: date, end_date: date) -> list:
    return [
        Account.user_id == user_id,
        Transaction.date >= start_date,
        Transaction.date <= end_date,
        Transaction.amount < 0,
    ]


# ────────────────────────────────────────────────────────────────────────────────
# NET WORTH
# ────────────────────────────────────────────────────────────────────────────────
async def calculate_net_worth(user_id: uuid.UUID, db: AsyncSession) -> Dict[str, Any]:
    result = await db.execute(
        select(Account.id, Account.account_name, Account.balance)
        .where(Account.user_id == user_id)
        .order_by(Account.created_at)
    )
    rows = result.all()

    accounts = [
        {"account_id": row.id, "account_name": row.account_name, "balance": row.balance}
        for row in rows
    ]
    return {
        "total": sum(row.balance for row in rows),
        "accounts": accounts,
    }


# ────────────────────────────────────────────────────────────────────────────────
# SPENDING BY CATEGORY
# ────────────────────────────────────────────────────────────────────────────────
async def spending_by_category(
    user_id: uuid.UUID,
    start_date: date,
    end_date: date,
    db: AsyncSession,
) -> List[Dict[str, Any]]:
    total_result = await db.execute(
        select(func.coalesce(func.sum(func.abs(Transaction.amount)), 0.0))
        .select_from(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .where(*_outflows_in_range(user_id, start_date, end_date))
    )
    total_spending = float(total_result.scalar_one() or 0.0)

    total_col = func.sum(func.abs(Transaction.amount)).label("total")
    result = await db.execute(
        select(Transaction.category_id, Category.name.label("category_name"), total_col)
        .select_from(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .outerjoin(Category, Transaction.category_id == Category.id)
        .where(*_outflows_in_range(user_id, start_date, end_date))
        .group_by(Transaction.category_id, Category.name)
        .order_by(desc("total"))
    )

    rows = []
    for row in result.all():
        total = float(row.total or 0.0)
        rows.append({
            "category_id": row.category_id,
            "category_name": row.category_name,
            "total": total,
            "percentage": percentage_of(total, total_spending),
        })
    return rows


# ────────────────────────────────────────────────────────────────────────────────
# TIME SERIES
# ────────────────────────────────────────────────────────────────────────────────
async def _daily_totals(
    user_id: uuid.UUID,
    start_date: date,
    end_date: date,
    db: AsyncSession,
    inflow: bool,
) -> List[Dict[str, Any]]:
    if inflow:
        amount_col = func.sum(Transaction.amount)
        direction = Transaction.amount > 0
    else:
        amount_col = func.sum(func.abs(Transaction.amount))
        direction = Transaction.amount < 0

    result = await db.execute(
        select(Transaction.date, amount_col.label("amount"))
        .select_from(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .where(
            Account.user_id == user_id,
            Transaction.date >= start_date,
            Transaction.date <= end_date,
            direction,
        )
        .group_by(Transaction.date)
        .order_by(Transaction.date)
    )
    # Days without matching transactions are simply absent
    return [{"date": row.date, "amount": float(row.amount or 0.0)} for row in result.all()]

async def income_over_time(user_id: uuid.UUID, start_date: date, end_date: date, db: AsyncSession) -> List[Dict[str, Any]]:
    return await _daily_totals(user_id, start_date, end_date, db, inflow=True)

async def spending_over_time(user_id: uuid.UUID, start_date: date, end_date: date, db: AsyncSession) -> List[Dict[str, Any]]:
    return await _daily_totals(user_id, start_date, end_date, db, inflow=False)


# ────────────────────────────────────────────────────────────────────────────────
# BUDGET PERFORMANCE
# ────────────────────────────────────────────────────────────────────────────────
async def calculate_budget_performance(
    budget: Budget,
    db: AsyncSession,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Outflow spent in the budget's category between its start date and its end
    date (today for open-ended budgets), and what is left of the amount.
    """
    end_date = budget.end_date or today or date.today()

    result = await db.execute(
        select(func.coalesce(func.sum(func.abs(Transaction.amount)), 0.0))
        .select_from(Transaction)
        .join(Account, Transaction.account_id == Account.id)
        .where(
            Transaction.category_id == budget.category_id,
            *_outflows_in_range(budget.user_id, budget.start_date, end_date),
        )
    )
    spent = float(result.scalar_one() or 0.0)

    return {
        "budget": budget,
        "spent": spent,
        "remaining": budget.amount - spent,
        "percentage": percentage_of(spent, budget.amount),
    }
