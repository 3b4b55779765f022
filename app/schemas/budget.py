# app/schemas/budget.py
from typing import Optional
from pydantic import BaseModel, Field, model_validator
from datetime import date, datetime
import uuid

class BudgetCreate(BaseModel):
    category_id: uuid.UUID
    amount: float
    period: str = Field("monthly", max_length=20, description="E.g. monthly, weekly, yearly")
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

class BudgetUpdate(BaseModel):
    amount: Optional[float] = None
    end_date: Optional[date] = None

class BudgetRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    category_id: uuid.UUID
    amount: float
    period: str
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True

class BudgetPerformance(BaseModel):
    budget: BudgetRead
    spent: float
    # Negative when the budget is overspent
    remaining: float
    percentage: float
