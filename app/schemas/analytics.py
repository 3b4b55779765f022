# app/schemas/analytics.py
from typing import List, Optional
from pydantic import BaseModel
from datetime import date
import uuid

class AccountBalance(BaseModel):
    account_id: uuid.UUID
    account_name: str
    balance: float

class NetWorthResponse(BaseModel):
    total: float
    accounts: List[AccountBalance]

class CategorySpending(BaseModel):
    category_id: Optional[uuid.UUID] = None
    category_name: Optional[str] = None
    total: float
    percentage: float

class TimeSeriesPoint(BaseModel):
    date: date
    amount: float
