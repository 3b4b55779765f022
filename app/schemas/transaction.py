# app/schemas/transaction.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import date, datetime
import uuid

class TransactionCreate(BaseModel):
    account_id: uuid.UUID
    date: date
    amount: float = Field(..., description="Negative for money out, positive for money in")
    description: str = Field(..., min_length=1, max_length=255, description="E.g. Grocery Store")
    category_id: Optional[uuid.UUID] = None
    merchant_name: Optional[str] = Field(None, max_length=255)

class TransactionUpdate(BaseModel):
    category_id: Optional[uuid.UUID] = None
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = None

class TransactionFilter(BaseModel):
    """Optional predicates for listing transactions; unset ones impose no constraint."""
    account_id: Optional[uuid.UUID] = None
    category_id: Optional[uuid.UUID] = None
    uncategorized: bool = False
    start_date: Optional[date] = None
    end_date: Optional[date] = None

class TransactionRead(BaseModel):
    id: uuid.UUID
    account_id: uuid.UUID
    plaid_transaction_id: Optional[str] = None
    date: date
    amount: float
    description: str
    category_id: Optional[uuid.UUID] = None
    merchant_name: Optional[str] = None
    pending: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
