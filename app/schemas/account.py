# app/schemas/account.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

class AccountBase(BaseModel):
    account_name: str = Field(..., min_length=1, max_length=255, description="E.g. Everyday Checking")
    account_type: str = Field("checking", max_length=50)
    balance: float = 0.0
    currency: str = Field("USD", min_length=3, max_length=3)

class AccountCreate(AccountBase):
    pass

class AccountUpdate(BaseModel):
    account_name: Optional[str] = Field(None, min_length=1, max_length=255)
    account_type: Optional[str] = Field(None, max_length=50)
    balance: Optional[float] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)

class AccountRead(AccountBase):
    id: uuid.UUID
    user_id: uuid.UUID
    plaid_account_id: Optional[str] = None
    plaid_item_id: Optional[str] = None
    last_synced: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
