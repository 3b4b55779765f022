# app/schemas/plaid.py
from typing import List
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from app.schemas.account import AccountRead

class LinkTokenResponse(BaseModel):
    link_token: str

class PublicTokenExchangeRequest(BaseModel):
    public_token: str = Field(..., min_length=1)

class PlaidItemRead(BaseModel):
    # No access token: it never leaves the server
    id: uuid.UUID
    plaid_item_id: str
    institution_id: str
    institution_name: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True

class LinkedItemResponse(BaseModel):
    item: PlaidItemRead
    accounts: List[AccountRead]

class SyncResult(BaseModel):
    accounts_updated: int
    transactions_created: int
    transactions_updated: int
    transactions_skipped: int
    # Pending rows the provider no longer reports
    transactions_removed: int
