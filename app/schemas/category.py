# app/schemas/category.py
from typing import Literal, Optional
from pydantic import BaseModel, Field
import uuid

CategoryType = Literal["expense", "income", "transfer"]

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category_type: CategoryType = "expense"
    color: str = Field("#6b7280", max_length=20)
    icon: Optional[str] = Field(None, max_length=50)

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=50)

class CategoryRead(BaseModel):
    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    name: str
    category_type: str
    color: str
    icon: Optional[str] = None
    is_default: bool

    class Config:
        from_attributes = True
