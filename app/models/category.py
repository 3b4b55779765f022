# app/models/category.py
import uuid
from sqlalchemy import Column, String, ForeignKey, Boolean
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from app.core.database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # NULL for the built-in categories shared by every user
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(length=100), nullable=False)
    category_type = Column(String(length=20), nullable=False, default="expense")
    color = Column(String(length=20), nullable=False, default="#6b7280")
    icon = Column(String(length=50), nullable=True)
    is_default = Column(Boolean(), nullable=False, default=False)

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"
