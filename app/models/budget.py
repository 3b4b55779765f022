# app/models/budget.py
import uuid
from sqlalchemy import Column, String, ForeignKey, Float, Date, DateTime
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from app.core.database import Base
from app.models.user import utcnow

class Budget(Base):
    __tablename__ = "budgets"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(PG_UUID(as_uuid=True), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Float, nullable=False)
    period = Column(String(length=20), nullable=False, default="monthly")
    start_date = Column(Date, nullable=False)
    # Open-ended budgets are measured up to today
    end_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Budget amount={self.amount} period={self.period} user_id={self.user_id}>"
