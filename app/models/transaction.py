# app/models/transaction.py
import uuid
from sqlalchemy import Column, String, ForeignKey, Float, Date, DateTime, Boolean
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from app.core.database import Base
from app.models.user import utcnow

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Ownership is transitive: transaction -> account -> user
    account_id = Column(PG_UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    plaid_transaction_id = Column(String(length=255), unique=True, nullable=True)
    date = Column(Date, nullable=False, index=True)
    # Negative = money out, positive = money in
    amount = Column(Float, nullable=False)
    description = Column(String(length=255), nullable=False)
    category_id = Column(PG_UUID(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    merchant_name = Column(String(length=255), nullable=True)
    pending = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Transaction amount={self.amount} date={self.date} account_id={self.account_id}>"
