# app/models/account.py
import uuid
from sqlalchemy import Column, String, ForeignKey, Float, DateTime
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from app.core.database import Base
from app.models.user import utcnow

class Account(Base):
    __tablename__ = "accounts"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Set only for accounts imported from a linked institution
    plaid_account_id = Column(String(length=255), nullable=True)
    plaid_item_id = Column(String(length=255), nullable=True)
    account_name = Column(String(length=255), nullable=False)
    account_type = Column(String(length=50), nullable=False)
    balance = Column(Float, nullable=False, default=0.0)
    currency = Column(String(length=3), nullable=False, default="USD")
    last_synced = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Account name={self.account_name} balance={self.balance} user_id={self.user_id}>"
