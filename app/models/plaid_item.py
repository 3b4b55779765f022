# app/models/plaid_item.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from app.core.database import Base
from app.models.user import utcnow

class PlaidItem(Base):
    """A bank connection created through Plaid Link."""
    __tablename__ = "plaid_items"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    plaid_access_token = Column(String(length=255), nullable=False)
    plaid_item_id = Column(String(length=255), unique=True, nullable=False)
    institution_id = Column(String(length=100), nullable=False, default="")
    institution_name = Column(String(length=255), nullable=False, default="")
    status = Column(String(length=20), nullable=False, default="active")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<PlaidItem institution={self.institution_name} user_id={self.user_id}>"
