"""Billing ledger entry model. Rows are appended and never updated."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from creditdesk.core.database import Base
from creditdesk.models.shared import UUIDType, generate_uuid


class BillingEntryStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    FAILED = "failed"
    REFUNDED = "refunded"


class BillingEntry(Base):
    __tablename__ = "billing_entries"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    invoice_id = Column(String(255), unique=True, nullable=False)
    amount_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="usd")
    plan_name = Column(String(255), nullable=False)
    billing_cycle = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=BillingEntryStatus.PAID.value)
    paid_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="billing_entries")
