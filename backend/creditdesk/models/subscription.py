from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import relationship

from creditdesk.core.database import Base
from creditdesk.models.shared import UUIDType, generate_uuid


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )
    # Reference at the payment provider; synthetic for the free plan
    external_id = Column(String(255), unique=True, nullable=False)
    plan = Column(String(255), nullable=False)
    duration = Column(String(20), nullable=False, default=BillingCycle.MONTHLY.value)
    status = Column(String(20), nullable=False, default=SubscriptionStatus.ACTIVE.value)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    current_period_end = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="subscription")
