"""Credit account model: the quota state of one user."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    func,
)
from sqlalchemy.orm import relationship

from creditdesk.core.database import Base
from creditdesk.models.shared import UUIDType, generate_uuid


class CreditAccount(Base):
    """Quota counters for one user.

    ``is_daily`` selects the accounting mode. In daily mode ``today_used`` is
    bounded by ``daily_credits_assigned`` and only counts usage on
    ``usage_date``; a stale ``usage_date`` means nothing was used today yet.
    ``used_credit`` accumulates over the billing period in both modes.
    """

    __tablename__ = "credit_accounts"
    __table_args__ = (
        CheckConstraint("daily_credits_assigned >= 0", name="ck_credit_accounts_daily_assigned"),
        CheckConstraint(
            "monthly_credits_assigned >= 0", name="ck_credit_accounts_monthly_assigned"
        ),
        CheckConstraint("today_used >= 0", name="ck_credit_accounts_today_used"),
        CheckConstraint("used_credit >= 0", name="ck_credit_accounts_used_credit"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(
        UUIDType,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )
    is_daily = Column(Boolean, nullable=False, default=False)
    daily_credits_assigned = Column(Integer, nullable=False, default=0)
    today_used = Column(Integer, nullable=False, default=0)
    usage_date = Column(Date, nullable=True)
    monthly_credits_assigned = Column(Integer, nullable=False, default=0)
    used_credit = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="credit_account")
