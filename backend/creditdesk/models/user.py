from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.orm import relationship

from creditdesk.core.database import Base
from creditdesk.models.shared import UUIDType, generate_uuid


class User(Base):
    """A user identified by the identity provider's stable id.

    Owns exactly one credit account, one subscription and an append-only list
    of billing entries. All of them are created together at provisioning.
    """

    __tablename__ = "users"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    external_id = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    credit_account = relationship("CreditAccount", uselist=False, back_populates="user")
    subscription = relationship("Subscription", uselist=False, back_populates="user")
    billing_entries = relationship("BillingEntry", back_populates="user")
