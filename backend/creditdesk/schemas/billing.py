from datetime import datetime

from pydantic import BaseModel, Field

from creditdesk.models.billing_entry import BillingEntryStatus


class BillingEntryCreate(BaseModel):
    invoice_id: str = Field(..., min_length=1, max_length=255)
    amount_cents: int = Field(default=0, ge=0)
    currency: str = Field(default="usd", min_length=3, max_length=3)
    plan_name: str = Field(..., min_length=1, max_length=255)
    billing_cycle: str = Field(..., max_length=20)
    status: BillingEntryStatus = BillingEntryStatus.PAID
    paid_at: datetime
