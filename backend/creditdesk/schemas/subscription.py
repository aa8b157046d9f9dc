from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from creditdesk.models.subscription import BillingCycle, SubscriptionStatus


class SubscriptionCreate(BaseModel):
    external_id: str = Field(..., min_length=1, max_length=255)
    plan: str = Field(..., min_length=1, max_length=255)
    duration: BillingCycle = BillingCycle.MONTHLY
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    price: Decimal = Field(default=Decimal("0"), ge=0)
    current_period_end: datetime
