from pydantic import BaseModel, Field, StrictFloat, StrictInt

from creditdesk.schemas.common import CamelModel


class CreditStatusView(CamelModel):
    has_credits: bool
    credits_left: int


class DeductCreditsRequest(CamelModel):
    user_id: str | None = None
    amount: StrictInt | StrictFloat | None = None


class DeductionView(CamelModel):
    credits_left: int
    used_today: int
    used_credit: int


class InsufficientCreditsView(CamelModel):
    credits_left: int


class CreditAccountCreate(BaseModel):
    is_daily: bool = False
    daily_credits_assigned: int = Field(default=0, ge=0)
    monthly_credits_assigned: int = Field(default=0, ge=0)
