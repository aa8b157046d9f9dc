"""Read-side views: dashboard, plan overview and billing history."""

from creditdesk.schemas.common import CamelModel


class DashboardView(CamelModel):
    used_today: int | None = None  # daily plans only
    remaining_today: int | None = None  # daily plans only
    used_this_month: int
    remaining_this_month: int
    total_credits: int
    avg_per_day: float
    percent_used: float | None  # None when the plan grants no credits
    is_daily: bool
    plan: str
    period: str


class PlanOverviewView(CamelModel):
    name: str
    billing_cycle: str
    price: float
    is_active: bool
    is_daily: bool
    is_monthly: bool
    credits: int
    daily_credits: int
    current_period_end: str
    status: str


class BillingEntryView(CamelModel):
    invoice_id: str
    amount: float
    currency: str
    plan: str
    cycle: str
    status: str
    paid_at: str
