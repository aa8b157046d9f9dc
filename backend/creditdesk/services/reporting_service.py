"""Read-only projections of a user's quota, plan and billing history."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from creditdesk.core.config import settings
from creditdesk.core.exceptions import IncompleteProfileError, InvalidInputError, NotFoundError
from creditdesk.models.subscription import BillingCycle, SubscriptionStatus
from creditdesk.models.user import User
from creditdesk.repositories.billing_entry_repository import BillingEntryRepository
from creditdesk.repositories.user_repository import UserRepository
from creditdesk.schemas.reporting import BillingEntryView, DashboardView, PlanOverviewView
from creditdesk.services.credit_ledger_service import used_today
from creditdesk.services.identifiers import normalize_external_id
from creditdesk.services.periods import resolve_now, to_iso, usage_day


def round_one_decimal(value: float | Decimal) -> float:
    """Round half up to one decimal place."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReportingService:
    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.billing_repo = BillingEntryRepository(db)

    def _get_user(self, external_id: str | None, with_profile: bool = False) -> User:
        external_id = normalize_external_id(external_id)
        if not external_id:
            raise InvalidInputError("Missing userId")
        if with_profile:
            user = self.user_repo.get_with_profile(external_id)
        else:
            user = self.user_repo.get_by_external_id(external_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _get_profile(self, external_id: str | None) -> User:
        user = self._get_user(external_id, with_profile=True)
        if user.subscription is None or user.credit_account is None:
            raise IncompleteProfileError("User subscription or credits not found")
        return user

    def get_dashboard(self, external_id: str | None, now: datetime | None = None) -> DashboardView:
        user = self._get_profile(external_id)
        credits = user.credit_account
        subscription = user.subscription
        now = resolve_now(now)

        is_daily = bool(credits.is_daily)
        daily_assigned = int(credits.daily_credits_assigned or 0)
        total_credits = (
            daily_assigned * settings.DAILY_PLAN_PERIOD_DAYS
            if is_daily
            else int(credits.monthly_credits_assigned or 0)
        )
        used_this_month = int(credits.used_credit or 0)

        today_count = used_today(credits, usage_day(now)) if is_daily else None
        remaining_today = daily_assigned - today_count if today_count is not None else None

        percent_used = (
            round_one_decimal(Decimal(used_this_month) / Decimal(total_credits) * 100)
            if total_credits
            else None
        )

        return DashboardView(
            used_today=today_count,
            remaining_today=remaining_today,
            used_this_month=used_this_month,
            remaining_this_month=total_credits - used_this_month,
            total_credits=total_credits,
            avg_per_day=round_one_decimal(Decimal(used_this_month) / Decimal(now.day)),
            percent_used=percent_used,
            is_daily=is_daily,
            plan=subscription.plan,
            period=subscription.duration,
        )

    def get_plan_overview(self, external_id: str | None) -> PlanOverviewView:
        user = self._get_profile(external_id)
        credits = user.credit_account
        subscription = user.subscription

        is_daily = bool(credits.is_daily)
        daily_assigned = int(credits.daily_credits_assigned or 0)
        return PlanOverviewView(
            name=subscription.plan,
            billing_cycle=subscription.duration,
            price=float(subscription.price or 0),
            is_active=subscription.status == SubscriptionStatus.ACTIVE.value,
            is_daily=is_daily,
            is_monthly=subscription.duration == BillingCycle.MONTHLY.value,
            credits=daily_assigned if is_daily else int(credits.monthly_credits_assigned or 0),
            daily_credits=daily_assigned if is_daily else 0,
            current_period_end=to_iso(subscription.current_period_end),
            status=subscription.status,
        )

    def get_billing_history(self, external_id: str | None) -> list[BillingEntryView]:
        user = self._get_user(external_id)
        return [
            BillingEntryView(
                invoice_id=entry.invoice_id,
                amount=float(Decimal(int(entry.amount_cents)) / 100),
                currency=entry.currency.upper(),
                plan=entry.plan_name,
                cycle=entry.billing_cycle,
                status=entry.status,
                paid_at=to_iso(entry.paid_at),
            )
            for entry in self.billing_repo.get_by_user_id(user.id)  # type: ignore[arg-type]
        ]
