"""Credit ledger: remaining quota, status queries and atomic deductions."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from sqlalchemy.orm import Session

from creditdesk.core.exceptions import (
    InsufficientCreditsError,
    InvalidInputError,
    NotFoundError,
    TransientStoreError,
)
from creditdesk.models.credit_account import CreditAccount
from creditdesk.repositories.credit_account_repository import CreditAccountRepository
from creditdesk.repositories.user_repository import UserRepository
from creditdesk.services.identifiers import normalize_external_id
from creditdesk.services.periods import resolve_now, usage_day

logger = logging.getLogger(__name__)

# Conditional updates that lose to a concurrent mode change are re-evaluated
# this many times before giving up.
MAX_DEDUCTION_ATTEMPTS = 3


@dataclass
class CreditStatus:
    has_credits: bool
    credits_left: int


@dataclass
class DeductionResult:
    """Counters after a successful deduction."""

    credits_left: int
    used_today: int
    used_credit: int


def used_today(account: CreditAccount, today: date) -> int:
    """Usage counted against today; a counter from an earlier day reads as zero."""
    if account.usage_date != today:
        return 0
    return int(account.today_used or 0)


def remaining_credits(account: CreditAccount, today: date) -> int:
    """Allowance minus usage under the account's active mode.

    May be negative if the allowance was lowered below current usage.
    """
    if account.is_daily:
        return int(account.daily_credits_assigned or 0) - used_today(account, today)
    return int(account.monthly_credits_assigned or 0) - int(account.used_credit or 0)


def validate_amount(amount: Any) -> int:
    """Accept positive whole numbers of credits (``5`` or ``5.0``)."""
    if isinstance(amount, bool) or not isinstance(amount, int | float):
        raise InvalidInputError("Missing or invalid userId or amount")
    if isinstance(amount, float) and (not math.isfinite(amount) or not amount.is_integer()):
        raise InvalidInputError("Amount must be a whole number of credits")
    if amount <= 0:
        raise InvalidInputError("Missing or invalid userId or amount")
    return int(amount)


class CreditLedgerService:
    """Service for credit quota business logic."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.account_repo = CreditAccountRepository(db)

    def get_account(self, external_id: str | None) -> CreditAccount:
        external_id = normalize_external_id(external_id)
        if not external_id:
            raise InvalidInputError("Missing userId")

        user = self.user_repo.get_by_external_id(external_id)
        if not user:
            raise NotFoundError("User not found")

        account = self.account_repo.get_by_user_id(user.id)  # type: ignore[arg-type]
        if not account:
            raise NotFoundError("Credits not found")
        return account

    def get_status(self, external_id: str | None, now: datetime | None = None) -> CreditStatus:
        account = self.get_account(external_id)
        remaining = remaining_credits(account, usage_day(resolve_now(now)))
        return CreditStatus(has_credits=remaining > 0, credits_left=remaining)

    def deduct(
        self,
        external_id: str | None,
        amount: Any,
        now: datetime | None = None,
    ) -> DeductionResult:
        """Deduct ``amount`` credits, never letting usage exceed the allowance.

        The sufficiency check is repeated inside the store by a conditional
        update, so concurrent deductions cannot both pass against a stale
        read. Raises InsufficientCreditsError with the remaining quota when
        the amount is not covered; nothing is written on any failure.
        """
        external_id = normalize_external_id(external_id)
        if not external_id:
            raise InvalidInputError("Missing or invalid userId or amount")
        credits = validate_amount(amount)
        today = usage_day(resolve_now(now))

        account = self.get_account(external_id)
        user_id = account.user_id

        for _ in range(MAX_DEDUCTION_ATTEMPTS):
            remaining = remaining_credits(account, today)
            if credits > remaining:
                logger.info(
                    "Rejected deduction of %d credits for user %s: %d left",
                    credits,
                    external_id,
                    remaining,
                )
                raise InsufficientCreditsError(credits_left=remaining)

            written = self.account_repo.increment_usage(account, credits, today)
            if written is not None:
                # Counters as this statement left them, before any later commit
                result = DeductionResult(
                    credits_left=remaining_credits(written, today),
                    used_today=used_today(written, today),
                    used_credit=int(written.used_credit or 0),
                )
                logger.info(
                    "Deducted %d credits for user %s: %d left",
                    credits,
                    external_id,
                    result.credits_left,
                )
                return result

            # Lost a race; re-read and decide again against the fresh row
            reloaded = self.account_repo.get_by_user_id(user_id)  # type: ignore[arg-type]
            if not reloaded:
                raise NotFoundError("Credits not found")
            account = reloaded

        logger.warning("Deduction for user %s kept conflicting, giving up", external_id)
        raise TransientStoreError()
