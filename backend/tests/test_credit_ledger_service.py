"""Tests for CreditLedgerService business logic."""

from datetime import timedelta
from types import SimpleNamespace
from typing import Any

import pytest

from creditdesk.core import database as db_module
from creditdesk.core.exceptions import (
    ErrorKind,
    InsufficientCreditsError,
    InvalidInputError,
    NotFoundError,
)
from creditdesk.repositories.credit_account_repository import CreditAccountRepository
from creditdesk.services.credit_ledger_service import (
    CreditLedgerService,
    DeductionResult,
    remaining_credits,
    used_today,
    validate_amount,
)
from tests.conftest import NOW, TODAY


@pytest.fixture
def ledger(db_session):
    return CreditLedgerService(db_session)


@pytest.fixture
def account_repo(db_session):
    return CreditAccountRepository(db_session)


def _account(**kwargs: Any) -> Any:
    """Create a lightweight credit-account-like object for pure-logic tests."""
    defaults = {
        "is_daily": False,
        "daily_credits_assigned": 0,
        "today_used": 0,
        "usage_date": None,
        "monthly_credits_assigned": 0,
        "used_credit": 0,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


class TestRemainingCredits:
    def test_monthly_mode(self):
        account = _account(monthly_credits_assigned=100, used_credit=90)
        assert remaining_credits(account, TODAY) == 10

    def test_monthly_mode_ignores_daily_counters(self):
        account = _account(
            monthly_credits_assigned=100,
            used_credit=10,
            daily_credits_assigned=5,
            today_used=5,
            usage_date=TODAY,
        )
        assert remaining_credits(account, TODAY) == 90

    def test_daily_mode(self):
        account = _account(
            is_daily=True, daily_credits_assigned=10, today_used=4, usage_date=TODAY
        )
        assert remaining_credits(account, TODAY) == 6

    def test_daily_mode_stale_counter_reads_as_zero(self):
        account = _account(
            is_daily=True,
            daily_credits_assigned=10,
            today_used=10,
            usage_date=TODAY - timedelta(days=1),
        )
        assert used_today(account, TODAY) == 0
        assert remaining_credits(account, TODAY) == 10

    def test_missing_values_default_to_zero(self):
        account = _account(monthly_credits_assigned=None, used_credit=None)
        assert remaining_credits(account, TODAY) == 0

    def test_can_be_negative_when_allowance_lowered(self):
        account = _account(monthly_credits_assigned=5, used_credit=8)
        assert remaining_credits(account, TODAY) == -3


class TestValidateAmount:
    @pytest.mark.parametrize("amount", [0, -1, -0.5, None, "5", True, False, 1.5, float("nan")])
    def test_rejects_invalid_amounts(self, amount):
        with pytest.raises(InvalidInputError):
            validate_amount(amount)

    def test_accepts_integral_float(self):
        assert validate_amount(5.0) == 5
        assert isinstance(validate_amount(5.0), int)


class TestGetStatus:
    def test_status_with_credits(self, ledger, user_factory):
        user_factory("status_user", monthly_credits_assigned=2)
        status = ledger.get_status("status_user", now=NOW)
        assert status.has_credits is True
        assert status.credits_left == 2

    def test_status_without_credits(self, ledger, user_factory):
        user_factory("empty_user", monthly_credits_assigned=2, used_credit=2)
        status = ledger.get_status("empty_user", now=NOW)
        assert status.has_credits is False
        assert status.credits_left == 0

    def test_status_unknown_user(self, ledger):
        with pytest.raises(NotFoundError) as exc_info:
            ledger.get_status("nobody", now=NOW)
        assert exc_info.value.kind == ErrorKind.NOT_FOUND
        assert exc_info.value.message == "User not found"

    def test_status_user_without_account(self, ledger, user_factory):
        user_factory("no_credits", with_credits=False)
        with pytest.raises(NotFoundError, match="Credits not found"):
            ledger.get_status("no_credits", now=NOW)

    def test_status_identifier_with_surrounding_whitespace(self, ledger, user_factory):
        user_factory("padded_user", monthly_credits_assigned=3)
        status = ledger.get_status("  padded_user ", now=NOW)
        assert status.credits_left == 3

    def test_status_missing_identifier(self, ledger):
        with pytest.raises(InvalidInputError):
            ledger.get_status(None)
        with pytest.raises(InvalidInputError):
            ledger.get_status("")


class TestDeductMonthly:
    def test_deduct_then_reject(self, ledger, user_factory, account_repo):
        user = user_factory("monthly_user", monthly_credits_assigned=100, used_credit=90)

        result = ledger.deduct("monthly_user", 5, now=NOW)
        assert result == DeductionResult(credits_left=5, used_today=0, used_credit=95)

        with pytest.raises(InsufficientCreditsError) as exc_info:
            ledger.deduct("monthly_user", 10, now=NOW)
        assert exc_info.value.credits_left == 5
        assert exc_info.value.kind == ErrorKind.INSUFFICIENT_CREDITS

        account = account_repo.get_by_user_id(user.id)
        assert account.used_credit == 95
        assert account.today_used == 0

    def test_deduct_exact_remaining(self, ledger, user_factory):
        user_factory("exact_user", monthly_credits_assigned=2)
        result = ledger.deduct("exact_user", 2, now=NOW)
        assert result.credits_left == 0
        assert result.used_credit == 2

    def test_usage_never_exceeds_allowance(self, ledger, user_factory, account_repo):
        user = user_factory("seq_user", monthly_credits_assigned=10)
        previous = 0
        successes = 0
        for _ in range(6):
            try:
                result = ledger.deduct("seq_user", 3, now=NOW)
            except InsufficientCreditsError as e:
                assert e.credits_left == 1
                continue
            assert result.used_credit > previous
            previous = result.used_credit
            successes += 1

        assert successes == 3
        account = account_repo.get_by_user_id(user.id)
        assert account.used_credit == 9
        assert account.used_credit <= account.monthly_credits_assigned

    def test_result_excludes_usage_committed_afterwards(
        self, ledger, db_session, user_factory, account_repo, monkeypatch
    ):
        """Another deduction committing right after ours does not leak into our result."""
        user = user_factory("racing_user", monthly_credits_assigned=100, used_credit=90)
        real_increment = ledger.account_repo.increment_usage

        def increment_then_other_caller(*args, **kwargs):
            written = real_increment(*args, **kwargs)
            other = db_module.SessionLocal()
            try:
                CreditLedgerService(other).deduct("racing_user", 3, now=NOW)
            finally:
                other.close()
            return written

        monkeypatch.setattr(ledger.account_repo, "increment_usage", increment_then_other_caller)

        result = ledger.deduct("racing_user", 5, now=NOW)
        assert result == DeductionResult(credits_left=5, used_today=0, used_credit=95)

        db_session.expire_all()
        assert account_repo.get_by_user_id(user.id).used_credit == 98


class TestDeductDaily:
    def test_daily_advances_both_counters(self, ledger, user_factory, account_repo):
        user = user_factory(
            "daily_user",
            is_daily=True,
            daily_credits_assigned=10,
            today_used=4,
            usage_date=TODAY,
            used_credit=40,
        )

        result = ledger.deduct("daily_user", 3, now=NOW)
        assert result == DeductionResult(credits_left=3, used_today=7, used_credit=43)

        account = account_repo.get_by_user_id(user.id)
        assert account.today_used == 7
        assert account.used_credit == 43
        assert account.usage_date == TODAY

    def test_daily_limit_enforced(self, ledger, user_factory):
        user_factory(
            "daily_full",
            is_daily=True,
            daily_credits_assigned=5,
            today_used=5,
            usage_date=TODAY,
            used_credit=5,
        )
        with pytest.raises(InsufficientCreditsError) as exc_info:
            ledger.deduct("daily_full", 1, now=NOW)
        assert exc_info.value.credits_left == 0

    def test_daily_counter_resets_on_new_day(self, ledger, user_factory, account_repo):
        user = user_factory(
            "daily_rollover",
            is_daily=True,
            daily_credits_assigned=5,
            today_used=5,
            usage_date=TODAY - timedelta(days=1),
            used_credit=5,
        )

        status = ledger.get_status("daily_rollover", now=NOW)
        assert status.has_credits is True
        assert status.credits_left == 5

        result = ledger.deduct("daily_rollover", 2, now=NOW)
        assert result == DeductionResult(credits_left=3, used_today=2, used_credit=7)

        account = account_repo.get_by_user_id(user.id)
        assert account.today_used == 2
        assert account.usage_date == TODAY

    def test_first_deduction_without_usage_date(self, ledger, user_factory):
        user_factory("daily_fresh", is_daily=True, daily_credits_assigned=3)
        result = ledger.deduct("daily_fresh", 3, now=NOW)
        assert result.used_today == 3
        assert result.credits_left == 0


class TestDeductFailures:
    def test_unknown_user(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.deduct("ghost", 1, now=NOW)

    def test_blank_identifier(self, ledger):
        with pytest.raises(InvalidInputError):
            ledger.deduct("   ", 1, now=NOW)

    def test_missing_identifier(self, ledger):
        with pytest.raises(InvalidInputError):
            ledger.deduct(None, 1, now=NOW)

    def test_invalid_amount_writes_nothing(self, ledger, user_factory, account_repo):
        user = user_factory("invalid_amount", monthly_credits_assigned=10, used_credit=1)
        with pytest.raises(InvalidInputError):
            ledger.deduct("invalid_amount", 0, now=NOW)
        assert account_repo.get_by_user_id(user.id).used_credit == 1


class TestIncrementUsage:
    def test_conditional_update_refuses_overdraw(self, db_session, user_factory, account_repo):
        user = user_factory("cas_user", monthly_credits_assigned=5, used_credit=4)
        account = account_repo.get_by_user_id(user.id)

        assert account_repo.increment_usage(account, 2, TODAY) is None
        written = account_repo.increment_usage(account, 1, TODAY)
        assert written is not None
        assert written.used_credit == 5
        assert written.monthly_credits_assigned == 5

        db_session.refresh(account)
        assert account.used_credit == 5

    def test_conditional_update_detects_mode_change(self, db_session, user_factory, account_repo):
        user = user_factory("mode_user", monthly_credits_assigned=5, daily_credits_assigned=5)
        account = account_repo.get_by_user_id(user.id)
        stale = SimpleNamespace(id=account.id, is_daily=True)

        assert account_repo.increment_usage(stale, 1, TODAY) is None
        db_session.refresh(account)
        assert account.used_credit == 0

    def test_daily_update_returns_rolled_forward_counters(self, user_factory, account_repo):
        user = user_factory(
            "daily_cas_user",
            is_daily=True,
            daily_credits_assigned=4,
            today_used=4,
            usage_date=TODAY - timedelta(days=1),
            used_credit=4,
        )
        account = account_repo.get_by_user_id(user.id)

        written = account_repo.increment_usage(account, 2, TODAY)
        assert written.today_used == 2
        assert written.usage_date == TODAY
        assert written.used_credit == 6
