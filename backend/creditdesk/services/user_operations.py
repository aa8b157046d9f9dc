"""User-facing operations returning structured outcomes.

Each method runs one service call and converts its result, or the failure it
raised, into an ``Outcome``. Business failures keep their error kind and
message; store timeouts become retryable transient failures; anything else is
logged and reported without internal detail.
"""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from creditdesk.core.exceptions import (
    CreditDeskError,
    InsufficientCreditsError,
    TransientStoreError,
    UnexpectedError,
)
from creditdesk.schemas.common import Outcome
from creditdesk.schemas.credits import CreditStatusView, DeductionView, InsufficientCreditsView
from creditdesk.schemas.user import SetupUserView
from creditdesk.services.credit_ledger_service import CreditLedgerService
from creditdesk.services.provisioning_service import ProvisioningService
from creditdesk.services.reporting_service import ReportingService

logger = logging.getLogger(__name__)


class UserOperations:
    def __init__(self, db: Session):
        self.db = db
        self.ledger = CreditLedgerService(db)
        self.provisioning = ProvisioningService(db)
        self.reporting = ReportingService(db)

    def get_credit_status(self, user_id: str | None) -> Outcome:
        def action() -> Outcome:
            status = self.ledger.get_status(user_id)
            return Outcome(
                success=status.has_credits,
                message="Credits available" if status.has_credits else "No available credits",
                data=CreditStatusView(
                    has_credits=status.has_credits, credits_left=status.credits_left
                ),
            )

        return self._run("get_credit_status", user_id, action)

    def get_dashboard(self, user_id: str | None) -> Outcome:
        return self._run(
            "get_dashboard",
            user_id,
            lambda: Outcome.ok(
                "Dashboard data retrieved successfully",
                self.reporting.get_dashboard(user_id),
            ),
        )

    def get_plan_overview(self, user_id: str | None) -> Outcome:
        return self._run(
            "get_plan_overview",
            user_id,
            lambda: Outcome.ok(
                "Plan overview retrieved successfully",
                self.reporting.get_plan_overview(user_id),
            ),
        )

    def get_billing_history(self, user_id: str | None) -> Outcome:
        return self._run(
            "get_billing_history",
            user_id,
            lambda: Outcome.ok(
                "Billing history retrieved successfully",
                self.reporting.get_billing_history(user_id),
            ),
        )

    def setup_user(self, user_id: str | None, email: str | None, name: str | None = None) -> Outcome:
        def action() -> Outcome:
            created = self.provisioning.setup_user(user_id, email, name)
            message = (
                "User created and initialized with free plan" if created else "User already exists"
            )
            return Outcome.ok(message, SetupUserView(created=created))

        return self._run("setup_user", user_id, action)

    def deduct_credits(self, user_id: str | None, amount: Any) -> Outcome:
        def action() -> Outcome:
            result = self.ledger.deduct(user_id, amount)
            return Outcome.ok(
                "Credits deducted successfully",
                DeductionView(
                    credits_left=result.credits_left,
                    used_today=result.used_today,
                    used_credit=result.used_credit,
                ),
            )

        return self._run("deduct_credits", user_id, action)

    def _run(self, operation: str, user_id: str | None, action: Callable[[], Outcome]) -> Outcome:
        try:
            return action()
        except InsufficientCreditsError as e:
            return Outcome.fail(
                e.kind, e.message, InsufficientCreditsView(credits_left=e.credits_left)
            )
        except CreditDeskError as e:
            return Outcome.fail(e.kind, e.message)
        except (OperationalError, PoolTimeoutError) as e:
            self.db.rollback()
            logger.warning("Store failure during %s for user %s: %s", operation, user_id, e)
            transient = TransientStoreError()
            return Outcome.fail(transient.kind, transient.message)
        except Exception:
            self.db.rollback()
            logger.exception("Unexpected failure during %s for user %s", operation, user_id)
            unexpected = UnexpectedError()
            return Outcome.fail(unexpected.kind, unexpected.message)
