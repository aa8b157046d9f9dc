"""Provisioning of new users with the free plan."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from creditdesk.core.config import settings
from creditdesk.core.exceptions import InvalidInputError
from creditdesk.models.billing_entry import BillingEntryStatus
from creditdesk.models.subscription import BillingCycle, SubscriptionStatus
from creditdesk.repositories.user_repository import UserRepository
from creditdesk.schemas.billing import BillingEntryCreate
from creditdesk.schemas.credits import CreditAccountCreate
from creditdesk.schemas.subscription import SubscriptionCreate
from creditdesk.schemas.user import UserCreate
from creditdesk.services.identifiers import normalize_external_id
from creditdesk.services.periods import add_months, resolve_now

logger = logging.getLogger(__name__)

# Leaves room for the free_sub_/free_invoice_ prefixes in 255-char columns
MAX_EXTERNAL_ID_LENGTH = 200
MAX_PROFILE_FIELD_LENGTH = 255


class ProvisioningService:
    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def setup_user(
        self,
        external_id: str | None,
        email: str | None,
        name: str | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Create the user bundle on the free plan. Returns False if the user already exists.

        The user, its credit account, subscription and first billing entry are
        written in a single commit. Repeating the call is a no-op.
        """
        external_id = normalize_external_id(external_id)
        email = (email or "").strip()
        name = (name or "").strip() or settings.DEFAULT_DISPLAY_NAME
        if not external_id or not email:
            raise InvalidInputError("Missing required user info (userId or email)")
        if len(external_id) > MAX_EXTERNAL_ID_LENGTH:
            raise InvalidInputError("userId is too long")
        if len(email) > MAX_PROFILE_FIELD_LENGTH:
            raise InvalidInputError("email is too long")
        if len(name) > MAX_PROFILE_FIELD_LENGTH:
            raise InvalidInputError("name is too long")

        if self.user_repo.external_id_exists(external_id):
            logger.info("User %s already exists, skipping setup", external_id)
            return False

        now = resolve_now(now)
        plan_name = settings.FREE_PLAN_NAME
        user = self.user_repo.create_bundle(
            UserCreate(
                external_id=external_id,
                name=name,
                email=email,
            ),
            credit_account=CreditAccountCreate(
                is_daily=False,
                monthly_credits_assigned=settings.FREE_PLAN_MONTHLY_CREDITS,
            ),
            subscription=SubscriptionCreate(
                external_id=f"free_sub_{external_id}",
                plan=plan_name,
                duration=BillingCycle.MONTHLY,
                status=SubscriptionStatus.ACTIVE,
                current_period_end=add_months(now, 1),
            ),
            billing_entry=BillingEntryCreate(
                invoice_id=f"free_invoice_{external_id}",
                amount_cents=0,
                currency=settings.DEFAULT_CURRENCY,
                plan_name=plan_name,
                billing_cycle=BillingCycle.MONTHLY.value,
                status=BillingEntryStatus.PAID,
                paid_at=now,
            ),
        )
        if user is None:
            logger.info("User %s was created concurrently, skipping setup", external_id)
            return False

        logger.info("Provisioned user %s on %s", external_id, plan_name)
        return True
