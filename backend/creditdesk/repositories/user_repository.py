"""User repository for data access."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from creditdesk.models.billing_entry import BillingEntry
from creditdesk.models.credit_account import CreditAccount
from creditdesk.models.subscription import Subscription
from creditdesk.models.user import User
from creditdesk.schemas.billing import BillingEntryCreate
from creditdesk.schemas.credits import CreditAccountCreate
from creditdesk.schemas.subscription import SubscriptionCreate
from creditdesk.schemas.user import UserCreate


class UserRepository:
    """Repository for the User aggregate."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_external_id(self, external_id: str) -> User | None:
        return self.db.query(User).filter(User.external_id == external_id).first()

    def get_with_profile(self, external_id: str) -> User | None:
        """Get a user with its credit account and subscription loaded."""
        return (
            self.db.query(User)
            .options(joinedload(User.credit_account), joinedload(User.subscription))
            .filter(User.external_id == external_id)
            .first()
        )

    def external_id_exists(self, external_id: str) -> bool:
        return self.get_by_external_id(external_id) is not None

    def create_bundle(
        self,
        data: UserCreate,
        credit_account: CreditAccountCreate,
        subscription: SubscriptionCreate,
        billing_entry: BillingEntryCreate,
    ) -> User | None:
        """Create a user together with its account, subscription and first billing entry.

        Everything is written in one commit. Returns ``None`` when another
        writer created the same user first; nothing from this call is kept.
        """
        user = User(**data.model_dump())
        user.credit_account = CreditAccount(**credit_account.model_dump())
        user.subscription = Subscription(
            **subscription.model_dump(exclude={"duration", "status"}),
            duration=subscription.duration.value,
            status=subscription.status.value,
        )
        user.billing_entries.append(
            BillingEntry(
                **billing_entry.model_dump(exclude={"status"}),
                status=billing_entry.status.value,
            )
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(user)
        return user
