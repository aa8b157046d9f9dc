from uuid import UUID

from sqlalchemy.orm import Session

from creditdesk.models.billing_entry import BillingEntry
from creditdesk.schemas.billing import BillingEntryCreate


class BillingEntryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: UUID) -> list[BillingEntry]:
        """Get all billing entries for a user, most recent first."""
        return (
            self.db.query(BillingEntry)
            .filter(BillingEntry.user_id == user_id)
            .order_by(BillingEntry.paid_at.desc(), BillingEntry.created_at.desc())
            .all()
        )

    def create(self, user_id: UUID, data: BillingEntryCreate) -> BillingEntry:
        entry = BillingEntry(
            **data.model_dump(exclude={"status"}),
            status=data.status.value,
            user_id=user_id,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry
