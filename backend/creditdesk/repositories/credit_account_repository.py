"""Credit account repository for data access."""

from datetime import date
from uuid import UUID

from sqlalchemy import case, update
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from creditdesk.models.credit_account import CreditAccount


class CreditAccountRepository:
    """Repository for CreditAccount model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_user_id(self, user_id: UUID) -> CreditAccount | None:
        return self.db.query(CreditAccount).filter(CreditAccount.user_id == user_id).first()

    def increment_usage(self, account: CreditAccount, amount: int, today: date) -> Row | None:
        """Add ``amount`` to the usage counters if the allowance still covers it.

        Runs as a single conditional UPDATE so the sufficiency check and the
        write see the same row state. In daily mode a ``usage_date`` other
        than ``today`` counts as zero usage and is rolled forward by the same
        statement. Returns the counters as written by this statement, or None
        when no row matched (allowance exceeded, mode changed or account
        gone); nothing is written in that case.
        """
        stmt = update(CreditAccount).where(
            CreditAccount.id == account.id,
            CreditAccount.is_daily == account.is_daily,
        )

        if account.is_daily:
            used_today = case(
                (CreditAccount.usage_date == today, CreditAccount.today_used),
                else_=0,
            )
            stmt = stmt.where(CreditAccount.daily_credits_assigned - used_today >= amount).values(
                {
                    CreditAccount.today_used: used_today + amount,
                    CreditAccount.usage_date: today,
                    CreditAccount.used_credit: CreditAccount.used_credit + amount,
                }
            )
        else:
            stmt = stmt.where(
                CreditAccount.monthly_credits_assigned - CreditAccount.used_credit >= amount
            ).values({CreditAccount.used_credit: CreditAccount.used_credit + amount})

        stmt = stmt.returning(
            CreditAccount.is_daily,
            CreditAccount.daily_credits_assigned,
            CreditAccount.today_used,
            CreditAccount.usage_date,
            CreditAccount.monthly_credits_assigned,
            CreditAccount.used_credit,
        ).execution_options(synchronize_session=False)

        row = self.db.execute(stmt).first()
        self.db.commit()
        return row
