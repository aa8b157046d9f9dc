"""Shared test fixtures for all test modules."""

import contextlib
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import creditdesk.models  # noqa: F401
from creditdesk.core import database as db_module
from creditdesk.core.database import Base, get_db
from creditdesk.models.credit_account import CreditAccount
from creditdesk.models.subscription import Subscription
from creditdesk.models.user import User

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# Fixed clock used by tests that depend on the calendar day
NOW = datetime(2026, 10, 10, 12, 0, tzinfo=UTC)
TODAY = NOW.date()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def user_factory(db_session):
    """Create a user with optional credit account and subscription."""

    def _create(
        external_id: str = "user_1",
        *,
        with_credits: bool = True,
        with_subscription: bool = True,
        is_daily: bool = False,
        daily_credits_assigned: int = 0,
        monthly_credits_assigned: int = 0,
        today_used: int = 0,
        used_credit: int = 0,
        usage_date: date | None = None,
        plan: str = "Pro Plan",
        duration: str = "monthly",
        status: str = "active",
        price: Decimal = Decimal("19.99"),
        current_period_end: datetime = datetime(2026, 11, 10, 12, 0, tzinfo=UTC),
    ) -> User:
        user = User(external_id=external_id, name="Test User", email=f"{external_id}@test.com")
        if with_credits:
            user.credit_account = CreditAccount(
                is_daily=is_daily,
                daily_credits_assigned=daily_credits_assigned,
                monthly_credits_assigned=monthly_credits_assigned,
                today_used=today_used,
                used_credit=used_credit,
                usage_date=usage_date,
            )
        if with_subscription:
            user.subscription = Subscription(
                external_id=f"sub_{external_id}",
                plan=plan,
                duration=duration,
                status=status,
                price=price,
                current_period_end=current_period_end,
            )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create
