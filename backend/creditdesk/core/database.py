from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from creditdesk.core.config import settings


def _connect_args() -> dict[str, Any]:
    if settings.is_sqlite:
        # sqlite3 busy timeout bounds how long a writer waits for the lock
        return {"check_same_thread": False, "timeout": settings.DB_TIMEOUT_SECONDS}
    timeout_ms = int(settings.DB_TIMEOUT_SECONDS * 1000)
    return {
        "connect_timeout": max(1, int(settings.DB_TIMEOUT_SECONDS)),
        "options": f"-c statement_timeout={timeout_ms} -c lock_timeout={timeout_ms}",
    }


def _pool_args() -> dict[str, Any]:
    # In-memory SQLite uses a singleton pool that has no checkout timeout
    if settings.APP_DATABASE_DSN in ("sqlite://", "sqlite:///:memory:"):
        return {}
    return {"pool_timeout": settings.DB_TIMEOUT_SECONDS, "pool_pre_ping": True}


engine = create_engine(
    settings.APP_DATABASE_DSN,
    connect_args=_connect_args(),
    **_pool_args(),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize database tables."""
    import creditdesk.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
