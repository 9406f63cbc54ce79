from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from budget_tracker.core.config import settings

# SQLite needs this to be shared with the scheduler's worker thread
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def init_db(bind=None):
    """Create all tables that don't exist yet."""
    from budget_tracker.db import tables  # noqa: F401  registers the mappers

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
