from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from trip_planner.core.config import settings

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


def get_db():
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    # Registers the tables on Base.metadata.
    from trip_planner.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
