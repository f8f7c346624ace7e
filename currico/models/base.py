"""
SQLAlchemy 2.0 async DeclarativeBase for Currico.

All models inherit from this Base.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Client-side default for timestamp columns."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all Currico database models."""
    pass
