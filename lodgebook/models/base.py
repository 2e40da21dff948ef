# lodgebook/models/base.py
"""SQLAlchemy declarative base for the SQL snapshot store."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Root SQLAlchemy base class."""
    pass
