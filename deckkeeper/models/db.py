"""
SQLAlchemy ORM models for persistent storage.

The deck collection is stored as one serialized blob, so the only table
is a simple key/value store.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BlobDB(Base):
    """
    A named serialized value.

    The deck collection lives under a single fixed key.
    """

    __tablename__ = "blob_store"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<BlobDB(key={self.key}, size={len(self.value or '')})>"
