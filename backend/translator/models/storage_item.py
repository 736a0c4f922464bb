"""Storage Item ORM — one serialized value per (name, store_name, key).

Invariants:
    - Composite primary key (name, store_name, key): two-level namespace + key
    - value holds the whole serialized value; never split across rows
    - updated_at refreshed on every write

Design Decisions:
    - JSON column: the history collection is stored as-is, one row per collection
    - String keys over UUIDs: keys are caller-chosen names, not generated ids
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from translator.db.base import Base


class StorageItem(Base):
    """A single key-value slot in a named store."""
    __tablename__ = "key_value_items"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    store_name: Mapped[str] = mapped_column(String(100), primary_key=True)
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
