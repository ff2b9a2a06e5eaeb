"""Registry Snapshot ORM — one row per named registry holding its full serialized state.

Invariants:
    - name is the primary key ("default" unless configured otherwise)
    - payload is the JSON produced by core/registry_snapshot.py
    - height mirrors payload["height"] for cheap inspection without decoding

Design Decisions:
    - JSON column over normalized tables: the registry is single-writer and
      restored whole on startup (ADR: the snapshot is the unit of persistence)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from registry.db.base import Base


class RegistrySnapshotRow(Base):
    __tablename__ = "registry_snapshots"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    height: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
