"""SQL Snapshot Repository — SnapshotRepository backed by the registry_snapshots table.

Invariants:
    - save() upserts the row for this repository's name and commits
    - load() returns the stored payload, or None when nothing was saved yet
    - SQLAlchemy failures surface as DatabaseError via DatabaseSessionManager
"""

import logging
from datetime import datetime, timezone

from registry.infrastructure.database import DatabaseSessionManager
from registry.models.registry_snapshot import RegistrySnapshotRow

logger = logging.getLogger(__name__)


class SqlSnapshotRepository:

    def __init__(self, db: DatabaseSessionManager, name: str = "default"):
        self._db = db
        self._name = name

    async def load(self) -> dict | None:
        async with self._db.session() as session:
            row = await session.get(RegistrySnapshotRow, self._name)
            return dict(row.payload) if row else None

    async def save(self, snapshot: dict, height: int) -> None:
        async with self._db.session() as session:
            row = await session.get(RegistrySnapshotRow, self._name)
            if row is None:
                session.add(RegistrySnapshotRow(
                    name=self._name, height=height, payload=snapshot,
                ))
            else:
                row.height = height
                row.payload = snapshot
                row.updated_at = datetime.now(timezone.utc)
            await session.commit()
        logger.debug(
            f"Snapshot '{self._name}' saved", extra={"height": height},
        )
