"""File-backed snapshot store.

The latest in-memory snapshot is authoritative: every save overwrites the
previous file (last writer wins, no merge). Writes go to a temporary file that
is then renamed over the target so a crash never leaves half a snapshot.
"""

import os
import tempfile
from pathlib import Path

import structlog

from warehouse.snapshot import Snapshot, deserialize_snapshot, serialize_snapshot

logger = structlog.get_logger(__name__)


class JsonSnapshotStore:
    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Snapshot | None:
        """Return the saved snapshot, or None when nothing usable is on disk."""
        if not self.path.exists():
            return None
        try:
            return deserialize_snapshot(self.path.read_text(encoding="utf-8"))
        except (ValueError, KeyError) as exc:
            logger.warning("Discarding unreadable snapshot", path=str(self.path), error=str(exc))
            return None

    def save(self, snapshot: Snapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(serialize_snapshot(snapshot))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Snapshot saved", path=str(self.path), taken_at=snapshot.taken_at)
