"""Data models: record identifiers and directory entries."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Reserved field holding a record's identifier.
ID_FIELD = "uuid"

Record = dict[str, Any]


def new_record_id() -> str:
    """Generate a record identifier: canonical UUID-v4 string."""
    return str(uuid.uuid4())


def stamp_record(data: Mapping[str, Any], rid: str | None = None) -> Record:
    """Return a copy of data with the identifier field set (caller's value is overwritten)."""
    return {**data, ID_FIELD: rid or new_record_id()}


def record_id(obj: Any) -> str | None:
    """Identifier of a stored entry, or None for entries that are not records."""
    if not isinstance(obj, dict):
        return None
    value = obj.get(ID_FIELD)
    return value if isinstance(value, str) else None


@dataclass
class FileEntry:
    """A non-directory entry returned by folder listing."""

    name: str
    path: Path
    size: int = 0
    modified_at: str = ""

    @classmethod
    def from_path(cls, path: Path) -> FileEntry:
        st = path.stat() if path.exists() else path.lstat()
        return cls(
            name=path.name,
            path=path,
            size=st.st_size,
            modified_at=datetime.fromtimestamp(st.st_mtime, UTC).isoformat(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "size": self.size,
            "modified_at": self.modified_at,
        }
