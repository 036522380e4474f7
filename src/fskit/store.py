"""JSON record store: one file holding an array of records keyed by "uuid".

RecordStore is the public API:
    store = RecordStore("data/records.json")
    store.create()                              # writes the {} sentinel
    rec = store.append({"name": "Mitali", "age": 20})
    store.find(rec["uuid"])
    store.update(rec["uuid"], {"age": 21})
    store.delete(rec["uuid"])

File layout (pretty-printed, UTF-8):
    [
      {"name": "Mitali", "age": 20, "uuid": "6f1c..."},
      ...
    ]

A freshly created store holds the empty-object sentinel {} and reads as
no records.

Every call reads the whole file and, when mutating, overwrites it in one
write. There is no lock: two writers on the same file can interleave their
read-modify-write windows and the last one wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fskit.errors import AlreadyExistsError, NotFoundError, ParseError, translate_os_errors
from fskit.files import create_json_file
from fskit.models import ID_FIELD, Record, record_id, stamp_record

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("fskit.store")


def _reject_constant(name: str) -> Any:
    msg = f"non-JSON constant {name}"
    raise ValueError(msg)


def loads_strict(text: str) -> Any:
    """json.loads that rejects NaN, Infinity and -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


class RecordStore:
    """Whole-file JSON array store bound to a single path."""

    def __init__(self, path: Path | str, *, indent: int = 2) -> None:
        self.path = Path(path)
        self.indent = indent

    def __repr__(self) -> str:
        return f"RecordStore({str(self.path)!r})"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self.path.is_file()

    def create(self, *, exist_ok: bool = False) -> None:
        """Write the empty sentinel. Raises AlreadyExistsError if the file exists."""
        try:
            create_json_file(self.path)
        except AlreadyExistsError:
            if not exist_ok:
                raise

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def all(self) -> list[Record]:
        """Every record in file order (non-object entries skipped)."""
        return [obj for obj in self._read_records() if isinstance(obj, dict)]

    def count(self) -> int:
        return len(self.all())

    def find(self, target_id: str) -> Record | None:
        """Return the first record whose identifier equals target_id, or None."""
        for obj in self._read_records():
            if record_id(obj) == target_id:
                return obj  # type: ignore[no-any-return]
        return None

    def get(self, target_id: str) -> Record:
        """Like find(), but raises NotFoundError when no record matches."""
        rec = self.find(target_id)
        if rec is None:
            msg = f"record {target_id} in {self.path}"
            raise NotFoundError(msg, self.path)
        return rec

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def append(self, data: Mapping[str, Any]) -> Record:
        """Add data as a new record with a fresh identifier and return it.

        If the file holds valid JSON that is not a record array, its contents
        are discarded and replaced by a one-element array. Invalid JSON raises
        ParseError and the file is not touched.
        """
        if not isinstance(data, Mapping):
            msg = f"record data must be a mapping, not {type(data).__name__}"
            raise TypeError(msg)

        new_record = stamp_record(data)
        records = self._read_records(recover=True)
        records.append(new_record)
        self._write(records)
        logger.info("record appended: %s -> %s", new_record[ID_FIELD], self.path)
        return new_record

    def delete(self, target_id: str) -> int:
        """Remove every record with target_id. Returns how many were removed."""
        records = self._read_records()
        kept = [obj for obj in records if record_id(obj) != target_id]
        removed = len(records) - len(kept)
        self._write(kept)
        logger.info("records deleted: %s (%d) from %s", target_id, removed, self.path)
        return removed

    def update(self, target_id: str, new_data: Mapping[str, Any]) -> int:
        """Shallow-merge new_data into every record with target_id.

        New values win on key conflict, the identifier field included.
        Returns how many records matched.
        """
        if not isinstance(new_data, Mapping):
            msg = f"update data must be a mapping, not {type(new_data).__name__}"
            raise TypeError(msg)

        matched = 0

        def merge(obj: Any) -> Any:
            nonlocal matched
            if record_id(obj) != target_id:
                return obj
            matched += 1
            return {**obj, **new_data}

        self._rewrite(merge)
        logger.info("records updated: %s (%d) in %s", target_id, matched, self.path)
        return matched

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _read_text(self) -> str:
        with translate_os_errors(self.path, "read"):
            raw = self.path.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"{self.path} is not UTF-8 text"
            raise ParseError(msg, self.path) from exc

    def _read_records(self, *, recover: bool = False) -> list[Any]:
        """Load the record array.

        {} and [] both read as empty. Any other non-array JSON value raises
        ParseError, unless recover is set, in which case it is logged and
        treated as empty.
        """
        text = self._read_text()
        try:
            value = loads_strict(text)
        except json.JSONDecodeError as exc:
            msg = f"invalid JSON in {self.path}: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            raise ParseError(msg, self.path) from exc
        except ValueError as exc:
            msg = f"invalid JSON in {self.path}: {exc}"
            raise ParseError(msg, self.path) from exc

        if isinstance(value, list):
            return value
        if isinstance(value, dict) and not value:
            return []
        if recover:
            logger.warning(
                "%s holds a JSON %s, not a record array; starting a new array",
                self.path, type(value).__name__,
            )
            return []
        msg = f"{self.path} holds a JSON {type(value).__name__}, not a record array"
        raise ParseError(msg, self.path)

    def _rewrite(self, transform: Callable[[Any], Any]) -> None:
        """Read, map transform over every entry, write the whole array back."""
        records = self._read_records()
        self._write([transform(obj) for obj in records])

    def _write(self, records: list[Any]) -> None:
        """Serialize before opening the file, so a bad value never truncates it."""
        try:
            text = json.dumps(records, indent=self.indent, ensure_ascii=False, allow_nan=False)
        except ValueError as exc:
            msg = f"records for {self.path} are not valid JSON: {exc}"
            raise ValueError(msg) from exc
        with translate_os_errors(self.path, "write"):
            self.path.write_text(text, encoding="utf-8")
