"""Filesystem helpers and a whole-file JSON record store.

Layout of a store file:
    [
      {"name": "Mitali", "age": 20, "city": "Banglore", "uuid": "<uuid4>"},
      ...
    ]

Each RecordStore call reads the whole file and, when mutating, rewrites it in
a single write. No locking: concurrent writers on one file can lose updates.
"""

from fskit.config import FskitConfig, init_config, load_config
from fskit.errors import AlreadyExistsError, ErrorKind, FsError, NotFoundError, ParseError, StoreIOError
from fskit.models import ID_FIELD, FileEntry, new_record_id
from fskit.store import RecordStore

__all__ = [
    "ID_FIELD",
    "AlreadyExistsError",
    "ErrorKind",
    "FileEntry",
    "FsError",
    "FskitConfig",
    "NotFoundError",
    "ParseError",
    "RecordStore",
    "StoreIOError",
    "init_config",
    "load_config",
    "new_record_id",
]
