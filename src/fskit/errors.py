"""Typed errors for filesystem and record-store operations.

Every public operation resolves either successfully or by raising exactly one
FsError subclass:

    NotFoundError       target file or folder absent
    AlreadyExistsError  create on an existing path
    ParseError          content is not valid JSON (or not a record array)
    StoreIOError        any other read/write/rename/delete failure

Platform errors are translated with translate_os_errors(); the original
OSError is kept as __cause__.
"""

from __future__ import annotations

import contextlib
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PARSE = "parse"
    IO = "io"


class FsError(Exception):
    """Base class for all fskit errors."""

    kind: ErrorKind = ErrorKind.IO
    label = "error"

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class NotFoundError(FsError):
    kind = ErrorKind.NOT_FOUND
    label = "not found"


class AlreadyExistsError(FsError):
    kind = ErrorKind.ALREADY_EXISTS
    label = "already exists"


class ParseError(FsError):
    kind = ErrorKind.PARSE
    label = "parse error"


class StoreIOError(FsError):
    kind = ErrorKind.IO
    label = "I/O error"


@contextlib.contextmanager
def translate_os_errors(path: Path | str, action: str = "access") -> Iterator[None]:
    """Re-raise OSError from the wrapped block as the matching FsError."""
    try:
        yield
    except FileNotFoundError as exc:
        raise NotFoundError(f"{path}", path) from exc
    except FileExistsError as exc:
        raise AlreadyExistsError(f"{path}", path) from exc
    except OSError as exc:
        reason = exc.strerror or exc.__class__.__name__
        raise StoreIOError(f"cannot {action} {path}: {reason}", path) from exc
