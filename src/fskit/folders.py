"""Folder operations.

create_folder() is strict: an existing path raises AlreadyExistsError rather
than succeeding silently, so callers can tell "made it" from "was there".
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from fskit.errors import translate_os_errors
from fskit.models import FileEntry

logger = logging.getLogger("fskit.folders")


def create_folder(folder_path: Path | str) -> Path:
    """Create folder_path and any missing parents."""
    path = Path(folder_path)
    with translate_os_errors(path, "create"):
        path.mkdir(parents=True)
    logger.info("folder created: %s", path)
    return path


def rename_folder(old_path: Path | str, new_path: Path | str) -> Path:
    old, new = Path(old_path), Path(new_path)
    with translate_os_errors(old, "rename"):
        old.rename(new)
    logger.info("folder renamed: %s -> %s", old, new)
    return new


def delete_folder(folder_path: Path | str) -> None:
    """Delete folder_path and everything under it."""
    path = Path(folder_path)
    with translate_os_errors(path, "delete"):
        shutil.rmtree(path)
    logger.info("folder deleted: %s", path)


def list_files_in_folder(folder_path: Path | str) -> list[FileEntry]:
    """List the non-directory entries of folder_path, sorted by name."""
    path = Path(folder_path)
    with translate_os_errors(path, "list"):
        children = sorted(path.iterdir(), key=lambda p: p.name)
        return [FileEntry.from_path(p) for p in children if not p.is_dir()]
