"""File operations: create, rename, delete and read files inside a folder."""

from __future__ import annotations

import logging
from pathlib import Path

from fskit.errors import translate_os_errors

logger = logging.getLogger("fskit.files")

# Content of a freshly created JSON store file.
EMPTY_SENTINEL = "{}"


def create_file(file_path: Path | str, content: str = "") -> Path:
    """Create a new text file. Raises AlreadyExistsError if it exists."""
    path = Path(file_path)
    with translate_os_errors(path, "create"), path.open("x", encoding="utf-8") as f:
        f.write(content)
    logger.info("file created: %s", path)
    return path


def create_json_file(file_path: Path | str) -> Path:
    """Create a JSON file holding the empty-object sentinel."""
    return create_file(file_path, EMPTY_SENTINEL)


def rename_file_in_folder(folder_path: Path | str, old_name: str, new_name: str) -> Path:
    old_path = Path(folder_path) / old_name
    new_path = Path(folder_path) / new_name
    with translate_os_errors(old_path, "rename"):
        old_path.rename(new_path)
    logger.info("file renamed: %s -> %s", old_path, new_path)
    return new_path


def delete_file_in_folder(folder_path: Path | str, file_name: str) -> None:
    path = Path(folder_path) / file_name
    with translate_os_errors(path, "delete"):
        path.unlink()
    logger.info("file deleted: %s", path)


def read_file_in_folder(folder_path: Path | str, file_name: str) -> str:
    """Return the whole file as UTF-8 text."""
    path = Path(folder_path) / file_name
    with translate_os_errors(path, "read"):
        return path.read_text(encoding="utf-8")
