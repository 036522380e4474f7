"""FskitConfig: project-local config for fskit.

Default layout (all relative to the project root):

    fskit.toml            # project config
    data/
        records.json      # default record store

fskit.toml example:

    [fskit]
    name = "my-project"
    # data_dir = "data"         # default

    [store]
    # file = "records.json"     # relative to data_dir
    # indent = 2

    [logging]
    # level = "WARNING"

Environment overrides:
    FSKIT_STORE_FILE   store file path (absolute, or relative to the root)
    FSKIT_LOG_LEVEL    logging level name
"""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fskit.errors import StoreIOError

_CONFIG_FILENAME = "fskit.toml"
_DEFAULT_DATA_DIR = "data"
_DEFAULT_STORE_FILE = "records.json"
_DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(StoreIOError):
    """fskit.toml cannot be parsed or holds a value of the wrong type."""

    label = "config error"


@dataclass
class StoreConfig:
    file: str = _DEFAULT_STORE_FILE    # relative to data_dir unless absolute
    indent: int = 2


@dataclass
class LoggingConfig:
    level: str = _DEFAULT_LOG_LEVEL


@dataclass
class FskitConfig:
    """Resolved configuration for an fskit project."""

    root: Path                      # directory that contains fskit.toml
    name: str = ""
    data_dir: Path = field(default_factory=Path)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    store_override: Path | None = None

    @property
    def store_path(self) -> Path:
        if self.store_override is not None:
            return self.store_override
        return self.data_dir / self.store.file

    def ensure_dirs(self) -> None:
        """Create the directory holding the store file."""
        self.store_path.parent.mkdir(parents=True, exist_ok=True)


def _section(raw: dict[str, Any], name: str, config_path: Path) -> dict[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        msg = f"{config_path}: [{name}] must be a table, not {type(section).__name__}"
        raise ConfigError(msg, config_path)
    return section


def _get(section: dict[str, Any], key: str, kind: type, default: Any, config_path: Path, where: str) -> Any:
    """Typed lookup: bool never passes for int."""
    value = section.get(key, default)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"{config_path}: {where}.{key} must be {kind.__name__}, not {type(value).__name__} ({value!r})"
        raise ConfigError(msg, config_path)
    return value


def load_config(root: Path | str | None = None) -> FskitConfig:
    """Load fskit.toml from root (or search upward from cwd if root is None).

    Raises ConfigError for unreadable TOML and for sections or values of the
    wrong type.
    """
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                raw = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"{config_path}: {exc}", config_path) from exc

    fskit_section = _section(raw, "fskit", config_path)
    store_section = _section(raw, "store", config_path)
    log_section = _section(raw, "logging", config_path)

    indent = _get(store_section, "indent", int, 2, config_path, "store")
    if indent < 0:
        msg = f"{config_path}: store.indent must be >= 0, not {indent}"
        raise ConfigError(msg, config_path)

    store_override: Path | None = None
    env_store = os.environ.get("FSKIT_STORE_FILE")
    if env_store:
        store_override = root_path / Path(env_store).expanduser()

    return FskitConfig(
        root=root_path,
        name=_get(fskit_section, "name", str, root_path.name, config_path, "fskit"),
        data_dir=root_path / _get(fskit_section, "data_dir", str, _DEFAULT_DATA_DIR, config_path, "fskit"),
        store=StoreConfig(
            file=_get(store_section, "file", str, _DEFAULT_STORE_FILE, config_path, "store"),
            indent=indent,
        ),
        logging=LoggingConfig(
            level=os.environ.get("FSKIT_LOG_LEVEL")
            or _get(log_section, "level", str, _DEFAULT_LOG_LEVEL, config_path, "logging"),
        ),
        store_override=store_override,
    )


def _toml_string(value: str) -> str:
    """Quote value as a TOML basic string."""
    # JSON escapes are valid TOML escapes; TOML also forbids a raw DEL.
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for fskit.toml."""
    start = start.resolve()
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path, name: str | None = None) -> Path:
    """Write a default fskit.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"fskit.toml already exists at {config_path}"
        raise FileExistsError(msg)

    project_name = name or root.name
    content = f"""\
[fskit]
name = {_toml_string(project_name)}
# data_dir = "data"         # default

[store]
# file = "records.json"     # relative to data_dir
# indent = 2

[logging]
# level = "WARNING"         # or set FSKIT_LOG_LEVEL
"""
    config_path.write_text(content, encoding="utf-8")
    return config_path
