"""fskit CLI — filesystem helpers and a JSON record store.

Commands:
    fskit init [NAME]                   create fskit.toml + empty record store
    fskit status                        config + record store stats
    fskit folder create|rename|delete|list
    fskit file create-json|create|rename|delete|read
    fskit record add FIELD=VALUE...     append a record, print its uuid
    fskit record get ID                 print one record
    fskit record update ID FIELD=VALUE...
    fskit record delete ID
    fskit record list
"""

from __future__ import annotations

import contextlib
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from fskit import files, folders
from fskit.config import FskitConfig, init_config, load_config
from fskit.errors import FsError
from fskit.models import ID_FIELD
from fskit.store import RecordStore, loads_strict

if TYPE_CHECKING:
    from collections.abc import Iterator

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg() -> FskitConfig:
    try:
        return load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


@contextlib.contextmanager
def _reported() -> Iterator[None]:
    """Turn FsError into a ClickException whose message names the error kind."""
    try:
        yield
    except FsError as exc:
        raise click.ClickException(str(exc)) from exc


def _log_level(verbose: bool) -> int:
    if verbose:
        return logging.INFO
    try:
        name = load_config().logging.level
    except FsError:
        name = "WARNING"
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _store(file: str | None) -> RecordStore:
    if file:
        return RecordStore(file)
    cfg = _load_cfg()
    return RecordStore(cfg.store_path, indent=cfg.store.indent)


def _parse_fields(pairs: tuple[str, ...], json_obj: str | None) -> dict[str, Any]:
    """Build a record payload from --json and FIELD=VALUE pairs.

    VALUE is decoded as JSON when it parses (age=20 -> 20, ok=true -> True),
    otherwise kept as a plain string (NaN and Infinity stay strings). Pairs
    override --json keys.
    """
    data: dict[str, Any] = {}
    if json_obj:
        try:
            parsed = loads_strict(json_obj)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"invalid JSON: {exc.msg}", param_hint="--json") from exc
        except ValueError as exc:
            raise click.BadParameter(f"invalid JSON: {exc}", param_hint="--json") from exc
        if not isinstance(parsed, dict):
            raise click.BadParameter("must be a JSON object", param_hint="--json")
        data.update(parsed)
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected FIELD=VALUE, got {pair!r}", param_hint="FIELDS")
        try:
            data[key] = loads_strict(raw)
        except ValueError:
            data[key] = raw
    return data


def _dump(obj: Any, *, pretty: bool = True) -> str:
    if pretty:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    return json.dumps(obj, ensure_ascii=False)


_file_option = click.option(
    "--file", "-f", "file", default=None,
    help="Store file (default: [store] file from fskit.toml)",
)

# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="fskit")
@click.option("--verbose", "-v", is_flag=True, help="Log every operation to stderr")
def cli(verbose: bool) -> None:
    """fskit — filesystem helpers and a JSON record store."""
    logging.basicConfig(level=_log_level(verbose), format="%(asctime)s %(name)s %(levelname)s %(message)s")


# ---------------------------------------------------------------------------
# fskit init
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("name", required=False)
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
def init(name: str | None, root: str) -> None:
    """Create fskit.toml and an empty record store."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path, name=name)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("fskit.toml already exists — skipping init")

    try:
        cfg = load_config(root_path)
    except FsError as exc:
        raise click.ClickException(str(exc)) from exc
    cfg.ensure_dirs()
    store = RecordStore(cfg.store_path, indent=cfg.store.indent)
    with _reported():
        store.create(exist_ok=True)
    click.echo(f"Store     : {store.path}")


# ---------------------------------------------------------------------------
# fskit status
# ---------------------------------------------------------------------------


@cli.command()
def status() -> None:
    """Show config and record store stats."""
    from rich.console import Console
    from rich.table import Table

    cfg = _load_cfg()
    console = Console()

    table = Table(title=f"fskit — {cfg.name}", show_header=True, header_style="bold")
    table.add_column("Metric", style="dim", no_wrap=True)
    table.add_column("Value", justify="right")

    config_path = cfg.root / "fskit.toml"
    table.add_row("Config", str(config_path) if config_path.exists() else "[dim]none (defaults)[/dim]")
    table.add_row("Store", str(cfg.store_path))

    store = RecordStore(cfg.store_path, indent=cfg.store.indent)
    if not store.exists():
        table.add_row("Records", "[yellow]✗ store missing — run fskit init[/yellow]")
    else:
        try:
            table.add_row("Records", str(store.count()))
        except FsError as exc:
            table.add_row("Records", f"[red]✗ {exc}[/red]")
        kb = store.path.stat().st_size / 1000
        table.add_row("Size", f"{kb:.1f} KB")
    table.add_row("Log level", cfg.logging.level.upper())

    console.print(table)


# ---------------------------------------------------------------------------
# fskit folder
# ---------------------------------------------------------------------------


@cli.group()
def folder() -> None:
    """Create, rename, delete and list folders."""


@folder.command("create")
@click.argument("path")
def folder_create(path: str) -> None:
    """Create PATH (and missing parents). Fails if it already exists."""
    with _reported():
        folders.create_folder(path)
    click.echo(f"Folder created: {path}")


@folder.command("rename")
@click.argument("old")
@click.argument("new")
def folder_rename(old: str, new: str) -> None:
    with _reported():
        folders.rename_folder(old, new)
    click.echo(f"Folder renamed: {old} -> {new}")


@folder.command("delete")
@click.argument("path")
def folder_delete(path: str) -> None:
    """Delete PATH and everything under it."""
    with _reported():
        folders.delete_folder(path)
    click.echo(f"Folder deleted: {path}")


@folder.command("list")
@click.argument("path")
@click.option("--json", "as_json", is_flag=True, help="Print entries as a JSON array")
def folder_list(path: str, as_json: bool) -> None:
    """List files (not sub-folders) in PATH."""
    with _reported():
        entries = folders.list_files_in_folder(path)
    if as_json:
        click.echo(_dump([e.to_dict() for e in entries]))
        return
    if not entries:
        click.echo("(no files)")
        return
    for entry in entries:
        click.echo(f"{entry.size:>10}  {entry.name}")


# ---------------------------------------------------------------------------
# fskit file
# ---------------------------------------------------------------------------


@cli.group("file")
def file_group() -> None:
    """Create, rename, delete and read files."""


@file_group.command("create-json")
@click.argument("path")
def file_create_json(path: str) -> None:
    """Create PATH holding an empty JSON object ({})."""
    with _reported():
        files.create_json_file(path)
    click.echo(f"JSON file created: {path}")


@file_group.command("create")
@click.argument("path")
@click.option("--content", "-c", default="", help="Initial text")
def file_create(path: str, content: str) -> None:
    with _reported():
        files.create_file(path, content)
    click.echo(f"File created: {path}")


@file_group.command("rename")
@click.argument("folder_path")
@click.argument("old_name")
@click.argument("new_name")
def file_rename(folder_path: str, old_name: str, new_name: str) -> None:
    """Rename OLD_NAME to NEW_NAME inside FOLDER_PATH."""
    with _reported():
        files.rename_file_in_folder(folder_path, old_name, new_name)
    click.echo(f"File renamed: {old_name} -> {new_name}")


@file_group.command("delete")
@click.argument("folder_path")
@click.argument("name")
def file_delete(folder_path: str, name: str) -> None:
    with _reported():
        files.delete_file_in_folder(folder_path, name)
    click.echo(f"File deleted: {name}")


@file_group.command("read")
@click.argument("folder_path")
@click.argument("name")
def file_read(folder_path: str, name: str) -> None:
    """Print the contents of NAME inside FOLDER_PATH."""
    with _reported():
        text = files.read_file_in_folder(folder_path, name)
    click.echo(text)


# ---------------------------------------------------------------------------
# fskit record
# ---------------------------------------------------------------------------


@cli.group()
def record() -> None:
    """Records in a JSON store file, keyed by uuid."""


@record.command("add")
@click.argument("fields", nargs=-1)
@click.option("--json", "json_obj", default=None, help="Record as a JSON object")
@_file_option
def record_add(fields: tuple[str, ...], json_obj: str | None, file: str | None) -> None:
    """Append a record and print its uuid.

    \b
    fskit record add name=Mitali age=20 city=Banglore
    fskit record add --json '{"name": "Mansi", "age": 25}'
    """
    data = _parse_fields(fields, json_obj)
    store = _store(file)
    with _reported():
        rec = store.append(data)
    click.echo(rec[ID_FIELD])


@record.command("get")
@click.argument("record_id")
@_file_option
def record_get(record_id: str, file: str | None) -> None:
    """Print the record with RECORD_ID."""
    store = _store(file)
    with _reported():
        rec = store.get(record_id)
    click.echo(_dump(rec))


@record.command("update")
@click.argument("record_id")
@click.argument("fields", nargs=-1)
@click.option("--json", "json_obj", default=None, help="Fields as a JSON object")
@_file_option
def record_update(record_id: str, fields: tuple[str, ...], json_obj: str | None, file: str | None) -> None:
    """Merge FIELD=VALUE pairs into the record with RECORD_ID.

    Succeeds (and changes nothing) when no record has RECORD_ID.
    """
    data = _parse_fields(fields, json_obj)
    if not data:
        raise click.UsageError("Provide FIELD=VALUE pairs or --json")
    store = _store(file)
    with _reported():
        n = store.update(record_id, data)
    if n:
        click.echo(f"Updated {record_id}")
    else:
        click.echo(f"No record {record_id} — nothing updated")


@record.command("delete")
@click.argument("record_id")
@_file_option
def record_delete(record_id: str, file: str | None) -> None:
    """Delete the record with RECORD_ID (no-op if absent)."""
    store = _store(file)
    with _reported():
        n = store.delete(record_id)
    if n:
        click.echo(f"Deleted {record_id}")
    else:
        click.echo(f"No record {record_id} — nothing deleted")


@record.command("list")
@_file_option
def record_list(file: str | None) -> None:
    """Print every record, one JSON object per line."""
    store = _store(file)
    with _reported():
        records = store.all()
    for rec in records:
        click.echo(_dump(rec, pretty=False))
    click.echo(f"{len(records)} record(s)", err=True)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
