"""CLI smoke tests via click's CliRunner."""
from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from fskit.cli import _parse_fields, cli


@pytest.fixture()
def runner():
    return CliRunner()


def _invoke(runner, *args):
    return runner.invoke(cli, list(args), catch_exceptions=False)


def test_record_roundtrip_with_file_option(runner, store_file):
    f = str(store_file)

    added = _invoke(runner, "record", "add", "name=Mitali", "age=20", "city=Banglore", "--file", f)
    assert added.exit_code == 0, added.output
    rid = added.output.strip()

    on_disk = json.loads(store_file.read_text(encoding="utf-8"))
    assert on_disk == [{"name": "Mitali", "age": 20, "city": "Banglore", "uuid": rid}]

    got = _invoke(runner, "record", "get", rid, "-f", f)
    assert got.exit_code == 0
    assert json.loads(got.output) == on_disk[0]

    upd = _invoke(runner, "record", "update", rid, "age=21", "-f", f)
    assert upd.exit_code == 0
    assert f"Updated {rid}" in upd.output
    assert json.loads(store_file.read_text(encoding="utf-8"))[0]["age"] == 21

    deleted = _invoke(runner, "record", "delete", rid, "-f", f)
    assert deleted.exit_code == 0
    assert json.loads(store_file.read_text(encoding="utf-8")) == []


def test_record_add_json_option(runner, store_file):
    result = _invoke(runner, "record", "add", "--json", '{"name": "Mansi", "age": 25}', "city=Kochi",
                     "-f", str(store_file))
    assert result.exit_code == 0
    (rec,) = json.loads(store_file.read_text(encoding="utf-8"))
    assert rec["name"] == "Mansi"
    assert rec["age"] == 25
    assert rec["city"] == "Kochi"


def test_record_list(runner, store_file):
    f = str(store_file)
    _invoke(runner, "record", "add", "name=A", "-f", f)
    _invoke(runner, "record", "add", "name=B", "-f", f)

    result = _invoke(runner, "record", "list", "-f", f)

    assert result.exit_code == 0
    names = [json.loads(line)["name"] for line in result.output.splitlines() if line.startswith("{")]
    assert names == ["A", "B"]


def test_update_and_delete_unknown_id_succeed(runner, store_file):
    f = str(store_file)
    upd = _invoke(runner, "record", "update", "nope", "age=1", "-f", f)
    assert upd.exit_code == 0
    assert "nothing updated" in upd.output

    deleted = _invoke(runner, "record", "delete", "nope", "-f", f)
    assert deleted.exit_code == 0
    assert "nothing deleted" in deleted.output


def test_update_requires_fields(runner, store_file):
    result = runner.invoke(cli, ["record", "update", "x", "-f", str(store_file)])
    assert result.exit_code == 2


def test_get_unknown_id_reports_not_found(runner, store_file):
    result = runner.invoke(cli, ["record", "get", "nope", "-f", str(store_file)])
    assert result.exit_code == 1
    assert "not found:" in result.output


def test_add_to_missing_file_reports_not_found(runner, tmp_path):
    result = runner.invoke(cli, ["record", "add", "a=1", "-f", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "not found:" in result.output


def test_add_to_invalid_json_reports_parse_error(runner, store_file):
    store_file.write_text("{oops", encoding="utf-8")
    result = runner.invoke(cli, ["record", "add", "a=1", "-f", str(store_file)])
    assert result.exit_code == 1
    assert "parse error:" in result.output
    assert store_file.read_text(encoding="utf-8") == "{oops"


def test_init_then_add_uses_configured_store(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    init = _invoke(runner, "init", "demo")
    assert init.exit_code == 0
    assert (tmp_path / "fskit.toml").exists()
    store_path = tmp_path / "data" / "records.json"
    assert store_path.read_text(encoding="utf-8") == "{}"

    added = _invoke(runner, "record", "add", "name=Mugdha")
    assert added.exit_code == 0
    assert json.loads(store_path.read_text(encoding="utf-8"))[0]["name"] == "Mugdha"

    again = _invoke(runner, "init")
    assert "already exists" in again.output
    assert len(json.loads(store_path.read_text(encoding="utf-8"))) == 1


def test_folder_and_file_commands(runner, tmp_path):
    folder = tmp_path / "myFolder"

    assert _invoke(runner, "folder", "create", str(folder)).exit_code == 0
    dup = runner.invoke(cli, ["folder", "create", str(folder)])
    assert dup.exit_code == 1
    assert "already exists:" in dup.output

    assert _invoke(runner, "file", "create-json", str(folder / "data.json")).exit_code == 0
    assert _invoke(runner, "file", "rename", str(folder), "data.json", "dataaa.json").exit_code == 0

    listed = _invoke(runner, "folder", "list", str(folder), "--json")
    assert [e["name"] for e in json.loads(listed.output)] == ["dataaa.json"]

    read = _invoke(runner, "file", "read", str(folder), "dataaa.json")
    assert read.output.strip() == "{}"

    new_folder = tmp_path / "newFolder"
    assert _invoke(runner, "folder", "rename", str(folder), str(new_folder)).exit_code == 0
    assert _invoke(runner, "file", "delete", str(new_folder), "dataaa.json").exit_code == 0
    assert "(no files)" in _invoke(runner, "folder", "list", str(new_folder)).output
    assert _invoke(runner, "folder", "delete", str(new_folder)).exit_code == 0
    assert not new_folder.exists()

    missing = runner.invoke(cli, ["file", "read", str(new_folder), "dataaa.json"])
    assert missing.exit_code == 1
    assert "not found:" in missing.output


def test_parse_fields_decodes_json_values():
    data = _parse_fields(("age=20", "ok=true", "city=Banglore", "note=a=b", "empty="), None)
    assert data == {"age": 20, "ok": True, "city": "Banglore", "note": "a=b", "empty": ""}


def test_parse_fields_rejects_bad_pair():
    import click

    with pytest.raises(click.BadParameter):
        _parse_fields(("novalue",), None)
    with pytest.raises(click.BadParameter):
        _parse_fields((), "[1, 2]")


def test_status(runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COLUMNS", "200")
    missing = _invoke(runner, "status")
    assert missing.exit_code == 0
    assert "store missing" in missing.output

    _invoke(runner, "init", "demo")
    _invoke(runner, "record", "add", "name=A")
    result = _invoke(runner, "status")
    assert result.exit_code == 0
    assert "Records" in result.output
    assert "store missing" not in result.output
    assert "KB" in result.output


def test_parse_fields_keeps_non_json_constants_as_strings():
    data = _parse_fields(("score=NaN", "big=Infinity", "low=-Infinity"), None)
    assert data == {"score": "NaN", "big": "Infinity", "low": "-Infinity"}


def test_parse_fields_rejects_constants_in_json_option():
    import click

    with pytest.raises(click.BadParameter, match="Infinity"):
        _parse_fields((), '{"score": Infinity}')


def test_record_add_infinity_writes_strict_json(runner, store_file):
    result = _invoke(runner, "record", "add", "score=Infinity", "-f", str(store_file))
    assert result.exit_code == 0

    def reject(name):
        raise ValueError(name)

    (rec,) = json.loads(store_file.read_text(encoding="utf-8"), parse_constant=reject)
    assert rec["score"] == "Infinity"


def test_bad_config_value(runner, tmp_path, monkeypatch, store_file):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "fskit.toml").write_text('[store]\nindent = "wide"\n')

    explicit = runner.invoke(cli, ["record", "list", "-f", str(store_file)])
    assert explicit.exit_code == 0, explicit.output

    configured = runner.invoke(cli, ["record", "list"])
    assert configured.exit_code == 1
    assert "config error:" in configured.output
    assert "store.indent" in configured.output
