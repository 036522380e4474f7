from __future__ import annotations

import pytest

from fskit.store import RecordStore


@pytest.fixture()
def store_file(tmp_path):
    """An empty store file holding the {} sentinel."""
    path = tmp_path / "data.json"
    path.write_text("{}", encoding="utf-8")
    return path


@pytest.fixture()
def store(store_file):
    return RecordStore(store_file)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("FSKIT_STORE_FILE", raising=False)
    monkeypatch.delenv("FSKIT_LOG_LEVEL", raising=False)
