"""Shared fixtures: sample records and an isolated data directory."""

import orjson
import pytest


@pytest.fixture
def star_records():
    return [
        {"appId": "A", "name": "Core", "isPrimary": True},
        {"appId": "B", "name": "Billing", "isPrimary": False},
        {"appId": "C", "name": "Auth", "isPrimary": False},
    ]


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the db module at an empty temp directory."""
    monkeypatch.setenv("APPGRAPH_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def write_apps(data_dir):
    def _write(records):
        (data_dir / "app.json").write_bytes(orjson.dumps(records))
    return _write
