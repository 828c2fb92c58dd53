"""Tests for record sources and settings storage."""

import asyncio

import httpx
import pytest

import db
from shared.errors import FetchError

URL = "https://apps.example.test/app.json"


def _run(coro):
    return asyncio.run(coro)


def _transport(handler):
    return httpx.MockTransport(handler)


class TestFetchRecords:
    def test_success(self, star_records):
        transport = _transport(lambda request: httpx.Response(200, json=star_records))
        assert _run(db.fetch_records(URL, transport=transport)) == star_records

    def test_non_success_status(self):
        transport = _transport(lambda request: httpx.Response(503))
        with pytest.raises(FetchError) as exc_info:
            _run(db.fetch_records(URL, transport=transport))
        assert exc_info.value.status_code == 503

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError, match="connection refused"):
            _run(db.fetch_records(URL, transport=_transport(handler)))

    def test_invalid_json(self):
        transport = _transport(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(FetchError, match="Invalid JSON"):
            _run(db.fetch_records(URL, transport=transport))


    @pytest.mark.parametrize("url", ["http://[::1/app.json", "not-a-url"])
    def test_malformed_url(self, url):
        with pytest.raises(FetchError, match="Failed to fetch"):
            _run(db.fetch_records(url))


class TestLocalRecords:
    def test_missing_file(self, data_dir):
        with pytest.raises(FetchError, match="not found"):
            _run(db.get_apps())

    def test_invalid_file(self, data_dir):
        (data_dir / "app.json").write_text("[{", encoding="utf-8")
        with pytest.raises(FetchError, match="Invalid JSON"):
            _run(db.get_apps())

    def test_save_then_get(self, data_dir, star_records):
        _run(db.save_apps(star_records))
        assert _run(db.get_apps()) == star_records
        assert not (data_dir / "app.json.tmp").exists()

    def test_load_records_prefers_local_without_url(self, write_apps, star_records):
        write_apps(star_records)
        assert _run(db.load_records({"sourceUrl": ""})) == star_records


class TestSettings:
    def test_defaults_without_file(self, data_dir):
        assert _run(db.get_effective_settings()) == db.DEFAULT_SETTINGS

    def test_invalid_file_falls_back(self, data_dir):
        (data_dir / "settings.json").write_text("{oops", encoding="utf-8")
        assert _run(db.get_effective_settings()) == db.DEFAULT_SETTINGS

    def test_values_resolved(self, data_dir):
        _run(db.save_settings({
            "direction": "left-to-right",
            "idStrategy": "raw",
            "sourceUrl": "  http://x/app.json ",
            "fetchTimeout": "2.5",
        }))
        cfg = _run(db.get_effective_settings())
        assert cfg == {
            "direction": "LR",
            "idStrategy": "raw",
            "sourceUrl": "http://x/app.json",
            "fetchTimeout": 2.5,
        }

    def test_bad_values_ignored(self, data_dir):
        _run(db.save_settings({"direction": "diagonal", "idStrategy": "hash", "fetchTimeout": "soon"}))
        cfg = _run(db.get_effective_settings())
        assert cfg["direction"] == "TB"
        assert cfg["idStrategy"] == "composite"
        assert cfg["fetchTimeout"] == db.DEFAULT_FETCH_TIMEOUT
