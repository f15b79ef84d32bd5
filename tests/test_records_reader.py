"""Tests for records_reader module."""
import json
import sys
from pathlib import Path
import pytest

from bookmark_search.records_reader import (
    chrome_time_to_iso,
    get_chrome_bookmarks_path,
    read_chrome_records,
    read_json_records,
)


class TestReadChromeRecords:
    def test_reads_all_bookmarks(self, sample_bookmarks_path):
        records = read_chrome_records(sample_bookmarks_path)
        assert len(records) == 5

    def test_record_fields(self, sample_bookmarks_path):
        record = read_chrome_records(sample_bookmarks_path)[0]
        assert record.id == "1"
        assert record.title == "Python Docs"
        assert record.url == "https://docs.python.org"
        assert record.description == ""
        assert record.is_pinned is False

    def test_category_is_nearest_folder(self, sample_bookmarks_path):
        categories = {r.title: r.category for r in read_chrome_records(sample_bookmarks_path)}
        assert categories["Python Docs"] == "Bookmarks Bar"
        assert categories["Jira Board"] == "Work"
        assert categories["SQLite Guide"] == "Tutorials"
        assert categories["Stack Overflow"] == "Other Bookmarks"

    def test_created_at_decoded(self, sample_bookmarks_path):
        records = read_chrome_records(sample_bookmarks_path)
        assert records[0].created_at.startswith("2023-")
        assert records[1].created_at == ""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_chrome_records(tmp_path / "nonexistent")

    def test_malformed_json_raises(self, tmp_path):
        bad_file = tmp_path / "Bookmarks"
        bad_file.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            read_chrome_records(bad_file)


class TestReadJsonRecords:
    def test_reads_export(self, records_path, records):
        assert read_json_records(records_path) == records

    def test_missing_fields_become_empty(self, tmp_path):
        export = tmp_path / "records.json"
        export.write_text(json.dumps([{"id": 7, "title": None, "isPinned": 1}]))
        record = read_json_records(export)[0]
        assert record.id == "7"
        assert record.title == ""
        assert record.url == ""
        assert record.is_pinned is True

    def test_rejects_non_list(self, tmp_path):
        export = tmp_path / "records.json"
        export.write_text(json.dumps({"id": "1"}))
        with pytest.raises(ValueError):
            read_json_records(export)


class TestChromeTime:
    def test_invalid_values(self):
        assert chrome_time_to_iso(None) == ""
        assert chrome_time_to_iso("abc") == ""
        assert chrome_time_to_iso("0") == ""

    def test_epoch_offset(self):
        # 1970-01-01 is 11644473600 seconds after 1601-01-01
        assert chrome_time_to_iso(11644473600 * 1_000_000).startswith("1970-01-01T00:00:00")


class TestChromePath:
    def test_profile_in_path(self):
        assert "Profile 2" in str(get_chrome_bookmarks_path("Profile 2"))

    def test_prefers_chrome_on_linux(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        for browser in ("google-chrome", "chromium"):
            profile_dir = tmp_path / ".config" / browser / "Default"
            profile_dir.mkdir(parents=True)
            (profile_dir / "Bookmarks").write_text("{}")

        assert get_chrome_bookmarks_path() == tmp_path / ".config" / "google-chrome" / "Default" / "Bookmarks"

    def test_falls_back_to_chromium(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        profile_dir = tmp_path / ".config" / "chromium" / "Default"
        profile_dir.mkdir(parents=True)
        (profile_dir / "Bookmarks").write_text("{}")

        assert get_chrome_bookmarks_path() == profile_dir / "Bookmarks"

    def test_missing_everywhere_names_chrome_location(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_chrome_bookmarks_path("Work") == tmp_path / ".config" / "google-chrome" / "Work" / "Bookmarks"
