"""Load bookmark records from Chrome or from a JSON export."""
import json
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from bookmark_search.models import Record

# Chrome timestamps count microseconds from 1601-01-01 UTC
CHROME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)

CHROME_ROOTS = ("bookmark_bar", "other", "synced")


def _chrome_user_data_dirs(home: Path) -> List[Path]:
    """Browser user-data directories to try, in order, for this platform."""
    if sys.platform == "win32":
        return [home / "AppData" / "Local" / "Google" / "Chrome" / "User Data"]
    if sys.platform == "darwin":
        return [home / "Library" / "Application Support" / "Google" / "Chrome"]
    if os.name == "posix":
        return [home / ".config" / "google-chrome", home / ".config" / "chromium"]
    raise OSError(f"Unsupported platform: {sys.platform}")


def get_chrome_bookmarks_path(profile: str = "Default") -> Path:
    """Locate the Bookmarks file of a Chrome (or Chromium) profile.

    Returns the first candidate that exists, or the Chrome location when
    none does so the caller's FileNotFoundError names the expected path.
    """
    candidates = [data_dir / profile / "Bookmarks" for data_dir in _chrome_user_data_dirs(Path.home())]
    return next((path for path in candidates if path.exists()), candidates[0])


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Records file not found at {path}")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def chrome_time_to_iso(value: Any) -> str:
    """Convert a Chrome date_added value to an ISO 8601 string ("" if invalid)."""
    try:
        micros = int(value)
    except (TypeError, ValueError):
        return ""
    if micros <= 0:
        return ""
    try:
        return (CHROME_EPOCH + timedelta(microseconds=micros)).isoformat()
    except OverflowError:
        return ""


def extract_records(node: Dict[str, Any], records: List[Record], category: str = "") -> None:
    """Recursively collect records from a Chrome bookmarks tree.

    Args:
        node: Current node in the bookmarks tree
        records: List to accumulate records
        category: Name of the nearest enclosing folder
    """
    if node.get("type") == "url":
        records.append(Record(
            id=str(node.get("id", "")),
            title=node.get("name") or "",
            url=node.get("url") or "",
            category=category,
            created_at=chrome_time_to_iso(node.get("date_added")),
        ))
    elif node.get("type") == "folder":
        folder_name = node.get("name") or category
        for child in node.get("children", []):
            extract_records(child, records, folder_name)


def read_chrome_records(bookmarks_path: Optional[Path] = None, profile: str = "Default") -> List[Record]:
    """Read all bookmarks from a Chrome bookmarks file as records.

    Args:
        bookmarks_path: Optional path to bookmarks file. If None, uses the profile's default location.
        profile: Chrome profile used when no path is given

    Returns:
        Records categorized by their nearest folder name

    Raises:
        FileNotFoundError: If bookmarks file doesn't exist
        json.JSONDecodeError: If bookmarks file is malformed
    """
    if bookmarks_path is None:
        bookmarks_path = get_chrome_bookmarks_path(profile)

    data = _load_json(bookmarks_path)
    roots = data.get("roots", {})

    records: List[Record] = []
    for root_name in CHROME_ROOTS:
        if root_name in roots:
            extract_records(roots[root_name], records)

    return records


def read_json_records(path: Path) -> List[Record]:
    """Read records from a JSON array export.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is malformed
        ValueError: If the top-level value is not a list
    """
    data = _load_json(path)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of records in {path}")

    return [Record.from_dict(item) for item in data if isinstance(item, dict)]
