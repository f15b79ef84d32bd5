"""Shared fixtures for tests."""
import json
import pytest

from bookmark_search.models import Record


SAMPLE_BOOKMARKS = {
    "checksum": "test",
    "roots": {
        "bookmark_bar": {
            "children": [
                {
                    "date_added": "13345678901234567",
                    "id": "1",
                    "name": "Python Docs",
                    "type": "url",
                    "url": "https://docs.python.org"
                },
                {
                    "id": "2",
                    "name": "Work",
                    "type": "folder",
                    "children": [
                        {
                            "id": "3",
                            "name": "Jira Board",
                            "type": "url",
                            "url": "https://jira.example.com/board"
                        },
                        {
                            "id": "4",
                            "name": "Confluence",
                            "type": "url",
                            "url": "https://confluence.example.com"
                        }
                    ]
                },
                {
                    "id": "5",
                    "name": "Tutorials",
                    "type": "folder",
                    "children": [
                        {
                            "id": "6",
                            "name": "SQLite Guide",
                            "type": "url",
                            "url": "https://sqlite.org/guide"
                        }
                    ]
                }
            ],
            "id": "0",
            "name": "Bookmarks Bar",
            "type": "folder"
        },
        "other": {
            "children": [
                {
                    "id": "7",
                    "name": "Stack Overflow",
                    "type": "url",
                    "url": "https://stackoverflow.com"
                }
            ],
            "id": "100",
            "name": "Other Bookmarks",
            "type": "folder"
        },
        "synced": {
            "children": [],
            "id": "200",
            "name": "Mobile Bookmarks",
            "type": "folder"
        }
    },
    "version": 1
}


SAMPLE_RECORDS = [
    {
        "id": "1",
        "title": "React Hooks Guide",
        "url": "https://react.dev/reference/hooks",
        "category": "Frontend",
        "description": "Learn how to use state and effect hooks in React components",
        "created_at": "2025-01-05T10:00:00Z",
    },
    {
        "id": "2",
        "title": "Python Documentation",
        "url": "https://docs.python.org/3/",
        "category": "Programming",
        "description": "Official reference for the Python standard library",
        "created_at": "2025-01-06T10:00:00Z",
    },
    {
        "id": "3",
        "title": "Visual Studio Code",
        "url": "https://code.visualstudio.com",
        "category": "Editors",
        "description": None,
        "created_at": "2025-01-07T10:00:00Z",
    },
    {
        "id": "4",
        "title": "ChatGPT",
        "url": "https://chat.openai.com",
        "category": "AI Tools",
        "description": "Conversational assistant by OpenAI",
        "created_at": "2025-01-08T10:00:00Z",
    },
    {
        "id": "5",
        "title": "Claude AI",
        "url": "https://claude.ai",
        "category": "AI Tools",
        "description": "AI assistant for writing and coding",
        "created_at": "2025-01-09T10:00:00Z",
        "is_pinned": True,
    },
    {
        "id": "6",
        "title": "GitHub Trending",
        "url": "https://github.com/trending",
        "category": "Programming",
        "description": "Popular repositories on GitHub",
        "created_at": "2025-01-10T10:00:00Z",
    },
]


@pytest.fixture
def sample_bookmarks_path(tmp_path):
    """Create a temporary Chrome bookmarks file with sample data."""
    bookmarks_file = tmp_path / "Bookmarks"
    bookmarks_file.write_text(json.dumps(SAMPLE_BOOKMARKS, indent=3))
    return bookmarks_file


@pytest.fixture
def records():
    """Return sample records as the record store would supply them."""
    return [Record.from_dict(item) for item in SAMPLE_RECORDS]


@pytest.fixture
def records_path(tmp_path):
    """Create a temporary JSON export of the sample records."""
    export_file = tmp_path / "records.json"
    export_file.write_text(json.dumps(SAMPLE_RECORDS, indent=2))
    return export_file


@pytest.fixture
def by_id(records):
    """Look up sample records by id."""
    return {record.id: record for record in records}
