"""Data types shared by the search engine, spelling corrector and recommender."""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple


def _text(value: Any) -> str:
    """Coerce a possibly-missing field to a string."""
    if value is None:
        return ""
    return str(value)


TEXT_FIELDS = ("id", "title", "url", "category", "description", "created_at")


@dataclass(frozen=True)
class Record:
    """A saved bookmark.

    Text fields are never None; missing values are stored as empty strings.
    """
    id: str
    title: str = ""
    url: str = ""
    category: str = ""
    description: str = ""
    created_at: str = ""
    is_pinned: bool = False

    def __post_init__(self) -> None:
        for name in TEXT_FIELDS:
            object.__setattr__(self, name, _text(getattr(self, name)))
        object.__setattr__(self, "is_pinned", bool(self.is_pinned))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """Build a record from a storage row.

        Args:
            data: Mapping with snake_case or camelCase keys

        Returns:
            Record with missing text fields set to ""
        """
        created_at = data.get("created_at")
        if created_at is None:
            created_at = data.get("createdAt")

        is_pinned = data.get("is_pinned")
        if is_pinned is None:
            is_pinned = data.get("isPinned")

        return cls(
            id=data.get("id"),
            title=data.get("title"),
            url=data.get("url"),
            category=data.get("category"),
            description=data.get("description"),
            created_at=created_at,
            is_pinned=is_pinned,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "category": self.category,
            "description": self.description,
            "created_at": self.created_at,
            "is_pinned": self.is_pinned,
        }


@dataclass
class ScoredRecord:
    """A record paired with the score and match tags from one scoring pass."""
    record: Record
    score: float = 0
    matched_terms: List[str] = field(default_factory=list)
    matched_fields: List[str] = field(default_factory=list)


@dataclass
class SearchResult:
    """Outcome of a search call."""
    records: List[Record]
    suggestion: Optional[str] = None
    query: str = ""
    total_matches: int = 0


@dataclass(frozen=True)
class Vocabulary:
    """Immutable snapshot of the terms in a record collection.

    Terms keep first-seen order. Rebuild the snapshot (with a new version)
    whenever the collection changes instead of mutating it.
    """
    terms: Tuple[str, ...] = ()
    version: int = 0
    _index: FrozenSet[str] = field(init=False, repr=False, compare=False, default=frozenset())

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", frozenset(self.terms))

    @classmethod
    def from_terms(cls, terms: Iterable[str], version: int = 0) -> "Vocabulary":
        # dict keeps insertion order and drops duplicates
        return cls(terms=tuple(dict.fromkeys(terms)), version=version)

    def __contains__(self, term: object) -> bool:
        return term in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)
