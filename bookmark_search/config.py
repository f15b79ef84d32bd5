"""Configuration for the bookmark smart search server."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class RankerConfig:
    """Configuration for the optional remote semantic ranker."""
    endpoint: Optional[str] = None  # None = remote search disabled
    timeout: float = 15.0  # Seconds

    # Candidate shaping
    prefilter_candidates: int = 60  # Max records sent to the ranker
    max_results: int = 8  # Max records kept from the ranker's answer
    description_snippet: int = 400  # Chars of description sent per record

    @classmethod
    def from_env(cls) -> "RankerConfig":
        """Create config from environment variables."""
        return cls(
            endpoint=os.environ.get("BOOKMARK_SEARCH_RANKER_URL") or None,
            timeout=float(os.environ.get("BOOKMARK_SEARCH_RANKER_TIMEOUT", "15.0")),
            prefilter_candidates=int(os.environ.get("BOOKMARK_SEARCH_PREFILTER", "60")),
            max_results=int(os.environ.get("BOOKMARK_SEARCH_MAX_REMOTE_RESULTS", "8")),
        )


@dataclass
class Config:
    """Main configuration for the bookmark smart search server."""
    ranker: RankerConfig = field(default_factory=RankerConfig.from_env)
    records_file: Optional[Path] = None  # JSON export; None = read Chrome bookmarks
    chrome_profile: str = "Default"  # Chrome profile name
    result_limit: int = 20  # Max records returned by search tools
    related_limit: int = 4  # Default number of related records
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        records_file_str = os.environ.get("BOOKMARK_SEARCH_RECORDS_FILE")
        records_file = Path(records_file_str) if records_file_str else None

        return cls(
            ranker=RankerConfig.from_env(),
            records_file=records_file,
            chrome_profile=os.environ.get("BOOKMARK_SEARCH_CHROME_PROFILE", "Default"),
            result_limit=int(os.environ.get("BOOKMARK_SEARCH_RESULT_LIMIT", "20")),
            log_level=os.environ.get("BOOKMARK_SEARCH_LOG_LEVEL", "INFO"),
        )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global config instance.

    Returns:
        Config loaded from environment
    """
    global _config

    if _config is None:
        _config = Config.from_env()

    return _config
