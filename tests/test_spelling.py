"""Tests for vocabulary building and spelling suggestions."""
import pytest

from bookmark_search.models import Record, Vocabulary
from bookmark_search.spelling import build_vocabulary, find_best_match, get_suggestion


@pytest.fixture
def vocab():
    record = Record(
        id="1",
        title="React Hooks Guide",
        url="https://react.dev/learn",
        category="Frontend",
        description="Learn hooks in React",
    )
    return build_vocabulary([record], version=3)


class TestBuildVocabulary:
    def test_collects_terms_from_all_fields(self, vocab):
        assert list(vocab) == ["react", "hooks", "guide", "learn", "frontend", "https", "dev"]

    def test_skips_short_words(self, vocab):
        assert "in" not in vocab

    def test_keeps_version(self, vocab):
        assert vocab.version == 3

    def test_empty_collection(self):
        assert len(build_vocabulary([])) == 0

    def test_handles_missing_fields(self):
        vocab = build_vocabulary([Record.from_dict({"id": "x", "title": "Solo", "description": None})])
        assert list(vocab) == ["solo"]

    def test_built_from_sample_records(self, records):
        vocab = build_vocabulary(records)
        assert "python" in vocab
        assert "github" in vocab
        assert "trending" in vocab


class TestFindBestMatch:
    def test_corrects_transposition(self, vocab):
        assert find_best_match("recat", vocab) == "react"

    def test_known_word_returns_none(self, vocab):
        assert find_best_match("react", vocab) is None

    def test_nothing_close_returns_none(self, vocab):
        assert find_best_match("zzzzzz", vocab) is None

    def test_phonetic_bonus_helps(self, vocab):
        assert find_best_match("hoks", vocab) == "hooks"

    def test_skips_candidates_with_large_length_difference(self):
        vocab = Vocabulary.from_terms(["documentation"])
        assert find_best_match("documents", vocab) is None

    def test_ties_go_to_first_seen_term(self):
        assert find_best_match("carx", Vocabulary.from_terms(["cart", "care"])) == "cart"
        assert find_best_match("carx", Vocabulary.from_terms(["care", "cart"])) == "care"


class TestGetSuggestion:
    def test_corrects_one_word(self, vocab):
        assert get_suggestion("recat hooks", vocab) == "react hooks"

    def test_correct_query_returns_none(self, vocab):
        assert get_suggestion("react hooks", vocab) is None

    def test_empty_query_returns_none(self, vocab):
        assert get_suggestion("", vocab) is None
        assert get_suggestion("?!", vocab) is None

    def test_output_is_normalized(self, vocab):
        assert get_suggestion("Recat, GUIDE!", vocab) == "react guide"

    def test_empty_vocabulary(self):
        assert get_suggestion("recat", Vocabulary()) is None
