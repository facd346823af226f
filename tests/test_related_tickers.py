import pytest

from autothesis.opportunity_ranker import TickerUniverse
from autothesis.related_tickers import (
    CandidateInfo,
    add_sector_matches,
    add_source_mentions,
    add_thesis_mentions,
    build_sector_context,
    extract_ticker_mentions,
    is_potential_ticker,
    top_candidates,
)


@pytest.mark.parametrize(
    "word, expected",
    [
        ("AA", True),
        ("NVDA", True),
        ("GOOGL", True),
        ("A", False),
        ("GOOGLE", False),
        ("nvda", False),
        ("N4", False),
    ],
)
def test_is_potential_ticker(word, expected):
    assert is_potential_ticker(word) is expected


def test_extract_ticker_mentions_filters_to_valid_set_and_excludes_primary():
    valid = {"NVDA", "AMD", "MSFT"}
    text = "NVDA outpaces AMD and MSFT, while NVDA stays primary. GOOG not in set."
    assert extract_ticker_mentions(text, valid, "NVDA") == ["AMD", "MSFT"]


def test_extract_ticker_mentions_handles_punctuation():
    valid = {"NVDA", "AMD"}
    text = "(AMD) — look at the report."
    assert extract_ticker_mentions(text, valid, "NVDA") == ["AMD"]


def test_extract_ticker_mentions_dedupes_and_sorts():
    valid = {"AAPL", "MSFT", "AMD"}
    text = "MSFT AMD AMD AAPL MSFT"
    assert extract_ticker_mentions(text, valid, "NVDA") == ["AAPL", "AMD", "MSFT"]


def test_extract_ticker_mentions_uppercases_lowercase_words():
    assert extract_ticker_mentions("buy amd now", {"AMD"}, "NVDA") == ["AMD"]


def test_add_thesis_mentions_scores_known_like_tickers_and_skips_primary():
    candidates: dict[str, CandidateInfo] = {}
    thesis = "Compare NVDA to AMD, MSFT and GOOG, not lowercase 'nvda'."
    add_thesis_mentions(thesis, "NVDA", candidates)
    assert "AMD" in candidates
    assert "MSFT" in candidates
    assert "GOOG" in candidates
    assert "NVDA" not in candidates
    assert candidates["AMD"].relationship_type == "mentioned_in_thesis"
    assert candidates["AMD"].context == "Mentioned in thesis memo"
    assert candidates["AMD"].relevance_score == 2.0


def test_add_thesis_mentions_repeated_mentions_boost_and_count():
    candidates: dict[str, CandidateInfo] = {}
    add_thesis_mentions("AMD AMD", "NVDA", candidates)
    assert candidates["AMD"].mention_count == 2
    assert candidates["AMD"].relevance_score > 2.0


def test_build_sector_context_with_and_without_industry():
    with_industry = TickerUniverse(ticker="AMD", industry="Semiconductors")
    without = TickerUniverse(ticker="AMD")
    assert build_sector_context(with_industry, "Technology") == "Technology - Semiconductors"
    assert build_sector_context(without, "Technology") == "Technology"


def test_add_sector_matches_skips_primary_and_adds_others():
    candidates: dict[str, CandidateInfo] = {}
    tickers = [
        TickerUniverse(ticker="NVDA", sector="Technology"),
        TickerUniverse(ticker="AMD", sector="Technology", industry="Semiconductors"),
    ]
    add_sector_matches(candidates, tickers, "Technology", "NVDA")
    assert list(candidates) == ["AMD"]
    assert candidates["AMD"].relationship_type == "same_sector"
    assert candidates["AMD"].relevance_score == 5.0
    assert candidates["AMD"].context == "Technology - Semiconductors"
    assert candidates["AMD"].mention_count == 0


def test_add_sector_matches_caps_existing_score_and_sets_type():
    candidates = {"AMD": CandidateInfo("mentioned_in_sources", 8.0, "ctx", 2)}
    add_sector_matches(candidates, [TickerUniverse(ticker="AMD")], "Technology", "NVDA")
    assert candidates["AMD"].relevance_score == 10.0
    assert candidates["AMD"].relationship_type == "same_sector"
    assert candidates["AMD"].context == "ctx"


def test_add_source_mentions_new_and_existing():
    candidates = {"AMD": CandidateInfo("mentioned_in_thesis", 2.0, "ctx", 1)}
    add_source_mentions(
        candidates, ["AMD and MSFT", None, "MSFT again"], {"AMD", "MSFT"}, "NVDA"
    )
    assert candidates["AMD"].relationship_type == "mentioned_in_sources"
    assert candidates["AMD"].mention_count == 2
    assert candidates["AMD"].relevance_score > 2.0
    assert candidates["MSFT"].context == "Mentioned in research sources"
    assert candidates["MSFT"].mention_count == 2
    assert candidates["MSFT"].relevance_score > 3.0


def test_top_candidates_orders_by_relevance_and_limits():
    candidates = {
        f"T{i}": CandidateInfo("same_sector", float(i)) for i in range(12)
    }
    top = top_candidates(candidates)
    assert len(top) == 10
    scores = [info.relevance_score for _, info in top]
    assert scores == sorted(scores, reverse=True)
    assert top[0][0] == "T11"
    assert top_candidates(candidates, 2)[1][0] == "T10"