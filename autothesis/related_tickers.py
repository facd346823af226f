"""Discovery of tickers related to a research run's primary ticker."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Set
from dataclasses import dataclass

from autothesis.opportunity_ranker import TickerUniverse

MAX_RELEVANCE = 10.0
SECTOR_MATCH_SCORE = 5.0
SOURCE_MENTION_SCORE = 3.0
THESIS_MENTION_SCORE = 2.0
DEFAULT_RELATED_LIMIT = 10

SAME_SECTOR = "same_sector"
MENTIONED_IN_SOURCES = "mentioned_in_sources"
MENTIONED_IN_THESIS = "mentioned_in_thesis"


@dataclass
class CandidateInfo:
    """A ticker that may be related to the primary ticker, with its score."""

    relationship_type: str
    relevance_score: float
    context: str | None = None
    mention_count: int = 0


def _is_ascii_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_ascii_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _trim_to(word: str, keep: Callable[[str], bool]) -> str:
    """Strip characters from both ends of ``word`` until ``keep`` holds."""
    start, end = 0, len(word)
    while start < end and not keep(word[start]):
        start += 1
    while end > start and not keep(word[end - 1]):
        end -= 1
    return word[start:end]


def _is_ascii_upper_word(s: str) -> bool:
    return 2 <= len(s) <= 5 and all("A" <= c <= "Z" for c in s)


def is_potential_ticker(s: str) -> bool:
    """Whether ``s`` looks like a ticker: 2 to 5 ASCII capital letters."""
    return _is_ascii_upper_word(s)


def extract_ticker_mentions(
    text: str, valid_tickers: Set[str], primary_ticker: str
) -> list[str]:
    """Known tickers mentioned in ``text``, other than the primary, sorted and unique."""
    mentions = set()
    for word in text.split():
        cleaned = _trim_to(word, _is_ascii_alnum).upper()
        if (
            _is_ascii_upper_word(cleaned)
            and cleaned in valid_tickers
            and cleaned != primary_ticker
        ):
            mentions.add(cleaned)
    return sorted(mentions)


def build_sector_context(ticker_info: TickerUniverse, sector: str) -> str:
    """Describe a sector match, naming the industry when it is known."""
    if ticker_info.industry is not None:
        return f"{sector} - {ticker_info.industry}"
    return sector


def add_sector_matches(
    candidates: dict[str, CandidateInfo],
    sector_tickers: Iterable[TickerUniverse],
    sector: str,
    primary_ticker: str,
) -> None:
    """Add or boost candidates that share the primary ticker's sector."""
    for ticker_info in sector_tickers:
        if ticker_info.ticker == primary_ticker:
            continue
        existing = candidates.get(ticker_info.ticker)
        if existing is not None:
            existing.relevance_score = min(
                existing.relevance_score + SECTOR_MATCH_SCORE, MAX_RELEVANCE
            )
            existing.relationship_type = SAME_SECTOR
            continue
        candidates[ticker_info.ticker] = CandidateInfo(
            relationship_type=SAME_SECTOR,
            relevance_score=SECTOR_MATCH_SCORE,
            context=build_sector_context(ticker_info, sector),
            mention_count=0,
        )


def add_source_mentions(
    candidates: dict[str, CandidateInfo],
    texts: Iterable[str | None],
    valid_tickers: Set[str],
    primary_ticker: str,
) -> None:
    """Add or boost candidates mentioned in source texts; None texts are skipped."""
    for text in texts:
        if text is None:
            continue
        for ticker in extract_ticker_mentions(text, valid_tickers, primary_ticker):
            existing = candidates.get(ticker)
            if existing is not None:
                existing.mention_count += 1
                existing.relevance_score = min(
                    existing.relevance_score + SOURCE_MENTION_SCORE * 0.5, MAX_RELEVANCE
                )
                if existing.relationship_type == MENTIONED_IN_THESIS:
                    existing.relationship_type = MENTIONED_IN_SOURCES
                continue
            candidates[ticker] = CandidateInfo(
                relationship_type=MENTIONED_IN_SOURCES,
                relevance_score=SOURCE_MENTION_SCORE,
                context="Mentioned in research sources",
                mention_count=1,
            )


def add_thesis_mentions(
    thesis: str, primary_ticker: str, candidates: dict[str, CandidateInfo]
) -> None:
    """Add or boost candidates that look like tickers in the thesis memo."""
    for word in thesis.split():
        cleaned = _trim_to(word, _is_ascii_alpha)
        if not is_potential_ticker(cleaned):
            continue
        ticker = cleaned.upper()
        if ticker == primary_ticker:
            continue
        existing = candidates.get(ticker)
        if existing is not None:
            existing.mention_count += 1
            existing.relevance_score = min(
                existing.relevance_score + THESIS_MENTION_SCORE * 0.3, MAX_RELEVANCE
            )
            continue
        candidates[ticker] = CandidateInfo(
            relationship_type=MENTIONED_IN_THESIS,
            relevance_score=THESIS_MENTION_SCORE,
            context="Mentioned in thesis memo",
            mention_count=1,
        )


def top_candidates(
    candidates: Mapping[str, CandidateInfo], limit: int = DEFAULT_RELATED_LIMIT
) -> list[tuple[str, CandidateInfo]]:
    """The ``limit`` most relevant candidates, most relevant first."""
    ranked = sorted(
        candidates.items(), key=lambda item: item[1].relevance_score, reverse=True
    )
    return ranked[:limit]