"""Classification and ranking of search results by source type."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from urllib.parse import urlsplit

_TYPE_BONUS = {
    "sec": 5.0,
    "ir": 4.0,
    "transcript": 3.5,
    "press": 3.0,
    "media": 2.0,
}
_DEFAULT_BONUS = 1.0


@dataclass
class SearchResultItem:
    """One result returned by a search provider."""

    url: str
    title: str | None = None
    snippet: str | None = None
    score: float | None = None


@dataclass
class RankedSearchResult:
    """A search result with its rank score and source type."""

    url: str
    title: str | None
    snippet: str | None
    rank_score: float
    source_type: str


def url_domain(url: str) -> str | None:
    """Return the domain name of an absolute URL, or None if it has none."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host
    return None


def classify_source(domain: str, title: str) -> str:
    """Classify a source by keywords in its domain and title."""
    combined = f"{domain.lower()} {title.lower()}"

    def has(*needles: str) -> bool:
        return any(needle in combined for needle in needles)

    if has("sec.gov", "10-k", "10-q"):
        return "sec"
    if has("investor", "shareholder", "annual report"):
        return "ir"
    if has("transcript", "earnings call"):
        return "transcript"
    if has("press release", "news release", "businesswire"):
        return "press"
    if has("bloomberg", "reuters", "wsj", "ft.com"):
        return "media"
    return "other"


def rank_search_result(result: SearchResultItem) -> RankedSearchResult:
    """Score a search result: provider score plus a bonus for its source type."""
    domain = url_domain(result.url) or ""
    source_type = classify_source(domain, result.title or "")
    rank_score = (result.score or 0.0) + _TYPE_BONUS.get(source_type, _DEFAULT_BONUS)
    return RankedSearchResult(
        url=result.url,
        title=result.title,
        snippet=result.snippet,
        rank_score=rank_score,
        source_type=source_type,
    )