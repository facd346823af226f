"""Scoring and ranking of scanner opportunities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import cmp_to_key


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TickerUniverse:
    """A ticker in the scanning universe."""

    ticker: str
    name: str | None = None
    sector: str | None = None
    industry: str | None = None
    market_cap_billion: float | None = None


@dataclass
class ScanOpportunity:
    """A ticker flagged by a scan, with its component scores."""

    id: str
    scan_run_id: str
    ticker: str
    overall_score: float
    signal_strength_score: float
    thesis_quality_score: float | None
    coverage_gap_score: float
    timing_score: float
    signals_json: str = "[]"
    preliminary_thesis_markdown: str | None = None
    preliminary_thesis_html: str | None = None
    key_catalysts: str | None = None
    risk_factors: str | None = None
    promoted_to_run_id: str | None = None
    status: str = "new"
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


def coverage_gap_score(
    latest_updated_at: datetime | None, now: datetime | None = None
) -> float:
    """Score how uncovered a ticker is from the age of its latest run."""
    if latest_updated_at is None:
        return 10.0
    now = now or _utcnow()
    days_old = int((now - latest_updated_at) / timedelta(days=1))
    if days_old > 30:
        return 8.0
    if days_old > 14:
        return 5.0
    return 2.0


def calculate_overall_score(
    signal_strength: float,
    thesis_quality: float | None,
    coverage_gap: float,
    timing: float,
) -> float:
    """Weighted average of the component scores, clamped to [0, 10]."""
    quality = 5.0 if thesis_quality is None else thesis_quality
    weighted = (
        signal_strength * 0.30 + quality * 0.25 + coverage_gap * 0.25 + timing * 0.20
    )
    return min(max(weighted, 0.0), 10.0)


def _by_score_descending(a: ScanOpportunity, b: ScanOpportunity) -> int:
    if b.overall_score > a.overall_score:
        return 1
    if b.overall_score < a.overall_score:
        return -1
    return 0


def rank_opportunities(opportunities: list[ScanOpportunity]) -> None:
    """Sort opportunities in place, highest overall score first."""
    opportunities.sort(key=cmp_to_key(_by_score_descending))


def filter_top_opportunities(
    opportunities: Iterable[ScanOpportunity], max_count: int
) -> list[ScanOpportunity]:
    """Return the ``max_count`` best opportunities, best first."""
    ranked = list(opportunities)
    rank_opportunities(ranked)
    return ranked[:max_count]


def meets_minimum_criteria(
    signal_strength: float,
    coverage_gap: float,
    min_signal_strength: float,
    min_coverage_gap: float,
) -> bool:
    """Whether both scores reach their minimums."""
    return signal_strength >= min_signal_strength and coverage_gap >= min_coverage_gap


def calculate_market_cap_score(ticker_info: TickerUniverse | None) -> float:
    """Prefer mid caps, then large caps, then mega caps, then small caps."""
    if ticker_info is None or ticker_info.market_cap_billion is None:
        return 5.0
    market_cap = ticker_info.market_cap_billion
    if market_cap > 200.0:
        return 6.0
    if market_cap > 50.0:
        return 8.0
    if market_cap > 10.0:
        return 10.0
    return 4.0


def calculate_sector_score(
    existing_sectors: Sequence[str], ticker_sector: str | None
) -> float:
    """Reward sectors not yet represented among opportunities."""
    if ticker_sector is None:
        return 5.0
    count = sum(1 for sector in existing_sectors if sector == ticker_sector)
    if count == 0:
        return 10.0
    if count == 1:
        return 7.0
    return 4.0