"""Signals detected for a ticker and the scores derived from them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from autothesis.source_ranker import SearchResultItem

_SIGNAL_WEIGHTS = {
    "earnings_catalyst": 1.5,
    "news_spike": 1.2,
    "analyst_activity": 1.3,
    "valuation_anomaly": 1.0,
    "sector_momentum": 0.8,
    "insider_activity": 1.1,
    "coverage": 0.5,
}
_DEFAULT_WEIGHT = 1.0


@dataclass
class ScanSignal:
    """A signal that makes a ticker interesting to research."""

    signal_type: str
    strength: float
    description: str
    evidence: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, value: Any) -> ScanSignal:
        """Build a signal from JSON, raising ValueError when malformed."""
        if not isinstance(value, dict):
            raise ValueError("signal must be an object")
        signal_type = value.get("signal_type")
        description = value.get("description")
        strength = value.get("strength")
        evidence = value.get("evidence", [])
        if not isinstance(signal_type, str):
            raise ValueError("field `signal_type` must be a string")
        if not isinstance(description, str):
            raise ValueError("field `description` must be a string")
        if isinstance(strength, bool) or not isinstance(strength, (int, float)):
            raise ValueError("field `strength` must be a number")
        if not isinstance(evidence, list) or not all(isinstance(e, str) for e in evidence):
            raise ValueError("field `evidence` must be a list of strings")
        return cls(signal_type, float(strength), description, list(evidence))


def signal_query(ticker: str) -> str:
    """The search query used to look for a ticker's signals."""
    return (
        f"{ticker} stock catalyst earnings news analyst upgrade downgrade "
        "insider trading valuation 2024 2025"
    )


def parse_signal_output(value: Any) -> list[ScanSignal]:
    """Parse the signal detector's JSON reply."""
    if not isinstance(value, dict) or not isinstance(value.get("signals"), list):
        raise ValueError("field `signals` must be a list")
    return [ScanSignal.from_dict(item) for item in value["signals"]]


def fallback_signals(
    ticker: str, search_results: Sequence[SearchResultItem]
) -> list[ScanSignal]:
    """A single coverage signal built from the raw search results."""
    if not search_results:
        return [
            ScanSignal(
                signal_type="coverage",
                strength=0.1,
                description=f"No recent news found for {ticker}",
            )
        ]
    return [
        ScanSignal(
            signal_type="coverage",
            strength=0.3,
            description=f"{len(search_results)} recent news articles found for {ticker}",
            evidence=[r.title for r in search_results[:3] if r.title is not None],
        )
    ]


def calculate_signal_strength(signals: Sequence[ScanSignal]) -> float:
    """Weighted mean signal strength scaled to [0, 10]."""
    if not signals:
        return 0.0
    total = sum(
        _SIGNAL_WEIGHTS.get(s.signal_type, _DEFAULT_WEIGHT) * s.strength for s in signals
    )
    return min(max(total / len(signals) * 10.0, 0.0), 10.0)


def calculate_timing_score(signals: Sequence[ScanSignal]) -> float:
    """Score how timely the signals are, favouring catalysts and analyst moves."""
    if not signals:
        return 0.0
    types = {s.signal_type for s in signals}
    score = 5.0
    if "earnings_catalyst" in types:
        score += 2.0
    if "analyst_activity" in types:
        score += 1.5
    if "news_spike" in types:
        score += 1.0
    return min(score, 10.0)