"""Rules for scheduled watchlist refreshes and the per-ticker run tracker."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

REAP_EVERY_N_TICKS = 10
"""How many scheduler ticks pass between sweeps for stuck scheduled runs."""

CATCH_UP_WARN_MULTIPLIER = 4
"""A watchlist overdue by more than this many refresh intervals is flagged."""

DEFAULT_REFRESH_INTERVAL_HOURS = 168
"""Refresh interval used when a watchlist has no schedule of its own."""

_ONE_HOUR = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _whole_hours(delta: timedelta) -> int:
    """Whole hours in ``delta``, truncated toward zero."""
    return int(delta / _ONE_HOUR)


class ActiveRunTracker:
    """Thread-safe set of tickers that have a scheduled run in flight."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tickers: set[str] = set()

    def try_claim(self, ticker: str) -> bool:
        """Mark ``ticker`` as running; return False if it already was."""
        with self._lock:
            if ticker in self._tickers:
                return False
            self._tickers.add(ticker)
            return True

    def release(self, ticker: str) -> None:
        """Mark ``ticker`` as no longer running."""
        with self._lock:
            self._tickers.discard(ticker)

    def __contains__(self, ticker: object) -> bool:
        with self._lock:
            return ticker in self._tickers

    def __len__(self) -> int:
        with self._lock:
            return len(self._tickers)


def available_slots(max_concurrent: int, active_count: int) -> int:
    """Free run slots under the concurrency cap, never below zero."""
    return max(max_concurrent - active_count, 0)


def is_significantly_overdue(
    next_refresh_at: datetime | None,
    refresh_interval_hours: int,
    now: datetime | None = None,
) -> bool:
    """Whether a refresh is overdue by more than a few refresh intervals."""
    if next_refresh_at is None:
        return False
    now = now or _utcnow()
    overdue_hours = _whole_hours(now - next_refresh_at)
    threshold = refresh_interval_hours * CATCH_UP_WARN_MULTIPLIER
    return threshold > 0 and overdue_hours > threshold


def question_from_template(question_template: str, ticker: str) -> str:
    """Put the ticker into a stored question template."""
    if "{ticker}" in question_template:
        return question_template.replace("{ticker}", ticker)
    return f"{ticker}: {question_template}"


def is_ticker_due(
    latest_updated_at: datetime | None,
    min_age_hours: int,
    now: datetime | None = None,
) -> bool:
    """Whether a ticker's latest run is old enough to refresh again."""
    if latest_updated_at is None:
        return True
    now = now or _utcnow()
    return _whole_hours(now - latest_updated_at) >= min_age_hours


def refresh_outcome(runs_spawned: int, spawn_errors: Sequence[str]) -> str | None:
    """The failure reason to record for a refresh, or None if it counts as a success.

    A refresh fails only when nothing was spawned and at least one spawn
    failed; a refresh that spawned nothing because every ticker was
    filtered out still counts as a success.
    """
    if runs_spawned > 0 or not spawn_errors:
        return None
    return "; ".join(spawn_errors)