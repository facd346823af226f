"""Ticker normalisation, question sanitising and retry helpers."""

from __future__ import annotations

import asyncio
import random
import unicodedata
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")

MAX_QUESTION_LENGTH = 2_000
"""Maximum accepted length of a user-supplied question template."""

RETRY_BASE_DELAY_MS = 500
RETRY_MAX_DELAY_MS = 30_000

_BIDI_OVERRIDES = frozenset(
    "\u202a\u202b\u202c\u202d\u202e\u2066\u2067\u2068\u2069"
)
_KEPT_CONTROLS = frozenset("\n\r\t")


class BadRequestError(ValueError):
    """Raised when user input is rejected."""


def normalize_ticker(raw: str) -> str:
    """Return ``raw`` trimmed and upper-cased, or raise BadRequestError."""
    cleaned = raw.strip().upper()
    if not cleaned:
        raise BadRequestError("ticker is required")
    if not all((c.isascii() and c.isalnum()) or c in ".-" for c in cleaned):
        raise BadRequestError(
            "ticker must contain only letters, numbers, '.' or '-'"
        )
    return cleaned


def normalize_tickers(raw_tickers: Iterable[str]) -> list[str]:
    """Normalise tickers and drop duplicates, keeping first occurrences."""
    return list(dict.fromkeys(normalize_ticker(raw) for raw in raw_tickers))


def _is_allowed(c: str) -> bool:
    if c in _KEPT_CONTROLS:
        return True
    return unicodedata.category(c) != "Cc" and c not in _BIDI_OVERRIDES


def sanitize_question(raw: str) -> str:
    """Strip control and bidi-override characters, cap length, trim the end."""
    filtered = "".join(c for c in raw if _is_allowed(c))
    return filtered[:MAX_QUESTION_LENGTH].rstrip()


def render_question_for_ticker(question_template: str, ticker: str) -> str:
    """Sanitise a template and put the ticker into it."""
    sanitized = sanitize_question(question_template)
    if "{ticker}" in sanitized:
        return sanitized.replace("{ticker}", ticker)
    return f"{ticker}: {sanitized}"


def backoff_delay(attempt: int) -> float:
    """Seconds to sleep before retry ``attempt`` (0-indexed), with jitter."""
    exp = 1 << min(attempt, 20)
    capped = min(RETRY_BASE_DELAY_MS * exp, RETRY_MAX_DELAY_MS)
    floor = max(capped // 2, min(RETRY_BASE_DELAY_MS, capped))
    span = max(capped - floor, 1)
    jitter = random.randrange(span)
    return (floor + jitter) / 1000.0


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]], max_attempts: int
) -> T:
    """Await ``operation()`` until it succeeds or attempts run out."""
    last_error: Exception | None = None
    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as error:  # noqa: BLE001 - every failure is retried
            last_error = error
            if attempt < max_attempts - 1:
                await asyncio.sleep(backoff_delay(attempt))
    if last_error is not None:
        raise last_error
    raise RuntimeError(f"operation failed after {max_attempts} attempts")