import threading
from datetime import datetime, timedelta, timezone

import pytest

from autothesis.scheduler import (
    CATCH_UP_WARN_MULTIPLIER,
    ActiveRunTracker,
    available_slots,
    is_significantly_overdue,
    is_ticker_due,
    question_from_template,
    refresh_outcome,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_tracker_claim_and_release():
    tracker = ActiveRunTracker()
    assert tracker.try_claim("NVDA") is True
    assert tracker.try_claim("NVDA") is False
    assert "NVDA" in tracker
    assert len(tracker) == 1
    tracker.release("NVDA")
    assert "NVDA" not in tracker
    assert len(tracker) == 0
    assert tracker.try_claim("NVDA") is True


def test_tracker_release_unknown_ticker_is_harmless():
    tracker = ActiveRunTracker()
    tracker.try_claim("MSFT")
    tracker.release("AAPL")
    assert len(tracker) == 1
    assert "MSFT" in tracker


def test_tracker_only_one_thread_claims_a_ticker():
    tracker = ActiveRunTracker()
    results = []
    lock = threading.Lock()

    def claim():
        won = tracker.try_claim("AMD")
        with lock:
            results.append(won)

    threads = [threading.Thread(target=claim) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert results.count(True) == 1
    assert len(tracker) == 1


@pytest.mark.parametrize(
    "max_concurrent, active", [(3, 1), (3, 3), (2, 5), (0, 0)]
)
def test_available_slots_never_negative(max_concurrent, active):
    slots = available_slots(max_concurrent, active)
    assert slots >= 0
    assert slots + min(active, max_concurrent) == max_concurrent


def test_overdue_none_is_not_overdue():
    assert is_significantly_overdue(None, 24, NOW) is False


def test_overdue_beyond_threshold():
    interval = 24
    limit = interval * CATCH_UP_WARN_MULTIPLIER
    at_limit = NOW - timedelta(hours=limit)
    past_limit = NOW - timedelta(hours=limit + 1)
    assert is_significantly_overdue(at_limit, interval, NOW) is False
    assert is_significantly_overdue(past_limit, interval, NOW) is True


def test_overdue_partial_hour_is_truncated():
    interval = 24
    limit = interval * CATCH_UP_WARN_MULTIPLIER
    just_over = NOW - timedelta(hours=limit, minutes=59)
    assert is_significantly_overdue(just_over, interval, NOW) is False


def test_overdue_with_zero_interval_never_flags():
    long_ago = NOW - timedelta(days=365)
    assert is_significantly_overdue(long_ago, 0, NOW) is False


def test_question_template_substitutes_or_prefixes():
    assert question_from_template("Analyze {ticker}", "NVDA") == "Analyze NVDA"
    assert (
        question_from_template("Earnings outlook", "NVDA") == "NVDA: Earnings outlook"
    )


def test_question_template_replaces_every_placeholder():
    question = question_from_template("{ticker} vs peers: is {ticker} cheap?", "AMD")
    assert "{ticker}" not in question
    assert question.count("AMD") == 2


def test_ticker_without_runs_is_due():
    assert is_ticker_due(None, 24, NOW) is True


def test_ticker_due_respects_min_age():
    assert is_ticker_due(NOW - timedelta(hours=23, minutes=59), 24, NOW) is False
    assert is_ticker_due(NOW - timedelta(hours=24), 24, NOW) is True
    assert is_ticker_due(NOW, 0, NOW) is True


def test_refresh_outcome_success_when_runs_spawned():
    assert refresh_outcome(2, ["AAA: boom"]) is None


def test_refresh_outcome_success_when_nothing_failed():
    assert refresh_outcome(0, []) is None


def test_refresh_outcome_failure_joins_errors():
    errors = ["AAA: boom", "BBB: bust"]
    reason = refresh_outcome(0, errors)
    assert reason == "AAA: boom; BBB: bust"
    assert reason.split("; ") == errors