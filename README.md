# autothesis

`autothesis` holds the decision rules for an iterative equity-research
workflow. A research run plans, searches, reads sources, drafts a memo and
has the draft evaluated. This package supplies the pure logic around those
steps:

- ticker normalisation and question templating
- source classification and ranking
- evaluator and planner output parsing
- opportunity and signal scoring
- portfolio valuation
- related-ticker discovery
- rules for scheduled refreshes

It has no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `autothesis.utils` | Ticker normalisation, question sanitising and templating, async retry with exponential backoff |
| `autothesis.source_ranker` | `SearchResultItem`, `RankedSearchResult`, source classification and rank scores |
| `autothesis.evaluator` | `EvaluatorOutput` parsing with clamping, and the baseline evaluation |
| `autothesis.planner` | `PlannerOutput` and its markdown rendering |
| `autothesis.opportunity_ranker` | Coverage gap, market cap, sector and overall scores, and ranking of `ScanOpportunity` values |
| `autothesis.signal_detector` | `ScanSignal`, signal parsing, fallback signals, strength and timing scores |
| `autothesis.preliminary_thesis` | `PreliminaryThesisOutput` and its fallback text |
| `autothesis.portfolio` | Position valuation, portfolio summary, conviction alignment and alerts |
| `autothesis.related_tickers` | Candidate related tickers from sectors, source texts and memos |
| `autothesis.reader` | `SourceRecord`, evidence notes, prompt views of sources and excerpts |
| `autothesis.search` | Query cleaning, bounded parallel searches, rank-then-dedupe of results |
| `autothesis.scheduler` | `ActiveRunTracker` and the rules for watchlist refreshes |

## Examples

### Tickers and questions

```python
from autothesis.utils import (
    BadRequestError,
    normalize_ticker,
    normalize_tickers,
    render_question_for_ticker,
)

assert normalize_ticker(" brk.b ") == "BRK.B"
assert normalize_tickers(["nvda", "MSFT", "nvda"]) == ["NVDA", "MSFT"]
assert render_question_for_ticker("Analyze {ticker}", "NVDA") == "Analyze NVDA"
assert render_question_for_ticker("Earnings outlook", "NVDA") == "NVDA: Earnings outlook"

try:
    normalize_ticker("NV!DA")
except BadRequestError as error:
    print(error)
```

`BadRequestError` is a subclass of `ValueError`.

`sanitize_question` removes control characters and bidirectional
overrides. It keeps tabs, newlines and carriage returns. It caps the text
at `MAX_QUESTION_LENGTH` (2,000) characters and trims trailing whitespace.

`retry_with_backoff(operation, max_attempts)` awaits `operation()` until
it succeeds. When every attempt fails, it raises the last error. Between
attempts it sleeps for the time `backoff_delay(attempt)` returns, in
seconds. The delay doubles with each attempt, has random jitter, and is
capped at 30 seconds.

### Ranking sources

```python
from autothesis.source_ranker import SearchResultItem, classify_source, rank_search_result

assert classify_source("www.sec.gov", "Form 10-K") == "sec"
assert classify_source("example.com", "Q3 earnings call transcript") == "transcript"

ranked = rank_search_result(SearchResultItem(url="https://www.sec.gov/filing", score=0.5))
assert ranked.source_type == "sec"
assert ranked.rank_score == 5.5
```

Each source type adds a bonus to the provider score:

| Source type | Bonus |
| --- | --- |
| `sec` | 5.0 |
| `ir` | 4.0 |
| `transcript` | 3.5 |
| `press` | 3.0 |
| `media` | 2.0 |
| `other` | 1.0 |

`autothesis.search.rank_and_dedupe` takes `(query_id, results)` pairs and
ranks every result. It orders them best first, keeps the first entry for
each URL, and stops at `max_total_sources`.

`search_queries_parallel(search, queries, max_results_per_query)` runs an
async `search(query_text, max_results)` function for each query. At most
four searches are in flight at once. Results come back in query order. The
first failure stops further queries from starting, and that error is then
raised.

### Evaluations and plans

```python
from autothesis.evaluator import parse_evaluator_output
from autothesis.planner import PlannerOutput, plan_to_markdown

output = parse_evaluator_output({
    "improved": True,
    "score": 11.2,
    "rubric": {
        "evidence_coverage": 12.0,
        "source_quality": 9.0,
        "balance": 8.0,
        "specificity": -2.0,
        "decision_usefulness": 7.5,
    },
    "reasoning": "More balanced.",
    "continue": True,
})
assert output.score == 10.0 and output.rubric.specificity == 0.0
assert output.to_dict()["continue"] is True

plan = PlannerOutput.from_dict({
    "research_goal": "Assess data-centre demand durability",
    "subquestions": ["How concentrated is revenue?"],
    "evidence_needed": ["Latest 10-Q segment data"],
    "priority_order": ["Revenue mix", "Margins"],
})
print(plan_to_markdown(plan))
```

`baseline_evaluation()` returns the evaluation for a first iteration,
which has no earlier draft to compare against. It scores 6.0 on every
rubric dimension.

Malformed evaluator or planner JSON raises `ValueError`.

### Scoring opportunities and signals

```python
from autothesis.opportunity_ranker import calculate_overall_score, meets_minimum_criteria
from autothesis.signal_detector import ScanSignal, calculate_signal_strength, calculate_timing_score

score = calculate_overall_score(6.0, None, 10.0, 7.0)
assert 0.0 <= score <= 10.0
assert meets_minimum_criteria(6.0, 10.0, 3.0, 5.0)

signals = [ScanSignal("earnings_catalyst", 0.6, "Earnings next week")]
assert calculate_timing_score(signals) == 7.0
assert 0.0 <= calculate_signal_strength(signals) <= 10.0
```

The overall score is a weighted mix of four inputs, clamped to the range
0 to 10:

| Input | Weight |
| --- | --- |
| Signal strength | 30% |
| Thesis quality (5.0 when absent) | 25% |
| Coverage gap | 25% |
| Timing | 20% |

`coverage_gap_score(latest_updated_at, now)` scores a ticker by the age
of its latest run:

| Latest run | Score |
| --- | --- |
| No run | 10.0 |
| More than 30 days old | 8.0 |
| More than 14 days old | 5.0 |
| Otherwise | 2.0 |

`filter_top_opportunities` returns the best `max_count` opportunities.

When no model reply is available, two fallbacks produce content from what
is at hand:

- `fallback_signals` builds a coverage signal from raw search results.
- `autothesis.preliminary_thesis.fallback_thesis` writes a placeholder
  thesis that lists the signals.

### Portfolio

`value_positions(positions, prices)` accepts any objects with `ticker`,
`shares` and `total_cost` attributes. For each position it works out:

- market value
- gain or loss, in money and as a percentage
- allocation percentage

`summarize_portfolio(valuations, cash_balance)` totals the valuations.

`classify_conviction_alignment` and `conviction_alert` compare a
position with its latest thesis score.

### Related tickers

```python
from autothesis.related_tickers import add_thesis_mentions, extract_ticker_mentions, top_candidates

text = "NVDA outpaces AMD and MSFT, while NVDA stays primary. GOOG not in set."
assert extract_ticker_mentions(text, {"NVDA", "AMD", "MSFT"}, "NVDA") == ["AMD", "MSFT"]

candidates = {}
add_thesis_mentions("Compare NVDA to AMD and MSFT.", "NVDA", candidates)
print(top_candidates(candidates))
```

Candidates are scored from three places:

- `add_sector_matches` for tickers in the same sector
- `add_source_mentions` for tickers named in source texts
- `add_thesis_mentions` for tickers named in the memo

### Reading sources

The reader module provides:

- `SourceForPrompt.from_source`, which gives a source's text capped at
  4,000 characters
- `fallback_notes`, which writes one fact note per source
- `parse_reader_output`, which reads evidence notes from the reader's JSON

### Scheduling

```python
from autothesis.scheduler import ActiveRunTracker, available_slots, refresh_outcome

tracker = ActiveRunTracker()
assert tracker.try_claim("NVDA")
assert not tracker.try_claim("NVDA")
assert "NVDA" in tracker and len(tracker) == 1
tracker.release("NVDA")

assert available_slots(3, 5) == 0
assert refresh_outcome(0, ["NVDA: timeout"]) == "NVDA: timeout"
assert refresh_outcome(0, []) is None
```

The scheduler module also provides these rules:

- `is_ticker_due` decides whether a ticker's latest run is old enough to
  refresh.
- `is_significantly_overdue` flags a watchlist that is more than four
  refresh intervals late.
- `question_from_template` puts a ticker into a stored question template.

## What the package does not do

`autothesis` contains the rules only. It does not provide any of these:

- storage
- an HTTP server or web pages
- a command-line tool
- a search-provider or language-model client
- a scheduler loop

It also has no run lifecycle states, no alert or dashboard evaluation, and
no batch or comparison rollups. A caller supplies data from its own storage
and services, then acts on the values these functions return.