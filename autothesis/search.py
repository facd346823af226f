"""Search query cleanup, parallel provider searches and result ranking."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence
from functools import cmp_to_key
from typing import Protocol

from autothesis.source_ranker import (
    RankedSearchResult,
    SearchResultItem,
    rank_search_result,
)

MAX_CONCURRENT_SEARCHES = 4
"""Upper bound on provider searches in flight at once."""

SearchFunction = Callable[[str, int], Awaitable[Sequence[SearchResultItem]]]


class _SearchQuery(Protocol):
    id: str
    query_text: str


def clean_queries(queries: Iterable[str]) -> list[str]:
    """Drop queries that are empty or only whitespace."""
    return [query for query in queries if query.strip()]


def _by_rank_descending(
    a: tuple[str, RankedSearchResult], b: tuple[str, RankedSearchResult]
) -> int:
    if b[1].rank_score > a[1].rank_score:
        return 1
    if b[1].rank_score < a[1].rank_score:
        return -1
    return 0


def rank_and_dedupe(
    results_by_query: Iterable[tuple[str, Iterable[SearchResultItem]]],
    max_total_sources: int,
) -> list[tuple[str, RankedSearchResult]]:
    """Rank every result, best first, keep one per URL and stop at the cap.

    Each entry pairs the id of the query that found the result with its
    ranking.
    """
    ranked = [
        (query_id, rank_search_result(item))
        for query_id, items in results_by_query
        for item in items
    ]
    ranked.sort(key=cmp_to_key(_by_rank_descending))

    deduped: list[tuple[str, RankedSearchResult]] = []
    seen: set[str] = set()
    for entry in ranked:
        url = entry[1].url
        if url not in seen:
            seen.add(url)
            deduped.append(entry)
        if len(deduped) >= max_total_sources:
            break
    return deduped


async def search_queries_parallel(
    search: SearchFunction,
    queries: Sequence[_SearchQuery],
    max_results_per_query: int,
) -> list[tuple[str, list[SearchResultItem]]]:
    """Run every query through ``search``, at most four at a time.

    Results come back in query order, each paired with its query id. The
    first failure stops further queries from starting and is raised once
    the searches already in flight have finished.
    """
    results: dict[int, tuple[str, list[SearchResultItem]]] = {}
    first_error: BaseException | None = None
    pending = iter(enumerate(queries))

    async def worker() -> None:
        nonlocal first_error
        for position, query in pending:
            if first_error is not None:
                return
            try:
                items = await search(query.query_text, max_results_per_query)
            except Exception as error:  # noqa: BLE001 - surfaced to the caller
                if first_error is None:
                    first_error = error
                return
            results[position] = (query.id, list(items))

    worker_count = min(MAX_CONCURRENT_SEARCHES, len(queries))
    await asyncio.gather(*(worker() for _ in range(worker_count)))

    if first_error is not None:
        raise first_error
    return [results[position] for position in sorted(results)]