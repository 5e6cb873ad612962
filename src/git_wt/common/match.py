"""Tiered substring matching for narrowing selection candidates."""

from __future__ import annotations

from typing import NamedTuple

from git_wt.common.errors import NoMatchesError

SCORE_NONE = 0
SCORE_SUBSTRING = 50
SCORE_PREFIX = 80
SCORE_EXACT = 100


class MatchResult(NamedTuple):
    """A candidate that survived filtering."""

    index: int  # position in the original list
    text: str
    score: int


def score_match(text: str, query: str) -> int | None:
    """Score one candidate against a lowercased query, or None if no match."""
    lowered = text.lower()
    if lowered == query:
        return SCORE_EXACT
    if lowered.startswith(query):
        return SCORE_PREFIX
    if query in lowered:
        return SCORE_SUBSTRING
    return None


def filter_by_query(items: list[str], query: str) -> list[MatchResult]:
    """Filter items by case-insensitive exact/prefix/substring match.

    An empty query keeps everything with score 0. Survivors stay in input
    order; the score is informational and is not used for sorting.

    Raises NoMatchesError if nothing matches.
    """
    if not query:
        return [MatchResult(i, item, SCORE_NONE) for i, item in enumerate(items)]

    lowered_query = query.lower()
    matches: list[MatchResult] = []
    for i, item in enumerate(items):
        score = score_match(item, lowered_query)
        if score is not None:
            matches.append(MatchResult(i, item, score))

    if not matches:
        raise NoMatchesError(query)

    return matches
