"""Batch operations API for fuzzypath.

This module ranks many candidates against one query. The query's pattern
index is built once and shared read-only by every candidate, which is
where most of the per-call setup of ``score`` goes.

Example usage:
    >>> import fuzzypath.batch as batch

    # Rank every candidate, in input order
    >>> results = batch.scores(["Projects/neovim", "Projects/config/nvim"], "convim")
    >>> [(r.text, r.score) for r in results]
    [('Projects/neovim', 10000), ('Projects/config/nvim', -340)]

    # Best matches first
    >>> matches = batch.best_matches(["Projects/neovim", "Projects/config/nvim"], "convim")
    >>> [m.text for m in matches]
    ['Projects/config/nvim']

    # Every query against every candidate
    >>> batch.score_matrix(["de", ""], ["gateways/delete.yaml"])
    [[-175], [20]]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from fuzzypath._core import (
    DEFAULT_WEIGHTS,
    MatchResult,
    ScoreWeights,
    compile_query,
    score_compiled,
)
from fuzzypath._utils import ensure_text, normalize_case_mode, normalize_limit

if TYPE_CHECKING:
    from fuzzypath.enums import CaseMode

__all__ = [
    "scores",
    "best_matches",
    "score_matrix",
]


def scores(
    candidates: Iterable[str],
    query: str,
    case_mode: str | CaseMode = "fold_candidate",
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> list[MatchResult]:
    """Rank every candidate against the query.

    Args:
        candidates: Strings to rank.
        query: The query string.
        case_mode: How letter case is handled (string or CaseMode enum). Options:
            - "fold_candidate": Upper-case candidate characters match lower-case
              query characters (default)
            - "ignore": Fully case-insensitive
            - "respect": Case-sensitive
            - "smart": Case-insensitive unless the query contains a capital
        weights: Scoring constants (default: the standard weights).

    Returns:
        List of MatchResult objects in the same order as the input.
        Each result has `text`, `score`, and `id` fields where `id` is
        the original index in the input.

    Raises:
        TypeError: If the query or a candidate is not a string.
    """
    compiled = compile_query(ensure_text(query, "query"), normalize_case_mode(case_mode))
    return [
        MatchResult(text, score_compiled(compiled, ensure_text(text, "candidate"), weights), i)
        for i, text in enumerate(candidates)
    ]


def best_matches(
    candidates: Iterable[str],
    query: str,
    limit: int | None = 5,
    include_unmatched: bool = False,
    case_mode: str | CaseMode = "fold_candidate",
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> list[MatchResult]:
    """Find the best matching candidates for a query.

    Scores all candidates, drops those the query does not match, sorts by
    rank ascending and returns the top results. Candidates with equal rank
    keep their input order.

    Args:
        candidates: Strings to search.
        query: The query string.
        limit: Maximum number of results (default: 5). ``None`` or ``0``
            returns every result.
        include_unmatched: Keep candidates that got the no-match rank, at
            the end of the list (default: False).
        case_mode: How letter case is handled (string or CaseMode enum).
        weights: Scoring constants.

    Returns:
        List of MatchResult objects sorted by score ascending.

    Raises:
        ValidationError: If limit is negative or case_mode is unknown.

    Example:
        >>> matches = best_matches(
        ...     ["Projects/neo-api-rs/", "Projects/neovim/", "bin/snoozes/"], "neo", limit=2
        ... )
        >>> [m.text for m in matches]
        ['Projects/neovim/', 'Projects/neo-api-rs/']
    """
    cap = normalize_limit(limit)
    results = scores(candidates, query, case_mode=case_mode, weights=weights)
    if not include_unmatched:
        results = [r for r in results if r.score != weights.worst]
    results.sort(key=lambda r: r.score)
    if cap is not None:
        results = results[:cap]
    return results


def score_matrix(
    queries: list[str],
    candidates: list[str],
    case_mode: str | CaseMode = "fold_candidate",
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> list[list[int]]:
    """Rank every candidate against every query.

    Args:
        queries: Query strings (rows of the output matrix).
        candidates: Candidate strings (columns of the output matrix).
        case_mode: How letter case is handled (string or CaseMode enum).
        weights: Scoring constants.

    Returns:
        2D list where result[i][j] is the rank of candidates[j] for queries[i].

    Example:
        >>> matrix = score_matrix(["neo", "vim"], ["Projects/neovim/", "bin/"])
        >>> len(matrix), len(matrix[0])
        (2, 2)
    """
    mode = normalize_case_mode(case_mode)
    compiled = [compile_query(ensure_text(q, "query"), mode) for q in queries]
    texts = [ensure_text(c, "candidate") for c in candidates]
    return [[score_compiled(c, text, weights) for text in texts] for c in compiled]
