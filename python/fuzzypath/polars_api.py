"""Series and DataFrame helpers for ranking path columns.

Functions in This Module
------------------------
- ``score_series()``: Rank every value of a Series against one query
- ``rank_dataframe()``: Add a rank column and sort a DataFrame by it
- ``filter_dataframe()``: Keep only rows the query matches, best first

All three build the query's pattern index once and reuse it for every row,
which is the fast path compared to the per-row ``.fuzzy_path`` expression
with a column query.

Example Usage
-------------
>>> import polars as pl
>>> import fuzzypath as fp
>>>
>>> df = pl.DataFrame({"path": ["Projects/neovim/", "Projects/neo-api-rs/", "bin/"]})
>>> fp.filter_dataframe(df, "path", "neo")["path"].to_list()
['Projects/neovim/', 'Projects/neo-api-rs/']
"""

from typing import Optional, Union

import polars as pl

from fuzzypath._core import DEFAULT_WEIGHTS, ScoreWeights, compile_query, score_compiled
from fuzzypath._utils import ensure_text, normalize_case_mode, normalize_limit
from fuzzypath.enums import CaseMode


def score_series(
    candidates: "pl.Series",
    query: str,
    case_mode: Union[str, CaseMode] = "fold_candidate",
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> "pl.Series":
    """
    Rank every value in a Series against a query.

    Args:
        candidates: Series of candidate strings
        query: The query string
        case_mode: How letter case is handled (string or CaseMode enum)
        weights: Scoring constants

    Returns:
        Int64 Series named "score", null where the candidate is null

    Example:
        >>> fp.score_series(pl.Series(["Projects/neovim", "Projects/config/nvim"]), "convim").to_list()
        [10000, -340]
    """
    compiled = compile_query(ensure_text(query, "query"), normalize_case_mode(case_mode))
    ranks = [
        score_compiled(compiled, str(value), weights) if value is not None else None
        for value in candidates.to_list()
    ]
    return pl.Series("score", ranks, dtype=pl.Int64)


def rank_dataframe(
    df: "pl.DataFrame",
    column: str,
    query: str,
    limit: Optional[int] = None,
    score_column: str = "score",
    case_mode: Union[str, CaseMode] = "fold_candidate",
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> "pl.DataFrame":
    """
    Add a rank column for ``column`` and sort the DataFrame by it.

    Rows with equal rank keep their original order; null candidates sort last.

    Args:
        df: Polars DataFrame
        column: Column holding the candidate strings
        query: The query string
        limit: Keep at most this many rows (None or 0 for all)
        score_column: Name of the added rank column
        case_mode: How letter case is handled (string or CaseMode enum)
        weights: Scoring constants

    Returns:
        DataFrame with the rank column appended, sorted ascending

    Raises:
        ValueError: If ``column`` is missing from ``df``
    """
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found. Available: {df.columns}")
    cap = normalize_limit(limit)

    ranks = score_series(df[column], query, case_mode=case_mode, weights=weights)
    result = df.with_columns(ranks.alias(score_column)).sort(
        score_column, nulls_last=True, maintain_order=True
    )
    if cap is not None:
        result = result.head(cap)
    return result


def filter_dataframe(
    df: "pl.DataFrame",
    column: str,
    query: str,
    limit: Optional[int] = None,
    score_column: str = "score",
    case_mode: Union[str, CaseMode] = "fold_candidate",
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> "pl.DataFrame":
    """
    Keep the rows whose ``column`` the query matches, best match first.

    Same arguments as ``rank_dataframe``. Rows with a null candidate or the
    no-match rank are dropped before ``limit`` is applied.
    """
    ranked = rank_dataframe(
        df,
        column,
        query,
        score_column=score_column,
        case_mode=case_mode,
        weights=weights,
    )
    result = ranked.filter(
        pl.col(score_column).is_not_null() & (pl.col(score_column) != weights.worst)
    )
    cap = normalize_limit(limit)
    if cap is not None:
        result = result.head(cap)
    return result


__all__ = ["filter_dataframe", "rank_dataframe", "score_series"]
