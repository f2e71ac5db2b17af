"""Polars expression namespace for fuzzy path ranking.

This module registers a `.fuzzy_path` namespace on Polars expressions,
so ranks can be computed inside ``with_columns``, ``filter`` and
``sort`` the same way the SQLite binding does inside a SELECT.

Note:
    For literal queries the pattern index is built once per expression and
    reused for every row. Column-to-column comparisons build it per row.

Example:
    >>> import polars as pl
    >>> import fuzzypath  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"path": ["Projects/neovim", "Projects/config/nvim"]})
    >>> df.with_columns(rank=pl.col("path").fuzzy_path.score("convim")).sort("rank")
"""

from typing import Union

import polars as pl

from fuzzypath._core import DEFAULT_WEIGHTS, ScoreWeights, compile_query, score_compiled
from fuzzypath._utils import normalize_case_mode
from fuzzypath.enums import CaseMode


@pl.api.register_expr_namespace("fuzzy_path")
class FuzzyPathExprNamespace:
    """
    Fuzzy path ranking namespace for Polars expressions.

    Access via `.fuzzy_path` on any string expression.
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def score(
        self,
        query: Union[str, pl.Expr],
        case_mode: Union[str, CaseMode] = "fold_candidate",
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ) -> pl.Expr:
        """
        Rank this column's values against a query; lower is better.

        Args:
            query: Query string, or a column expression holding one query per row
            case_mode: How letter case is handled (string or CaseMode enum)
            weights: Scoring constants

        Returns:
            Int64 expression. Rows where the candidate or query is null are null.

        Example:
            >>> df.with_columns(rank=pl.col("path").fuzzy_path.score("neo"))
            >>> df.with_columns(rank=pl.col("path").fuzzy_path.score(pl.col("query")))
        """
        mode = normalize_case_mode(case_mode)

        if isinstance(query, str):
            compiled = compile_query(query, mode)
            return self._expr.map_elements(
                lambda s: score_compiled(compiled, str(s), weights),
                return_dtype=pl.Int64,
            )

        def score_row(row):
            if row["_candidate"] is None or row["_query"] is None:
                return None
            return score_compiled(
                compile_query(str(row["_query"]), mode), str(row["_candidate"]), weights
            )

        return pl.struct([self._expr.alias("_candidate"), query.alias("_query")]).map_elements(
            score_row,
            return_dtype=pl.Int64,
        )

    def is_match(
        self,
        query: Union[str, pl.Expr],
        case_mode: Union[str, CaseMode] = "fold_candidate",
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ) -> pl.Expr:
        """
        Check whether the query matches each value at all.

        Args:
            query: Query string or column expression
            case_mode: How letter case is handled (string or CaseMode enum)
            weights: Scoring constants; ``weights.worst`` marks "no match"

        Returns:
            Boolean expression

        Example:
            >>> df.filter(pl.col("path").fuzzy_path.is_match("nvim"))
        """
        return self.score(query, case_mode=case_mode, weights=weights) != weights.worst
