"""
fuzzypath - Fuzzy subsequence ranking for file paths

Ranks how well a short query matches a longer candidate, typically a file
system path. Ranks are signed integers meant to be sorted ascending: lower
is a better match.

Example usage:
    >>> import fuzzypath as fp

    # Single pair
    >>> fp.score("convim", "Projects/config/nvim")
    -340
    >>> fp.score("convim", "Projects/neovim")  # not a subsequence
    10000

    # Rank a list of candidates (returns MatchResult objects)
    >>> matches = fp.best_matches(["Projects/neo-api-rs/", "Projects/neovim/"], "neo")
    >>> [(m.text, m.score) for m in matches]
    [('Projects/neovim/', -262), ('Projects/neo-api-rs/', -240)]

    # Inside Polars
    >>> import polars as pl
    >>> df = pl.DataFrame({"path": ["Projects/neovim", "Projects/config/nvim"]})
    >>> df.with_columns(rank=pl.col("path").fuzzy_path.score("convim"))

    # Inside SQLite
    >>> conn = fp.sqlite.connect(":memory:")
    >>> conn.execute("SELECT fuzzy_score('de', 'gateways/delete.yaml')").fetchone()
    (-175,)
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Register the .fuzzy_path expression namespace
import fuzzypath.expr  # noqa: F401
from fuzzypath import sqlite
from fuzzypath._core import (
    DEFAULT_WEIGHTS,
    CompiledQuery,
    # Custom exceptions
    FuzzyPathError,
    # Result types
    MatchResult,
    ScoreBreakdown,
    ScoreWeights,
    ValidationError,
    compile_query,
    explain,
    # Scoring
    score,
    score_compiled,
)
from fuzzypath.batch import best_matches, score_matrix, scores
from fuzzypath.enums import CaseMode
from fuzzypath.index import PathIndex

# -----------------------------------------------------------------------------
# Polars Integration
# -----------------------------------------------------------------------------
# The pattern index is built once per call and reused for every row.
from fuzzypath.polars_api import filter_dataframe, rank_dataframe, score_series

try:
    __version__ = _get_version("fuzzypath")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "FuzzyPathError",
    "ValidationError",
    # Result types
    "MatchResult",
    "ScoreBreakdown",
    # Configuration
    "CaseMode",
    "ScoreWeights",
    "DEFAULT_WEIGHTS",
    # Scoring
    "score",
    "fuzzy_score",
    "explain",
    "compile_query",
    "score_compiled",
    "CompiledQuery",
    # Batch processing
    "scores",
    "best_matches",
    "score_matrix",
    # Index classes
    "PathIndex",
    # Polars Integration
    "score_series",
    "rank_dataframe",
    "filter_dataframe",
    # SQLite binding
    "sqlite",
]


# Convenience alias
fuzzy_score = score
