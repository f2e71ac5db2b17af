"""PathIndex for repeated fuzzy searches over one set of candidates.

This module provides a high-level interface for building reusable
candidate collections from Polars Series or Python lists, enabling
repeated searches without re-collecting the candidates.

Warning:
    Adding items is NOT thread-safe. Searching never mutates the index, so
    a fully built index can be searched from many threads at once.
"""

import logging
import pickle
from pathlib import Path
from typing import Iterable, List, Optional, Union

import polars as pl

from fuzzypath._core import (
    DEFAULT_WEIGHTS,
    MatchResult,
    ScoreWeights,
    compile_query,
    score_compiled,
)
from fuzzypath._utils import ensure_text, normalize_case_mode, normalize_limit
from fuzzypath.enums import CaseMode

logger = logging.getLogger(__name__)


class PathIndex:
    """
    A reusable collection of candidates ranked with ``fuzzypath.score``.

    The index can be persisted to disk and reloaded for later use.

    Warning:
        ``add`` and ``add_all`` are NOT thread-safe. Build the index first,
        then share it; concurrent searches are fine.

    Example:
        >>> import polars as pl
        >>> from fuzzypath import PathIndex
        >>>
        >>> paths = pl.Series(["Projects/neovim/", "Projects/neo-api-rs/", "bin/"])
        >>> index = PathIndex.from_series(paths)
        >>> [r.text for r in index.search("neo")]
        ['Projects/neovim/', 'Projects/neo-api-rs/']
        >>>
        >>> index.save("paths.pkl")
        >>> index = PathIndex.load("paths.pkl")
    """

    def __init__(
        self,
        items: Optional[Iterable[str]] = None,
        case_mode: Union[str, CaseMode] = CaseMode.FOLD_CANDIDATE,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ):
        """
        Create a PathIndex from a list of strings.

        Args:
            items: Candidate strings to index
            case_mode: Default case handling for searches
            weights: Scoring constants used for every search
        """
        self._items: List[str] = []
        self._case_mode = normalize_case_mode(case_mode)
        self._weights = weights
        if items is not None:
            self.add_all(items)

    def add(self, item: str) -> int:
        """Add one candidate and return its id."""
        self._items.append(ensure_text(item, "item"))
        return len(self._items) - 1

    def add_all(self, items: Iterable[str]) -> None:
        for item in items:
            self.add(item)

    @classmethod
    def from_series(
        cls,
        series: "pl.Series",
        case_mode: Union[str, CaseMode] = CaseMode.FOLD_CANDIDATE,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ) -> "PathIndex":
        """
        Create a PathIndex from a Polars Series.

        Null entries are indexed as empty strings so that ids keep matching
        Series positions.

        Args:
            series: Polars Series of strings to index
            case_mode: Default case handling for searches
            weights: Scoring constants

        Returns:
            PathIndex instance
        """
        items = [str(x) if x is not None else "" for x in series.to_list()]
        return cls(items, case_mode=case_mode, weights=weights)

    @classmethod
    def from_dataframe(
        cls,
        df: "pl.DataFrame",
        column: str,
        case_mode: Union[str, CaseMode] = CaseMode.FOLD_CANDIDATE,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ) -> "PathIndex":
        """Create a PathIndex from a DataFrame column."""
        return cls.from_series(df[column], case_mode=case_mode, weights=weights)

    def search(
        self,
        query: str,
        limit: Optional[int] = 10,
        case_mode: Union[str, CaseMode, None] = None,
    ) -> List[MatchResult]:
        """
        Search the index for candidates matching the query.

        Args:
            query: Query string to search for
            limit: Maximum number of results to return (None or 0 for all)
            case_mode: Override the index's case handling for this search

        Returns:
            List of MatchResult objects, best rank first. Candidates the
            query does not match are left out.
        """
        cap = normalize_limit(limit)
        mode = self._case_mode if case_mode is None else normalize_case_mode(case_mode)
        compiled = compile_query(ensure_text(query, "query"), mode)

        results = []
        for i, item in enumerate(self._items):
            rank = score_compiled(compiled, item, self._weights)
            if rank != self._weights.worst:
                results.append(MatchResult(item, rank, i))

        results.sort(key=lambda r: r.score)
        if cap is not None:
            results = results[:cap]
        return results

    def search_series(
        self,
        queries: "pl.Series",
        limit: Optional[int] = 1,
        include_query: bool = True,
    ) -> "pl.DataFrame":
        """
        Search for each query in a Series, returning a DataFrame of results.

        Args:
            queries: Series of query strings
            limit: Maximum matches per query (default: 1 for best match only)
            include_query: Include query column in results

        Returns:
            DataFrame with columns:
            - query_idx: Index of the query in the input Series
            - query: The query string (if include_query=True)
            - match: The matched candidate
            - match_idx: Id of the match in the index
            - score: Rank of the match (lower is better)

        Example:
            >>> index = PathIndex(["Projects/neovim/", "Projects/config/nvim"])
            >>> index.search_series(pl.Series(["neo", "convim"]))
        """
        rows = []

        for query_idx, query in enumerate(queries.to_list()):
            if query is None:
                continue

            for match in self.search(str(query), limit=limit):
                row = {
                    "query_idx": query_idx,
                    "match": match.text,
                    "match_idx": match.id,
                    "score": match.score,
                }
                if include_query:
                    row["query"] = str(query)
                rows.append(row)

        columns = ["query_idx", "query", "match", "match_idx", "score"]
        if not include_query:
            columns.remove("query")

        if not rows:
            schema = {
                "query_idx": pl.Int64,
                "query": pl.Utf8,
                "match": pl.Utf8,
                "match_idx": pl.Int64,
                "score": pl.Int64,
            }
            return pl.DataFrame(schema={name: schema[name] for name in columns})

        return pl.DataFrame(rows).select(columns)

    def batch_search(
        self,
        queries: List[str],
        limit: Optional[int] = 1,
    ) -> List[List[MatchResult]]:
        """
        Search for multiple queries, returning results for each.

        Args:
            queries: List of query strings
            limit: Maximum matches per query

        Returns:
            List of lists, where each inner list contains MatchResult
            objects for the corresponding query
        """
        return [self.search(q, limit=limit) for q in queries]

    def get_items(self) -> List[str]:
        """Return the list of indexed items."""
        return self._items.copy()

    def __len__(self) -> int:
        return len(self._items)

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the index to a file.

        Args:
            path: File path to save to (typically .pkl extension)
        """
        data = {
            "items": self._items,
            "case_mode": self._case_mode.value,
            "weights": self._weights,
        }
        with open(path, "wb") as f:
            pickle.dump(data, f)
        logger.debug("Saved PathIndex with %d items to %s", len(self._items), path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PathIndex":
        """
        Load an index from a file.

        Args:
            path: File path to load from

        Returns:
            PathIndex instance
        """
        with open(path, "rb") as f:
            data = pickle.load(f)

        index = cls(
            items=data["items"],
            case_mode=data["case_mode"],
            weights=data["weights"],
        )
        logger.debug("Loaded PathIndex with %d items from %s", len(index), path)
        return index

    def __repr__(self) -> str:
        return f"PathIndex(case_mode={self._case_mode.value!r}, size={len(self._items)})"
