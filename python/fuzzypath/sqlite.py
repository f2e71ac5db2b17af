"""SQLite binding for fuzzypath.

Registers ``fuzzy_score(query, candidate)`` as a deterministic scalar SQL
function so paths stored in a table can be ranked inside a query:

    >>> import fuzzypath.sqlite
    >>> conn = fuzzypath.sqlite.connect(":memory:")
    >>> conn.execute("CREATE TABLE files (path TEXT)")
    >>> conn.executemany("INSERT INTO files VALUES (?)", [("Projects/neovim",), ("Projects/config/nvim",)])
    >>> conn.execute(
    ...     "SELECT path FROM files WHERE fuzzy_score('convim', path) < 10000 "
    ...     "ORDER BY fuzzy_score('convim', path)"
    ... ).fetchall()
    [('Projects/config/nvim',)]

The function name defaults to ``fuzzy_score`` and can be changed with the
``FUZZYPATH_SQL_FUNCTION`` environment variable or the ``name`` argument.
"""

import logging
import os
import sqlite3
from functools import lru_cache
from typing import Any, Optional, Union

from fuzzypath._core import (
    DEFAULT_WEIGHTS,
    ScoreWeights,
    ValidationError,
    compile_query,
    score_compiled,
)
from fuzzypath._utils import normalize_case_mode
from fuzzypath.enums import CaseMode

logger = logging.getLogger(__name__)

DEFAULT_FUNCTION_NAME = "fuzzy_score"
FUNCTION_NAME_ENV = "FUZZYPATH_SQL_FUNCTION"


def function_name() -> str:
    """Return the SQL function name, honouring ``FUZZYPATH_SQL_FUNCTION``."""
    return os.environ.get(FUNCTION_NAME_ENV, "").strip() or DEFAULT_FUNCTION_NAME


def register(
    connection: sqlite3.Connection,
    name: Optional[str] = None,
    case_mode: Union[str, CaseMode] = CaseMode.FOLD_CANDIDATE,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> str:
    """Register the ranking function on ``connection``.

    SQL ``NULL`` for either argument yields ``NULL``. Any other non-text
    argument raises ValidationError, which SQLite reports as a failed
    user-defined function.

    Args:
        connection: Open sqlite3 connection.
        name: SQL function name (default: ``function_name()``).
        case_mode: How letter case is handled (string or CaseMode enum).
        weights: Scoring constants.

    Returns:
        The name the function was registered under.
    """
    fn_name = name or function_name()
    mode = normalize_case_mode(case_mode)

    # Rows of one statement usually share the query.
    @lru_cache(maxsize=64)
    def compiled(query: str):
        return compile_query(query, mode)

    def fuzzy_score(query: Any, candidate: Any) -> Optional[int]:
        if query is None or candidate is None:
            return None
        if not isinstance(query, str) or not isinstance(candidate, str):
            raise ValidationError(
                f"{fn_name}() expects text arguments, got "
                f"{type(query).__name__} and {type(candidate).__name__}"
            )
        return score_compiled(compiled(query), candidate, weights)

    connection.create_function(fn_name, 2, fuzzy_score, deterministic=True)
    logger.debug("Registered SQL function %s (case_mode=%s)", fn_name, mode.value)
    return fn_name


def connect(
    database: Union[str, os.PathLike] = ":memory:",
    name: Optional[str] = None,
    case_mode: Union[str, CaseMode] = CaseMode.FOLD_CANDIDATE,
    **kwargs: Any,
) -> sqlite3.Connection:
    """Open a sqlite3 connection with the ranking function already registered.

    Extra keyword arguments go to ``sqlite3.connect``.
    """
    connection = sqlite3.connect(database, **kwargs)
    register(connection, name=name, case_mode=case_mode)
    return connection


__all__ = ["DEFAULT_FUNCTION_NAME", "FUNCTION_NAME_ENV", "connect", "function_name", "register"]
