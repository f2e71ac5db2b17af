"""Enums for fuzzypath API."""

from enum import Enum


class CaseMode(str, Enum):
    """How letter case is treated when aligning a candidate against a query.

    String values are accepted anywhere a CaseMode is, so ``"smart"`` and
    ``CaseMode.SMART`` are interchangeable.

    Example:
        >>> from fuzzypath import CaseMode, best_matches
        >>> best_matches(["src/Main.py", "docs/main.md"], "Main", case_mode=CaseMode.SMART)
    """

    FOLD_CANDIDATE = "fold_candidate"
    """Upper-case candidate characters may satisfy lower-case query characters (default)"""

    IGNORE = "ignore"
    """Fold the query as well, so matching is fully case-insensitive"""

    RESPECT = "respect"
    """No folding; characters only match when identical"""

    SMART = "smart"
    """FOLD_CANDIDATE for all-lowercase queries, RESPECT as soon as the query has a capital"""


__all__ = ["CaseMode"]
