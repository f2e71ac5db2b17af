"""Subsequence matching and rank assembly for path-like candidates.

A query is scored against a candidate in five forward-only stages:

1. ``build_pattern_index`` maps every query character to the positions it
   occupies in the query.
2. ``align_candidate`` gives each candidate character the positions it could
   stand for (exact character first, then its lower-case form).
3. ``prune_alignment`` drops slots that cannot take part in any left-to-right
   assignment of the whole query.
4. ``find_best_streak`` follows every contiguous run through the surviving
   slots and keeps the highest scoring one.
5. ``assemble_score`` turns that run into a signed rank.

Ranks sort ascending: lower is a better match. Every structure is local to a
call, so all functions here are safe to call from any number of threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from fuzzypath.enums import CaseMode

PositionSet = Tuple[int, ...]
AlignmentSlot = Optional[PositionSet]
PatternIndex = Dict[str, PositionSet]


class FuzzyPathError(Exception):
    """Base class for all fuzzypath errors."""


class ValidationError(FuzzyPathError, ValueError):
    """Raised when an argument is rejected at an API boundary."""


@dataclass(frozen=True)
class ScoreWeights:
    """Tuning constants for rank assembly.

    Changing any of these is a ranking decision, not a correctness fix; the
    defaults are what ``score`` always uses.

    Attributes:
        run: Points per character of the winning run.
        length: Weight of the run's share of the candidate length.
        position: Weight of how close to the end of the candidate the run finishes.
        leaf: Flat bonus for candidates without a path separator.
        best: Rank returned when query and candidate are identical.
        worst: Rank returned when the query does not match at all.
        separator: Path separator used for the leaf bonus.
    """

    run: int = 50
    length: int = 200
    position: int = 100
    leaf: int = 100
    best: int = -10_000
    worst: int = 10_000
    separator: str = "/"


DEFAULT_WEIGHTS = ScoreWeights()


class CompiledQuery(NamedTuple):
    """A query prepared once and reused against many candidates."""

    text: str
    pattern_index: PatternIndex
    fold: bool


class Branch(NamedTuple):
    """One run under construction: where it started, the query position reached, its length."""

    start: int
    position: int
    length: int


class Streak(NamedTuple):
    start: int
    length: int


@dataclass(frozen=True)
class ScoreBreakdown:
    """Numeric breakdown of a computed rank.

    Attributes:
        start: Candidate index where the winning run starts.
        length: Number of characters in the winning run.
        length_bonus: ``length * weights.length / len(candidate)``.
        position_bonus: ``(start + length) * weights.position / len(candidate)``.
        leaf_bonus: ``weights.leaf`` for separator-free candidates, else 0.
        raw: Sum of the run points and all bonuses.
        best: The identical-strings rank. A computed rank always stays
            strictly above it, however long the run.
    """

    start: int
    length: int
    length_bonus: float
    position_bonus: float
    leaf_bonus: float
    raw: float
    best: int = field(default=-10_000, repr=False)

    @property
    def rank(self) -> int:
        return max(-int(self.raw), self.best + 1)


@dataclass(frozen=True)
class MatchResult:
    """A ranked candidate.

    Attributes:
        text: The candidate string.
        score: Its rank against the query (lower is better).
        id: Position of the candidate in the collection it came from.
    """

    text: str
    score: int
    id: int


def _fold(char: str) -> str:
    # str.lower() can expand a character ("İ" -> "i̇"); keep the first one so
    # folded text stays index-aligned with the original.
    return char.lower()[:1]


def build_pattern_index(query: str) -> PatternIndex:
    """Map each distinct query character to its ascending query positions.

    Args:
        query: The query string. May be empty.

    Returns:
        Dict from character to a tuple of positions, e.g.
        ``build_pattern_index("olmo") == {"o": (0, 3), "l": (1,), "m": (2,)}``.
    """
    positions: Dict[str, List[int]] = {}
    for i, char in enumerate(query):
        positions.setdefault(char, []).append(i)
    return {char: tuple(found) for char, found in positions.items()}


def align_candidate(
    pattern_index: PatternIndex,
    candidate: str,
    fold: bool = True,
) -> List[AlignmentSlot]:
    """Give each candidate character the query positions it may stand for.

    A character is looked up as-is first. When that fails and ``fold`` is
    set, its lower-case form is tried, so ``"P"`` in a candidate satisfies
    ``"p"`` in the query. The reverse never happens: an upper-case query
    character needs an identical candidate character.

    Args:
        pattern_index: Output of ``build_pattern_index``.
        candidate: The string being ranked.
        fold: Whether to retry unmatched characters in lower case.

    Returns:
        One slot per candidate character: a position tuple, or None.
    """
    slots: List[AlignmentSlot] = []
    for char in candidate:
        found = pattern_index.get(char)
        if found is None and fold:
            found = pattern_index.get(_fold(char))
        slots.append(found)
    return slots


def prune_alignment(slots: Sequence[AlignmentSlot], query_length: int) -> List[AlignmentSlot]:
    """Empty every slot that no order-preserving assignment of the query can use.

    The forward sweep places query positions left to right. While looking
    for position ``i`` it empties slots whose positions all lie beyond ``i``
    (they sit before anything that could precede them), leaves slots that
    can still serve an earlier position, and stops at the first slot
    holding ``i``. The backward sweep mirrors this from the right using
    the largest positions. A sweep that cannot place some position proves
    the query is not a subsequence of the candidate and empties everything.

    Args:
        slots: Output of ``align_candidate``. Not modified.
        query_length: Length of the query the slots were aligned against.

    Returns:
        A new list of slots, narrowed but never widened.
    """
    pruned = list(slots)
    nothing: List[AlignmentSlot] = [None] * len(pruned)

    bound = 0
    for i in range(query_length):
        for k in range(bound, len(pruned)):
            found = pruned[k]
            if found is None:
                continue
            if i in found:
                bound = k + 1
                break
            if found[0] > i:
                pruned[k] = None
        else:
            return nothing

    bound = len(pruned)
    for i in reversed(range(query_length)):
        for k in reversed(range(bound)):
            found = pruned[k]
            if found is None:
                continue
            if i in found:
                bound = k
                break
            if found[-1] < i:
                pruned[k] = None
        else:
            return nothing

    return pruned


def is_leaf(candidate: str, separator: str = "/") -> bool:
    """True if the candidate, minus one trailing separator, has no separator."""
    stem = candidate[: -len(separator)] if candidate.endswith(separator) else candidate
    return separator not in stem


def _bonuses(
    start: int,
    length: int,
    total: int,
    leaf: bool,
    weights: ScoreWeights,
) -> Tuple[float, float, float, float]:
    # Multiply before dividing. Dividing first lands just below whole numbers
    # (N=12, L=1, s=0 sums to 74.99...) and truncation then shifts the rank.
    length_bonus = length * weights.length / total
    position_bonus = (start + length) * weights.position / total
    leaf_bonus = float(weights.leaf) if leaf else 0.0
    raw = length * weights.run + length_bonus + position_bonus + leaf_bonus
    return length_bonus, position_bonus, leaf_bonus, raw


def find_best_streak(
    slots: Sequence[AlignmentSlot],
    leaf: bool,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> Optional[Streak]:
    """Find the contiguous run with the highest score.

    Every position in every non-empty slot starts its own branch. A branch
    survives the next candidate character only if that slot holds the
    query position right after the branch's current one; otherwise it ends
    and is scored. Repeated query characters therefore keep several
    branches alive over the same stretch of candidate.

    Args:
        slots: Output of ``prune_alignment``.
        leaf: Whether the candidate earns the leaf bonus.
        weights: Scoring constants.

    Returns:
        The best Streak, the earliest one on ties, or None if every slot is empty.
    """
    total = len(slots)
    best: Optional[Streak] = None
    best_raw = 0.0

    for start, found in enumerate(slots):
        if found is None:
            continue

        branches = [Branch(start, position, 1) for position in found]
        cursor = start + 1
        while branches:
            following = slots[cursor] if cursor < total else None
            alive = []
            for branch in branches:
                if following is not None and branch.position + 1 in following:
                    alive.append(Branch(branch.start, branch.position + 1, branch.length + 1))
                    continue
                raw = _bonuses(branch.start, branch.length, total, leaf, weights)[3]
                if best is None or raw > best_raw:
                    best = Streak(branch.start, branch.length)
                    best_raw = raw
            branches = alive
            cursor += 1

    return best


def assemble_score(
    streak: Streak,
    candidate: str,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> ScoreBreakdown:
    """Turn the winning run into a ScoreBreakdown for ``candidate``."""
    leaf = is_leaf(candidate, weights.separator)
    length_bonus, position_bonus, leaf_bonus, raw = _bonuses(
        streak.start, streak.length, len(candidate), leaf, weights
    )
    return ScoreBreakdown(
        start=streak.start,
        length=streak.length,
        length_bonus=length_bonus,
        position_bonus=position_bonus,
        leaf_bonus=leaf_bonus,
        raw=raw,
        best=weights.best,
    )


def compile_query(query: str, case_mode: CaseMode = CaseMode.FOLD_CANDIDATE) -> CompiledQuery:
    """Build the pattern index for ``query`` once.

    The result is never mutated, so one CompiledQuery can be shared by any
    number of threads scoring different candidates.

    Args:
        query: The query string.
        case_mode: A CaseMode member. Plain strings are validated by the
            public batch, index and binding functions before they get here.

    Returns:
        CompiledQuery holding the original text, the index and the fold flag.
    """
    mode = CaseMode(case_mode)
    if mode is CaseMode.SMART:
        mode = CaseMode.RESPECT if any(c.isupper() for c in query) else CaseMode.FOLD_CANDIDATE

    if mode is CaseMode.IGNORE:
        pattern_index = build_pattern_index("".join(_fold(c) for c in query))
    else:
        pattern_index = build_pattern_index(query)
    return CompiledQuery(query, pattern_index, mode is not CaseMode.RESPECT)


def _breakdown(
    compiled: CompiledQuery,
    candidate: str,
    weights: ScoreWeights,
) -> Optional[ScoreBreakdown]:
    slots = align_candidate(compiled.pattern_index, candidate, fold=compiled.fold)
    slots = prune_alignment(slots, len(compiled.text))
    streak = find_best_streak(slots, is_leaf(candidate, weights.separator), weights)
    if streak is None:
        return None
    return assemble_score(streak, candidate, weights)


def score_compiled(
    compiled: CompiledQuery,
    candidate: str,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    """Rank ``candidate`` against an already compiled query.

    Same result as ``score(compiled.text, candidate)`` for the default case
    mode and weights.
    """
    query = compiled.text
    if not query:
        return len(candidate)
    if query == candidate:
        return weights.best

    breakdown = _breakdown(compiled, candidate, weights)
    if breakdown is None:
        return weights.worst
    return breakdown.rank


def score(query: str, candidate: str) -> int:
    """Rank how well ``query`` fuzzily matches ``candidate``; lower is better.

    The query has to appear in the candidate as a subsequence. Among the
    possible alignments, the longest contiguous run wins, weighted by how
    much of the candidate it covers and how close to the end it finishes.
    Candidates without a ``/`` get an extra bonus.

    Special cases:
        - Empty query: the candidate's length, so shorter candidates sort first.
        - Identical strings: ``-10000``, better than any computed rank.
        - No match: ``10000``, worse than any computed rank.

    Args:
        query: Short search string.
        candidate: String being ranked, typically a file system path.

    Returns:
        Signed integer rank. Deterministic and free of side effects.

    Raises:
        TypeError: If either argument is not a string.

    Example:
        >>> score("convim", "Projects/config/nvim")
        -340
        >>> score("convim", "Projects/neovim")
        10000
        >>> score("", "abc")
        3
    """
    if not isinstance(query, str) or not isinstance(candidate, str):
        raise TypeError(
            "query and candidate must be str, got "
            f"{type(query).__name__} and {type(candidate).__name__}"
        )
    return score_compiled(compile_query(query), candidate)


def explain(
    query: str,
    candidate: str,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> Optional[ScoreBreakdown]:
    """Return the breakdown behind ``score(query, candidate)``.

    Returns None where the rank does not come from a run: an empty query,
    identical strings, or no match.

    Example:
        >>> explain("de", "gateways/delete.yaml")
        ScoreBreakdown(start=9, length=2, length_bonus=20.0, position_bonus=55.0, leaf_bonus=0.0, raw=175.0)
    """
    if not query or query == candidate:
        return None
    return _breakdown(compile_query(query), candidate, weights)


__all__ = [
    "AlignmentSlot",
    "Branch",
    "CompiledQuery",
    "DEFAULT_WEIGHTS",
    "FuzzyPathError",
    "MatchResult",
    "PatternIndex",
    "PositionSet",
    "ScoreBreakdown",
    "ScoreWeights",
    "Streak",
    "ValidationError",
    "align_candidate",
    "assemble_score",
    "build_pattern_index",
    "compile_query",
    "explain",
    "find_best_streak",
    "is_leaf",
    "prune_alignment",
    "score",
    "score_compiled",
]
