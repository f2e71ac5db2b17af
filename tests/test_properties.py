"""Property-based tests for fuzzypath using Hypothesis.

These tests verify properties that should hold for all inputs:
- Exact match: score(p, p) beats every other candidate containing p
- Empty query: ranks grow with candidate length
- No match: non-subsequences get the worst rank, matches never do
- Leaf preference: a bare name beats the same run inside a path
- Determinism: identical inputs give identical ranks
"""

from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

import fuzzypath as fp
from fuzzypath._core import align_candidate, build_pattern_index, prune_alignment

# Small alphabet so that repeated characters, case folding and separators
# show up in most examples.
path_alphabet = "abcAB/-."
path_text = st.text(alphabet=path_alphabet, max_size=16)
query_text = st.text(alphabet=path_alphabet, min_size=1, max_size=6)
# Long enough that run points alone exceed the identical-strings rank. The
# characters are distinct so every slot holds a single query position.
long_query_text = st.lists(
    st.integers(min_value=0x4E00, max_value=0x9FFF), min_size=200, max_size=300, unique=True
).map(lambda codes: "".join(map(chr, codes)))

WORST = fp.DEFAULT_WEIGHTS.worst
BEST = fp.DEFAULT_WEIGHTS.best


def _serves(candidate_char: str, query_char: str, query_chars: set) -> bool:
    if candidate_char in query_chars:
        return candidate_char == query_char
    return candidate_char.lower()[:1] == query_char


def _is_subsequence(query: str, candidate: str) -> bool:
    chars = set(query)
    j = 0
    for c in candidate:
        if j < len(query) and _serves(c, query[j], chars):
            j += 1
    return j == len(query)


@st.composite
def superstrings(draw):
    """A query plus a candidate built by inserting characters around it."""
    query = draw(query_text)
    parts = []
    for char in query:
        parts.append(draw(st.text(alphabet=path_alphabet, max_size=3)))
        parts.append(char)
    parts.append(draw(st.text(alphabet=path_alphabet, max_size=3)))
    return query, "".join(parts)


class TestExactMatch:
    @given(query_text)
    @settings(max_examples=100)
    def test_identity_is_best(self, query: str):
        assert fp.score(query, query) == BEST

    @given(superstrings())
    @settings(max_examples=200)
    def test_identity_beats_superstrings(self, pair):
        query, candidate = pair
        assume(candidate != query)
        assert fp.score(query, query) < fp.score(query, candidate)

    @given(long_query_text, st.text(alphabet=path_alphabet, min_size=1, max_size=5))
    @settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_identity_beats_long_superstrings(self, query: str, suffix: str):
        identical = fp.score(query, query)
        extended = fp.score(query, query + suffix)
        assert identical == BEST
        assert BEST < extended < 0


class TestEmptyQuery:
    @given(path_text, path_text)
    @settings(max_examples=100)
    def test_monotonic_in_length(self, a: str, b: str):
        assume(len(a) < len(b))
        assert fp.score("", a) < fp.score("", b)

    @given(st.text(max_size=50))
    @settings(max_examples=100)
    def test_rank_is_length(self, text: str):
        assert fp.score("", text) == len(text)


class TestNoMatch:
    @given(query_text, path_text)
    @settings(max_examples=300)
    def test_worst_iff_not_subsequence(self, query: str, candidate: str):
        assume(query != candidate)
        rank = fp.score(query, candidate)
        if _is_subsequence(query, candidate):
            assert rank < WORST
            assert BEST < rank < 0
        else:
            assert rank == WORST

    @given(superstrings())
    @settings(max_examples=200)
    def test_superstrings_always_match(self, pair):
        query, candidate = pair
        assert fp.score(query, candidate) < WORST


class TestPruning:
    @given(query_text, path_text)
    @settings(max_examples=200)
    def test_pruning_only_narrows(self, query: str, candidate: str):
        slots = align_candidate(build_pattern_index(query), candidate)
        pruned = prune_alignment(slots, len(query))
        assert len(pruned) == len(slots)
        for original, narrowed in zip(slots, pruned):
            assert narrowed is None or narrowed == original

    @given(query_text, path_text)
    @settings(max_examples=200)
    def test_pruning_is_idempotent(self, query: str, candidate: str):
        slots = align_candidate(build_pattern_index(query), candidate)
        once = prune_alignment(slots, len(query))
        assert prune_alignment(once, len(query)) == once


class TestLeafPreference:
    @given(st.text(alphabet="abc", min_size=1, max_size=6), st.text(alphabet="abc", max_size=6))
    @settings(max_examples=100)
    def test_bare_name_beats_path(self, head: str, tail: str):
        # Same length, same run position; only the separator differs.
        query = "c" + tail
        bare = head + "x" + query
        nested = head + "/" + query
        assume(query != bare)
        assert fp.score(query, bare) < fp.score(query, nested)


class TestDeterminism:
    @given(st.text(max_size=20), st.text(max_size=40))
    @settings(max_examples=100)
    def test_repeatable(self, query: str, candidate: str):
        assert fp.score(query, candidate) == fp.score(query, candidate)

    @given(st.text(max_size=20), st.text(max_size=40))
    @settings(max_examples=100)
    def test_total(self, query: str, candidate: str):
        rank = fp.score(query, candidate)
        assert isinstance(rank, int)
        assert BEST <= rank <= max(WORST, len(candidate))
        if query != candidate:
            assert BEST < rank
