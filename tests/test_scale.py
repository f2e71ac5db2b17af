"""
Tests for large candidate sets.

Run with: pytest tests/test_scale.py -v
Skip slow tests: pytest tests/test_scale.py -v -m "not slow"
"""

from __future__ import annotations

import polars as pl
import pytest

import fuzzypath as fp


def generate_paths(n: int) -> list[str]:
    """Generate a directory tree listing with one file per leaf directory."""
    return [f"src/pkg{i % 97:02d}/module_{i:06d}/file_{i % 13}.py" for i in range(n)]


class TestBatchScale:
    def test_10k_best_matches(self):
        paths = generate_paths(10_000)
        target = "src/pkg03/module_000100/file_9.py"
        results = fp.best_matches(paths, "module_000100", limit=5)
        assert results[0].text == target

    @pytest.mark.slow
    def test_100k_rank_dataframe(self):
        df = pl.DataFrame({"path": generate_paths(100_000)})
        result = fp.rank_dataframe(df, "path", "module_099999", limit=1)
        assert result["path"].item() == "src/pkg89/module_099999/file_3.py"


class TestPathologicalInputs:
    @pytest.mark.slow
    def test_repeated_character_candidate(self):
        # Every slot holds every query position: quadratic branch work.
        candidate = "a" * 2_000
        breakdown = fp.explain("a" * 20, candidate)
        assert breakdown.length == 20
        assert breakdown.start == len(candidate) - 20
