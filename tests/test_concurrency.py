"""
Concurrency tests for fuzzypath.

Tests cover:
- Thread safety documentation verification
- One compiled query shared read-only across threads
- A built PathIndex searched from many threads
"""

import concurrent.futures

import pytest

import fuzzypath as fp


@pytest.fixture
def many_paths(home_paths):
    return [f"{i}/{path}" for i in range(50) for path in home_paths]


class TestThreadSafetyDocumentation:
    def test_path_index_docstring_warning(self):
        docstring = fp.PathIndex.__doc__ or ""
        assert "thread" in docstring.lower(), "Missing thread-safety note in PathIndex docstring"

    def test_compile_query_docstring(self):
        assert "thread" in (fp.compile_query.__doc__ or "").lower()


class TestSharedCompiledQuery:
    def test_shared_query_matches_sequential(self, many_paths):
        compiled = fp.compile_query("neo")
        expected = [fp.score("neo", p) for p in many_paths]

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda p: fp.score_compiled(compiled, p), many_paths))

        assert results == expected

    def test_compiled_query_unchanged(self, many_paths):
        compiled = fp.compile_query("olmo")
        snapshot = dict(compiled.pattern_index)

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            list(executor.map(lambda p: fp.score_compiled(compiled, p), many_paths))

        assert compiled.pattern_index == snapshot

    def test_many_queries_in_parallel(self, home_paths):
        queries = ["neo", "nvim", "de", "datab", "", "convim"] * 10

        def worker(query):
            return [r.score for r in fp.scores(home_paths, query)]

        with concurrent.futures.ThreadPoolExecutor(max_workers=6) as executor:
            parallel = list(executor.map(worker, queries))

        assert parallel == [worker(q) for q in queries]


class TestSharedIndex:
    def test_concurrent_search(self, many_paths):
        index = fp.PathIndex(many_paths)
        expected = index.search("neo", limit=20)

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            futures = [executor.submit(index.search, "neo", 20) for _ in range(16)]
            results = [f.result() for f in futures]

        assert all(r == expected for r in results)
