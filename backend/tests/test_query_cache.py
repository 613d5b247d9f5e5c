from __future__ import annotations

from startupcall.workflow.query_cache import QueryCache


def test_initial_data_seeds_once_then_server_wins():
    cache = QueryCache()
    calls: list[int] = []

    def fetch():
        calls.append(1)
        return ["from-server"]

    key = ("reviews", "s-1")
    assert cache.get_or_fetch(key, fetch, initial=["embedded"]) == ["embedded"]
    assert cache.get_or_fetch(key, fetch) == ["embedded"]
    assert calls == []

    cache.invalidate(key)
    assert cache.get_or_fetch(key, fetch, initial=["embedded"]) == ["from-server"]
    assert calls == [1]


def test_fetch_is_lazy_and_cached_per_key():
    cache = QueryCache()
    calls: list[str] = []

    def fetcher(name: str):
        def _fetch():
            calls.append(name)
            return name

        return _fetch

    assert cache.get_or_fetch(("tasks", "a"), fetcher("a")) == "a"
    assert cache.get_or_fetch(("tasks", "a"), fetcher("a")) == "a"
    assert cache.get_or_fetch(("tasks", "b"), fetcher("b")) == "b"
    assert calls == ["a", "b"]
    assert ("tasks", "a") in cache
