import pytest

from icmkit.helpers.cache import LRUCache


def test_lru_evicts_least_recently_used():
    c = LRUCache(capacity=2)
    c.put("a", 1.0)
    c.put("b", 2.0)
    assert c.get("a") == 1.0      # a is now most recent
    c.put("c", 3.0)
    assert "b" not in c
    assert "a" in c and "c" in c
    assert c.stats.evictions == 1


def test_stats_and_get_or_compute():
    c = LRUCache(capacity=10)
    calls = []

    def compute():
        calls.append(1)
        return 42.0

    assert c.get_or_compute("k", compute) == 42.0
    assert c.get_or_compute("k", compute) == 42.0
    assert len(calls) == 1
    assert c.stats.hits == 1
    assert c.stats.misses == 1
    assert c.stats.hit_rate == pytest.approx(0.5)


def test_zero_is_a_cached_value():
    c = LRUCache(capacity=4)
    c.put("zero", 0.0)
    assert c.get("zero") == 0.0
    assert c.stats.hits == 1


def test_clear_resets_counters():
    c = LRUCache(capacity=4)
    c.put("x", 1.0)
    c.get("x")
    c.clear()
    assert len(c) == 0
    assert c.stats.as_dict() == {"hits": 0, "misses": 0, "evictions": 0, "hit_rate": 0.0}


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        LRUCache(capacity=0)


def test_get_or_compute_keeps_cached_none():
    c = LRUCache(capacity=4)
    calls = []

    def compute():
        calls.append(1)
        return None

    assert c.get_or_compute("k", compute) is None
    assert c.get_or_compute("k", compute) is None
    assert len(calls) == 1
    assert c.stats.hits == 1
