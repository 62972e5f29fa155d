from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[K, V]):
    """
    Bounded LRU map with hit/miss/eviction counters.
    Used as the ICM sub-problem memo:
      - one instance per top-level calculation (no module-level state)
      - or shared by the caller across a batch of related calculations
    """
    def __init__(self, capacity: int = 200_000):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._od: "OrderedDict[K, V]" = OrderedDict()
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._od)

    def __contains__(self, key: object) -> bool:
        return key in self._od

    def get(self, key: K) -> Optional[V]:
        if key not in self._od:
            self.stats.misses += 1
            return None
        self.stats.hits += 1
        # mark as recently used
        self._od.move_to_end(key, last=True)
        return self._od[key]

    def put(self, key: K, value: V) -> None:
        self._od[key] = value
        self._od.move_to_end(key, last=True)
        self._evict_if_needed()

    def get_or_compute(self, key: K, compute: Callable[[], V]) -> V:
        # membership, not truthiness: a cached None or 0.0 is still a hit
        if key in self:
            self.stats.hits += 1
            self._od.move_to_end(key, last=True)
            return self._od[key]
        self.stats.misses += 1
        v = compute()
        self.put(key, v)
        return v

    def _evict_if_needed(self) -> None:
        while len(self._od) > self.capacity:
            self._od.popitem(last=False)  # least recently used
            self.stats.evictions += 1

    def clear(self) -> None:
        self._od.clear()
        self.stats = CacheStats()
