"""Process-local result caching to avoid redundant upstream and AI calls.

- Bounded capacity with least-recently-used eviction
- Independent per-entry TTL, checked on every read
- Shared across endpoint kinds (metadata, extracted tags, generated lists)
- Safe for concurrent use from many in-flight requests
"""

import hashlib
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import TLRUCache

logger = logging.getLogger(__name__)

# TTL classes (seconds)
INFO_TTL = 10 * 60  # raw video metadata
DERIVED_TTL = 30 * 60  # tags/hashtags extracted from a video
GENERATION_TTL = 30 * 60  # paid AI output


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its insertion time and time-to-live."""

    key: str
    value: Any
    inserted_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.inserted_at + self.ttl

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


def _entry_expiry(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expires_at


class ResultCache:
    """Bounded TTL cache for pipeline results.

    A miss is never an error: callers recompute and ``put`` the fresh value.

    Example usage:
        cache = ResultCache(max_entries=800, default_ttl=600)

        cached = cache.get("yt:info:dQw4w9WgXcQ")
        if cached is None:
            cached = await resolver_fetch(...)
            cache.put("yt:info:dQw4w9WgXcQ", cached, ttl=INFO_TTL)
    """

    def __init__(
        self,
        max_entries: int = 800,
        default_ttl: float = INFO_TTL,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize result cache.

        Args:
            max_entries: Maximum number of live entries (default: 800)
            default_ttl: TTL in seconds used when ``put`` is given none
            enabled: Whether caching is enabled (default: True)
            clock: Monotonic time source, injectable for tests
        """
        self.enabled = enabled
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.Lock()

        # Statistics tracking
        self.hits = 0
        self.misses = 0

        if not enabled:
            logger.info("Result caching is DISABLED")
            self._entries = None
            return

        self._entries: Optional[TLRUCache] = TLRUCache(
            maxsize=max_entries, ttu=_entry_expiry, timer=clock
        )
        logger.info(
            f"Initialized result cache (max entries: {max_entries}, default TTL: {default_ttl}s)"
        )

    def get(self, key: str) -> Any:
        """Get a cached value if present and not expired.

        Args:
            key: Cache key

        Returns:
            Cached value, or None on miss
        """
        if self._entries is None:
            return None

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_live(self._clock()):
                self.hits += 1
                hit = True
            else:
                self.misses += 1
                hit = False

        if hit:
            logger.debug(f"Cache HIT for {key} (hit rate: {self.hit_rate:.1%})")
            return entry.value
        logger.debug(f"Cache MISS for {key} (hit rate: {self.hit_rate:.1%})")
        return None

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value, replacing any existing entry for the key.

        Args:
            key: Cache key
            value: Any value; stored as-is and never mutated by the cache
            ttl: Optional TTL in seconds (default: configured TTL)
        """
        if self._entries is None:
            return

        ttl_seconds = self.default_ttl if ttl is None else ttl
        with self._lock:
            # Re-inserting moves the key to the most-recently-used position
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                key=key, value=value, inserted_at=self._clock(), ttl=ttl_seconds
            )
        logger.debug(f"Cached {key} (TTL: {ttl_seconds}s)")

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        if self._entries is None:
            return False
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """Clear all cached entries.

        Returns:
            Number of entries that were cleared
        """
        if self._entries is None:
            logger.info("Cache is disabled, nothing to clear")
            return 0

        with self._lock:
            self._entries.expire()
            entry_count = len(self._entries)
            self._entries.clear()
            self.hits = 0
            self.misses = 0
        logger.info(f"Cache cleared ({entry_count} entries removed)")
        return entry_count

    def __len__(self) -> int:
        if self._entries is None:
            return 0
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        return {
            "enabled": self.enabled,
            "total_requests": self.hits + self.misses,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "entry_count": len(self),
            "max_entries": self.max_entries,
            "default_ttl_seconds": self.default_ttl,
        }

    def log_stats(self) -> None:
        """Log cache statistics."""
        stats = self.get_stats()
        if not stats["enabled"]:
            logger.info("Cache Stats - DISABLED")
            return

        logger.info(
            f"Cache Stats - Requests: {stats['total_requests']}, "
            f"Hit Rate: {stats['hit_rate']:.1%}, "
            f"Entries: {stats['entry_count']}/{stats['max_entries']}"
        )

    @property
    def hit_rate(self) -> float:
        """Hit rate as a float between 0.0 and 1.0."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


def load_cache_from_config(config: dict) -> ResultCache:
    """Load cache from configuration.

    Args:
        config: Configuration dictionary

    Returns:
        ResultCache instance (may be disabled based on config)
    """
    return ResultCache(
        max_entries=config.get("cache_max_entries", 800),
        default_ttl=config.get("cache_ttl_seconds", INFO_TTL),
        enabled=config.get("cache_enabled", True),
    )


def compute_content_hash(content: str) -> str:
    """Compute SHA-256 hash of string content for cache keying.

    Args:
        content: String content to hash

    Returns:
        SHA-256 hash as hex string
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
