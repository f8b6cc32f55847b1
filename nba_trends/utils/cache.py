"""Content-addressable cache for scraped tables."""

import hashlib
import json
from pathlib import Path
from typing import Any

import structlog

from nba_trends.utils.config import get_settings

logger = structlog.get_logger(__name__)


class ContentCache:
    """Content-addressable cache for parsed HTML tables, stored as JSON files."""

    def __init__(self, cache_dir: Path | None = None, enabled: bool | None = None):
        """
        Initialize cache.

        Args:
            cache_dir: Directory for cache storage. If None, uses settings.
            enabled: Override the ``cache_enabled`` setting.
        """
        settings = get_settings()
        self.cache_dir = Path(cache_dir or settings.cache_dir)
        self.enabled = settings.cache_enabled if enabled is None else enabled
        if self.enabled:
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _get_cache_path(self, key: str) -> Path:
        hash_str = hashlib.sha256(key.encode()).hexdigest()
        # First 2 chars as subdirectory
        return self.cache_dir / hash_str[:2] / f"{hash_str[2:]}.json"

    def get(self, key: str) -> Any | None:
        """
        Get cached value if available.

        Args:
            key: Cache key (typically URL plus table selector).

        Returns:
            Cached data if found and valid, None otherwise.
        """
        if not self.enabled:
            return None

        cache_path = self._get_cache_path(key)

        if not cache_path.exists():
            return None

        try:
            with cache_path.open(encoding="utf-8") as f:
                data = json.load(f)
            logger.debug("Cache hit", key=key)
            return data
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Cache file corrupted", key=key, error=str(e))
            return None

    def set(self, key: str, value: Any) -> None:
        """
        Store a value in the cache.

        Args:
            key: Cache key.
            value: Data to cache (must be JSON-serializable).
        """
        if not self.enabled:
            return

        cache_path = self._get_cache_path(key)
        cache_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with cache_path.open("w", encoding="utf-8") as f:
                json.dump(value, f)
            logger.debug("Cached table", key=key)
        except (TypeError, OSError) as e:
            logger.warning("Failed to cache table", key=key, error=str(e))

    def clear(self) -> int:
        """Clear all cached data and return the number of files removed."""
        if not self.cache_dir.exists():
            return 0

        removed = 0
        for path in self.cache_dir.rglob("*.json"):
            path.unlink()
            removed += 1

        logger.info("Cache cleared", files=removed)
        return removed

    def stats(self) -> dict[str, int | float]:
        """
        Get cache statistics.

        Returns:
            Dictionary with file count and total size.
        """
        total_files = 0
        total_size = 0

        if self.cache_dir.exists():
            for path in self.cache_dir.rglob("*.json"):
                total_files += 1
                total_size += path.stat().st_size

        return {
            "files": total_files,
            "size_bytes": total_size,
            "size_mb": round(total_size / (1024 * 1024), 2),
        }
