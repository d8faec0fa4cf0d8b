"""Persistent record of listing ids the monitor has already looked at.

The cache is an immutable value: ``record_seen`` returns a new cache and the
caller decides when to ``persist`` it. Ids are only ever added.
"""
import json
import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from wg_monitor.models import Listing

logger = logging.getLogger(__name__)

# Key used by the old script version of the monitor
LEGACY_IDS_KEY = "seen_wg_ids"


class CacheError(Exception):
    pass


class CorruptCacheError(CacheError):
    pass


class CacheWriteError(CacheError):
    pass


@dataclass(frozen=True)
class DedupCache:
    seen_ids: frozenset[str] = field(default_factory=frozenset)
    last_check: str | None = None

    def __contains__(self, listing_id) -> bool:
        return listing_id is not None and listing_id in self.seen_ids

    def __len__(self) -> int:
        return len(self.seen_ids)


def load(path: str | Path) -> DedupCache:
    """Read the cache file, or return an empty cache if there is none.

    Raises CorruptCacheError when the file exists but cannot be understood.
    Carrying on with an empty cache would re-notify every known listing.
    """
    path = Path(path)
    if not path.exists():
        logger.info(f"No cache at {path}, starting empty")
        return DedupCache()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorruptCacheError(f"Cannot read cache {path}: {e}") from e

    if not isinstance(data, dict):
        raise CorruptCacheError(f"Cache {path} is not a JSON object")

    ids = data.get("seen_ids")
    if ids is None:
        ids = data.get(LEGACY_IDS_KEY, [])
        # The script version wrote null for listings it could not parse
        if isinstance(ids, list):
            ids = [i for i in ids if i is not None]
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise CorruptCacheError(f"Cache {path} has a malformed seen_ids list")

    last_check = data.get("last_check")
    if last_check is not None and not isinstance(last_check, str):
        raise CorruptCacheError(f"Cache {path} has a malformed last_check")

    cache = DedupCache(seen_ids=frozenset(ids), last_check=last_check)
    logger.info(f"Loaded {len(cache)} seen ids from {path} (last check: {last_check})")
    return cache


def filter_new(cache: DedupCache, listings: Iterable[Listing]) -> list[Listing]:
    """Listings not in the cache. Listings without an id always count as new."""
    return [listing for listing in listings if listing.unique_key not in cache]


def record_seen(
    cache: DedupCache, listings: Iterable[Listing], now: datetime | None = None
) -> DedupCache:
    new_ids = {listing.unique_key for listing in listings if listing.unique_key is not None}
    stamp = (now or datetime.now().astimezone()).isoformat()
    return DedupCache(seen_ids=cache.seen_ids | new_ids, last_check=stamp)


def to_dict(cache: DedupCache) -> dict:
    return {"seen_ids": sorted(cache.seen_ids), "last_check": cache.last_check}


def persist(cache: DedupCache, path: str | Path) -> None:
    """Overwrite the cache file via a temp file and rename."""
    path = Path(path)
    payload = json.dumps(to_dict(cache), indent=2, ensure_ascii=False) + "\n"
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise CacheWriteError(f"Cannot write cache {path}: {e}") from e
    logger.info(f"Saved {len(cache)} seen ids to {path}")
