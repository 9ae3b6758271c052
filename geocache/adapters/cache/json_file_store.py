"""JSON file cache store — implements CacheStorePort.

File format: ``{"<key>": {"v": {city, province, country, displayName}, "t": epoch_ms}}``.
The whole file is rewritten on every write.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from geocache.application.ports.cache_store_port import CacheStorePort
from geocache.domain.entities.place import CacheEntry

logger = logging.getLogger(__name__)


class JsonFileCacheStore(CacheStorePort):
    """In-memory map backed by a JSON file, loaded once per process."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._entries: dict[str, CacheEntry] | None = None
        self._load_lock = asyncio.Lock()
        self._save_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def loaded(self) -> bool:
        return self._entries is not None

    async def load(self) -> None:
        if self._entries is not None:
            return
        async with self._load_lock:
            if self._entries is None:
                self._entries = await asyncio.to_thread(self._read)

    def get(self, key: str) -> CacheEntry | None:
        if self._entries is None:
            return None
        return self._entries.get(key)

    async def put(self, key: str, entry: CacheEntry) -> None:
        await self.load()
        self._entries[key] = entry
        await self.save()

    async def save(self) -> None:
        if self._entries is None:
            return
        async with self._save_lock:
            # Snapshot on the event loop; the thread only does the I/O
            payload = {key: entry.to_dict() for key, entry in self._entries.items()}
            try:
                await asyncio.to_thread(self._write, payload)
            except OSError as e:
                logger.warning("Failed to write geocode cache %s: %s", self._path, e)

    def __len__(self) -> int:
        return len(self._entries) if self._entries is not None else 0

    def _read(self) -> dict[str, CacheEntry]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("No geocode cache at %s, starting empty", self._path)
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Geocode cache %s is unreadable, starting empty: %s", self._path, e)
            return {}

        if not isinstance(raw, dict):
            logger.warning("Geocode cache %s is not a JSON object, starting empty", self._path)
            return {}

        entries: dict[str, CacheEntry] = {}
        for key, item in raw.items():
            try:
                entries[key] = CacheEntry.from_dict(item)
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping malformed geocode cache entry %r", key)
        logger.info("Loaded %d geocode cache entries from %s", len(entries), self._path)
        return entries

    def _write(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, self._path)
