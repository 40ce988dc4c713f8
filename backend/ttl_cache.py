from __future__ import annotations

"""
backend/ttl_cache.py

Caché en memoria con TTL fijo para el MovieService.

- get(key): valida la edad en lectura; si ha caducado borra la entrada y
  devuelve None (sin barrido en background).
- set(key, data): sobrescribe siempre y sella con el reloj actual.
- cache_key(op, params): "<op>_" + JSON con claves ordenadas, de modo que dos
  dicts iguales den la misma key aunque el orden de inserción difiera.

Pensado para un único event loop: entre puntos de await las lecturas/escrituras
son atómicas, así que no hay locks. Tampoco hay single-flight: dos requests
concurrentes sobre la misma key fallan ambas y ambas van a upstream.
"""

import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def cache_key(operation: str, params: Mapping[str, object]) -> str:
    return f"{operation}_{json.dumps(dict(params), sort_keys=True, separators=(',', ':'), default=str)}"


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """
    - data: MoviePage / CanonicalMovie / list[Genre]
    - stored_at: reloj monotónico (TTL sin depender del reloj del sistema)
    """

    data: T
    stored_at: float


class TTLCache(Generic[T]):
    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl_seconds = max(0.0, float(ttl_seconds))
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._stats: dict[str, int] = {
            "hit": 0,
            "miss": 0,
            "expired": 0,
            "store": 0,
        }

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def _is_valid(self, entry: CacheEntry[T]) -> bool:
        return (self._clock() - entry.stored_at) < self._ttl_seconds

    def get(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None:
            self._stats["miss"] += 1
            return None

        if not self._is_valid(entry):
            del self._entries[key]
            self._stats["expired"] += 1
            self._stats["miss"] += 1
            return None

        self._stats["hit"] += 1
        return entry.data

    def set(self, key: str, data: T) -> None:
        self._entries[key] = CacheEntry(data=data, stored_at=self._clock())
        self._stats["store"] += 1

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> dict[str, int]:
        out = dict(self._stats)
        out["entries"] = len(self._entries)
        return out

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
