from __future__ import annotations

from collections.abc import Mapping
from threading import RLock

_LOCK = RLock()
_METRICS: dict[str, int] = {
    "http_requests_total": 0,
    "http_errors_5xx_total": 0,
    "http_upstream_errors_total": 0,
}


def inc(name: str, value: int = 1) -> None:
    with _LOCK:
        _METRICS[name] = _METRICS.get(name, 0) + value


def snapshot() -> dict[str, int]:
    with _LOCK:
        return dict(_METRICS)


def render_prometheus(extra: Mapping[str, int] | None = None) -> str:
    """Counters propios + extra (p.ej. movie_cache_* del MovieService)."""
    merged = snapshot()
    if extra:
        merged.update(extra)
    lines: list[str] = []
    for k, v in sorted(merged.items()):
        kind = "counter" if k.endswith("_total") else "gauge"
        lines.append(f"# TYPE {k} {kind}")
        lines.append(f"{k} {v}")
    return "\n".join(lines) + "\n"
