"""
backend/config_base.py

Base de configuración del agregador:
- Carga .env una sola vez (sin pisar variables ya exportadas).
- Lectores de env vars tipados que nunca lanzan: valor inválido o fuera de
  rango -> warning (always=True) y default / valor acotado.
- Flags de ejecución que lee backend/logger.py.

No importa config_*.py (lo importan ellos).
"""

from __future__ import annotations

import math
import os
from collections.abc import Callable
from typing import Final, TypeVar

from dotenv import load_dotenv

load_dotenv(override=False)

from backend import logger as _logger  # noqa: E402

T = TypeVar("T")

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


def _raw_env(name: str) -> str | None:
    """Valor sin espacios ni comillas envolventes; vacío -> None."""
    value = (os.getenv(name) or "").strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1].strip()
    return value or None


def _parse_or_default(name: str, default: T, parse: Callable[[str], T], kind: str) -> T:
    raw = _raw_env(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        _logger.warning(f"{name}={raw!r} is not a valid {kind}; using {default!r}", always=True)
        return default


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(raw)


def _parse_finite_float(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(raw)
    return value


def env_str(name: str, default: str | None = None) -> str | None:
    raw = _raw_env(name)
    return default if raw is None else raw


def env_url(name: str, default: str) -> str:
    """URL base sin "/" final (los clientes la añaden donde toca)."""
    return (env_str(name, default) or default).rstrip("/")


def env_bool(name: str, default: bool) -> bool:
    return _parse_or_default(name, default, _parse_bool, "bool")


def env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    value = _parse_or_default(name, default, int, "int")
    if not min_v <= value <= max_v:
        bounded = min(max(value, min_v), max_v)
        _logger.warning(f"{name}={value} out of range [{min_v}, {max_v}]; using {bounded}", always=True)
        return bounded
    return value


def env_float(name: str, default: float, *, min_v: float) -> float:
    value = _parse_or_default(name, default, _parse_finite_float, "float")
    if value < min_v:
        _logger.warning(f"{name}={value} below {min_v}; using {min_v}", always=True)
        return min_v
    return value


# ============================================================
# Modo de ejecución
# ============================================================

DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
SILENT_MODE: bool = env_bool("SILENT_MODE", False)
HTTP_DEBUG: bool = env_bool("HTTP_DEBUG", False)
LOG_LEVEL: str | None = env_str("LOG_LEVEL", None)
