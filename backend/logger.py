"""
backend/logger.py

Logger del agregador: fachada mínima sobre `logging`.

- info / warning: se suprimen con SILENT_MODE salvo always=True.
- error: siempre se emite.
- debug_ctx(tag, msg): solo con DEBUG_MODE, recortado con truncate_line.

Los flags se leen de `backend.config` vía sys.modules (si ya está importado),
porque config_base importa este módulo y no al revés.
"""

from __future__ import annotations

import logging
import sys
from types import ModuleType
from typing import Final

LOGGER_NAME: Final[str] = "movie_aggregator"
LOG_LINE_MAX_CHARS: Final[int] = 500

# Cada request de httpx emite una línea INFO.
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore", "hpack")

_logger: logging.Logger | None = None


def _config() -> ModuleType | None:
    mod = sys.modules.get("backend.config")
    return mod if isinstance(mod, ModuleType) else None


def _flag(name: str) -> bool:
    return bool(getattr(_config(), name, False))


def _level() -> int:
    """LOG_LEVEL explícito > DEBUG_MODE > INFO."""
    raw = getattr(_config(), "LOG_LEVEL", None)
    if isinstance(raw, str):
        level = logging.getLevelName(raw.strip().upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if _flag("DEBUG_MODE") else logging.INFO


def _quiet_http_loggers() -> None:
    if _flag("HTTP_DEBUG"):
        return
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _get() -> logging.Logger:
    global _logger

    if _logger is None:
        if not logging.getLogger().handlers:
            logging.basicConfig(format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        _quiet_http_loggers()
        _logger = logging.getLogger(LOGGER_NAME)

    # el nivel se recalcula: backend.config puede cargarse después del primer log
    _logger.setLevel(_level())
    return _logger


def info(msg: str, *, always: bool = False) -> None:
    if always or not _flag("SILENT_MODE"):
        _get().info(msg)


def warning(msg: str, *, always: bool = False) -> None:
    if always or not _flag("SILENT_MODE"):
        _get().warning(msg)


def error(msg: str) -> None:
    _get().error(msg)


def truncate_line(text: str, max_chars: int = LOG_LINE_MAX_CHARS) -> str:
    """Recorta payloads largos (JSON de TMDb/OMDb) para el log."""
    if len(text) <= max_chars:
        return text
    return text[: max(0, max_chars - 12)] + " …(truncated)"


def debug_ctx(tag: str, msg: object) -> None:
    if not _flag("DEBUG_MODE"):
        return
    label = (tag or "DEBUG").strip().upper()
    info(f"[{label}][DEBUG] {truncate_line(str(msg))}")
