# settings de la capa HTTP (env vars)
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from backend.config_base import env_int, env_str

DEFAULT_GZIP_MIN_SIZE: Final[int] = 800
_ANY_ORIGIN: Final[tuple[str, ...]] = ("*",)


def _normalize_level(raw: str | None) -> str:
    """Nombre de nivel válido para logging.setLevel; desconocido -> INFO."""
    name = (raw or "").strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    origins = tuple(p.strip() for p in (raw or "*").split(",") if p.strip())
    if not origins or "*" in origins:
        return _ANY_ORIGIN
    return origins


@dataclass(frozen=True)
class Settings:
    """
    Settings de la API. Las API keys de TMDb/OMDb no viven aquí (backend.config).

    CORS_ORIGINS="*" (o vacío) -> cualquier origen y SIN credenciales:
    el navegador rechaza "*" junto con allow_credentials.
    """

    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = _ANY_ORIGIN
    gzip_min_size: int = DEFAULT_GZIP_MIN_SIZE

    @property
    def cors_allow_credentials(self) -> bool:
        return self.cors_origins != _ANY_ORIGIN

    def cors_allow_origins(self) -> list[str]:
        return list(self.cors_origins)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=_normalize_level(env_str("LOG_LEVEL", "INFO")),
            cors_origins=_parse_origins(env_str("CORS_ORIGINS", "*")),
            gzip_min_size=env_int("GZIP_MIN_SIZE", DEFAULT_GZIP_MIN_SIZE, min_v=0, max_v=10_000_000),
        )
