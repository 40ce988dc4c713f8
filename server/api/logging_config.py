# logger de la API + fichero de log opcional
from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Final

from backend.config_base import env_bool, env_str
from server.api.settings import Settings

API_LOGGER_NAME: Final[str] = "movie_api"

SERVER_DIR: Final[Path] = Path(__file__).resolve().parents[1]

_LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_UNSAFE_FILENAME_CHARS: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9._-]")


class ApiFileHandler(logging.FileHandler):
    """FileHandler propio: permite detectar si ya lo añadimos al root logger."""


def safe_filename_component(value: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", (value or "").strip()).strip("._-")


@lru_cache(maxsize=1)
def log_file_path() -> Path | None:
    """
    Destino del fichero de log (resuelto una vez por proceso).

    - LOGGER_FILE_ENABLED falso -> None.
    - LOGGER_FILE_PATH explícito (relativo a server/).
    - Si no: <LOGGER_FILE_DIR>/<LOGGER_FILE_PREFIX>_<timestamp>_<pid>.log
    """
    if not env_bool("LOGGER_FILE_ENABLED", False):
        return None

    def under_server(raw: str) -> Path:
        p = Path(raw)
        return (p if p.is_absolute() else SERVER_DIR / p).resolve()

    explicit = env_str("LOGGER_FILE_PATH", None)
    if explicit:
        return under_server(explicit)

    prefix = safe_filename_component(env_str("LOGGER_FILE_PREFIX", "api") or "") or "api"
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return under_server(env_str("LOGGER_FILE_DIR", "logs") or "logs") / f"{prefix}_{stamp}_{os.getpid()}.log"


def _attach_file_handler(root: logging.Logger, level: str) -> None:
    path = log_file_path()
    if path is None or any(isinstance(h, ApiFileHandler) for h in root.handlers):
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logging.getLogger(API_LOGGER_NAME).warning("log file disabled (%s): %s", path, exc)
        return

    handler = ApiFileHandler(path, encoding="utf-8", delay=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Respeta los handlers de quien arranque el proceso (uvicorn, pytest...):
    solo fija niveles y, si está habilitado, añade el fichero.
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level)
    _attach_file_handler(root, settings.log_level)

    logger = logging.getLogger(API_LOGGER_NAME)
    logger.setLevel(settings.log_level)
    return logger
