import logging

import backend.logger as logger


class _Cfg:
    SILENT_MODE = False
    DEBUG_MODE = False
    LOG_LEVEL = None
    HTTP_DEBUG = False


def _patch_cfg(monkeypatch, **overrides):
    cfg = _Cfg()
    for k, v in overrides.items():
        setattr(cfg, k, v)
    monkeypatch.setattr(logger, "_config", lambda: cfg)
    return cfg


def test_truncate_line_marks_truncated():
    out = logger.truncate_line("x" * 50, max_chars=10)
    assert out.endswith("…(truncated)")
    assert out.startswith("x")
    assert logger.truncate_line("short", max_chars=10) == "short"


def test_level_prefers_explicit_log_level(monkeypatch):
    _patch_cfg(monkeypatch, LOG_LEVEL="warning", DEBUG_MODE=True)
    assert logger._level() == logging.WARNING

    _patch_cfg(monkeypatch, LOG_LEVEL=None, DEBUG_MODE=True)
    assert logger._level() == logging.DEBUG

    _patch_cfg(monkeypatch, LOG_LEVEL="nonsense")
    assert logger._level() == logging.INFO


def test_silent_mode_suppresses_warning_but_not_error(monkeypatch, caplog):
    _patch_cfg(monkeypatch, SILENT_MODE=True)
    caplog.set_level(logging.INFO, logger=logger.LOGGER_NAME)

    logger.info("hidden")
    logger.warning("Failed to fetch IMDB data for Pulp Fiction: timeout")
    logger.warning("TMDB_API_KEY not found", always=True)
    logger.error("Error fetching popular movies: boom")

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["TMDB_API_KEY not found", "Error fetching popular movies: boom"]


def test_debug_ctx_only_in_debug_mode(monkeypatch, caplog):
    caplog.set_level(logging.INFO, logger=logger.LOGGER_NAME)

    _patch_cfg(monkeypatch, DEBUG_MODE=False)
    logger.debug_ctx("tmdb", "GET /movie/popular")
    assert not caplog.records

    _patch_cfg(monkeypatch, DEBUG_MODE=True)
    logger.debug_ctx("tmdb", "GET /movie/popular")
    assert caplog.records[-1].getMessage() == "[TMDB][DEBUG] GET /movie/popular"


def test_http_loggers_quieted_unless_http_debug(monkeypatch):
    logging.getLogger("httpx").setLevel(logging.NOTSET)
    _patch_cfg(monkeypatch, HTTP_DEBUG=True)
    logger._quiet_http_loggers()
    assert logging.getLogger("httpx").level == logging.NOTSET

    _patch_cfg(monkeypatch, HTTP_DEBUG=False)
    logger._quiet_http_loggers()
    assert logging.getLogger("httpx").level == logging.WARNING
