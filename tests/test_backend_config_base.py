import importlib

import backend.config_base as cfg


def test_env_str_strips_quotes_and_blanks(monkeypatch):
    monkeypatch.setenv("TMDB_API_KEY", "  'abc123'  ")
    assert cfg.env_str("TMDB_API_KEY") == "abc123"

    monkeypatch.setenv("TMDB_API_KEY", '""')
    assert cfg.env_str("TMDB_API_KEY", "fallback") == "fallback"

    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    assert cfg.env_str("TMDB_API_KEY") is None


def test_env_url_drops_trailing_slash(monkeypatch):
    monkeypatch.setenv("TMDB_BASE_URL", "http://localhost:9000/3/")
    assert cfg.env_url("TMDB_BASE_URL", "https://api.themoviedb.org/3") == "http://localhost:9000/3"

    monkeypatch.delenv("TMDB_BASE_URL", raising=False)
    assert cfg.env_url("TMDB_BASE_URL", "https://api.themoviedb.org/3") == "https://api.themoviedb.org/3"


def test_retry_total_is_clamped_with_warning(monkeypatch):
    warnings = []
    monkeypatch.setattr(cfg._logger, "warning", lambda msg, **k: warnings.append(msg))

    monkeypatch.setenv("TMDB_HTTP_RETRY_TOTAL", "50")
    assert cfg.env_int("TMDB_HTTP_RETRY_TOTAL", 2, min_v=0, max_v=10) == 10

    monkeypatch.setenv("TMDB_HTTP_RETRY_TOTAL", "-1")
    assert cfg.env_int("TMDB_HTTP_RETRY_TOTAL", 2, min_v=0, max_v=10) == 0

    monkeypatch.setenv("TMDB_HTTP_RETRY_TOTAL", "three")
    assert cfg.env_int("TMDB_HTTP_RETRY_TOTAL", 2, min_v=0, max_v=10) == 2

    assert len(warnings) == 3
    assert "TMDB_HTTP_RETRY_TOTAL" in warnings[0]


def test_timeout_has_floor_and_rejects_non_finite(monkeypatch):
    monkeypatch.setattr(cfg._logger, "warning", lambda msg, **k: None)

    monkeypatch.setenv("OMDB_HTTP_TIMEOUT_SECONDS", "0.1")
    assert cfg.env_float("OMDB_HTTP_TIMEOUT_SECONDS", 10.0, min_v=0.5) == 0.5

    monkeypatch.setenv("OMDB_HTTP_TIMEOUT_SECONDS", "nan")
    assert cfg.env_float("OMDB_HTTP_TIMEOUT_SECONDS", 10.0, min_v=0.5) == 10.0

    monkeypatch.setenv("OMDB_HTTP_TIMEOUT_SECONDS", "2.5")
    assert cfg.env_float("OMDB_HTTP_TIMEOUT_SECONDS", 10.0, min_v=0.5) == 2.5


def test_env_bool_values(monkeypatch):
    monkeypatch.setattr(cfg._logger, "warning", lambda msg, **k: None)

    monkeypatch.setenv("HTTP_DEBUG", "on")
    assert cfg.env_bool("HTTP_DEBUG", False) is True
    monkeypatch.setenv("HTTP_DEBUG", "No")
    assert cfg.env_bool("HTTP_DEBUG", True) is False
    monkeypatch.setenv("HTTP_DEBUG", "maybe")
    assert cfg.env_bool("HTTP_DEBUG", True) is True


def test_provider_modules_read_env(monkeypatch):
    import backend.config_omdb as config_omdb
    import backend.config_tmdb as config_tmdb

    monkeypatch.setenv("TMDB_HTTP_RETRY_TOTAL", "4")
    monkeypatch.setenv("OMDB_API_KEY", "omdb-key")
    monkeypatch.setenv("OMDB_BASE_URL", "http://omdb.local/")
    try:
        tmdb = importlib.reload(config_tmdb)
        omdb = importlib.reload(config_omdb)
        assert tmdb.TMDB_HTTP_RETRY_TOTAL == 4
        assert tmdb.TMDB_DETAILS_APPEND == "videos,credits,external_ids,keywords"
        assert omdb.OMDB_API_KEY == "omdb-key"
        assert omdb.OMDB_BASE_URL == "http://omdb.local"
    finally:
        monkeypatch.undo()
        importlib.reload(config_tmdb)
        importlib.reload(config_omdb)


def test_config_facade_exposes_fixed_cache_ttl():
    import backend.config as config

    assert config.MOVIE_CACHE_TTL_SECONDS == 30 * 60
    assert config.OMDB_ABSENT == "N/A"
