import logging
import os

import pytest

from server.api import logging_config
from server.api.settings import Settings


def _remove_file_handlers() -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging_config.ApiFileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def _fresh_log_file_path(monkeypatch):
    for name in ("LOGGER_FILE_ENABLED", "LOGGER_FILE_PATH", "LOGGER_FILE_DIR", "LOGGER_FILE_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    logging_config.log_file_path.cache_clear()
    yield
    _remove_file_handlers()
    logging_config.log_file_path.cache_clear()


def test_safe_filename_component():
    assert logging_config.safe_filename_component(" run 1 ") == "run_1"
    assert logging_config.safe_filename_component("..") == ""
    assert logging_config.safe_filename_component("a/b") == "a_b"


def test_log_file_disabled_by_default():
    assert logging_config.log_file_path() is None


def test_log_file_path_is_resolved_once(monkeypatch, tmp_path):
    monkeypatch.setenv("LOGGER_FILE_ENABLED", "1")
    monkeypatch.setenv("LOGGER_FILE_PATH", str(tmp_path / "api.log"))
    first = logging_config.log_file_path()

    monkeypatch.setenv("LOGGER_FILE_PATH", str(tmp_path / "other.log"))
    assert logging_config.log_file_path() == first == (tmp_path / "api.log").resolve()


def test_log_file_path_from_dir_and_prefix(monkeypatch, tmp_path):
    monkeypatch.setenv("LOGGER_FILE_ENABLED", "true")
    monkeypatch.setenv("LOGGER_FILE_DIR", str(tmp_path))
    monkeypatch.setenv("LOGGER_FILE_PREFIX", "run*bad")

    path = logging_config.log_file_path()
    assert path is not None
    assert path.parent == tmp_path.resolve()
    assert path.name.startswith("run_bad_")
    assert path.name.endswith(f"_{os.getpid()}.log")


def test_configure_logging_adds_file_handler_once(monkeypatch, tmp_path):
    monkeypatch.setenv("LOGGER_FILE_ENABLED", "1")
    monkeypatch.setenv("LOGGER_FILE_DIR", str(tmp_path / "logs"))
    root = logging.getLogger()
    previous_level = root.level

    try:
        logger = logging_config.configure_logging(Settings(log_level="DEBUG"))
        logging_config.configure_logging(Settings(log_level="DEBUG"))

        ours = [h for h in root.handlers if isinstance(h, logging_config.ApiFileHandler)]
        assert logger.name == logging_config.API_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(ours) == 1
        assert (tmp_path / "logs").is_dir()
    finally:
        root.setLevel(previous_level)
