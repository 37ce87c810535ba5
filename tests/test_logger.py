import logging
from logging.handlers import RotatingFileHandler

import pytest

from utils import logger as log_module


def _installed_by_us(handler):
    return type(handler) is logging.StreamHandler or isinstance(handler, RotatingFileHandler)


@pytest.fixture()
def fresh_logging(monkeypatch):
    """Let _init_logging run again; yields a function listing the handlers it added."""
    root = logging.getLogger()
    before, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(log_module, "_initialized", False)

    def added():
        return [h for h in root.handlers if h not in before and _installed_by_us(h)]

    yield added
    for handler in added():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(saved_level)


def test_handlers_are_installed_once(fresh_logging, monkeypatch):
    monkeypatch.delenv("LOG_FILE", raising=False)
    log_module.get_logger("db.init_db")
    log_module.get_logger("db.connection")
    assert len(fresh_logging()) == 1


def test_level_comes_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    log_module.get_logger("db")
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info(fresh_logging, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    log_module.get_logger("db")
    assert logging.getLogger().level == logging.INFO


def test_log_file_gets_a_rotating_handler(fresh_logging, monkeypatch, tmp_path):
    log_path = tmp_path / "logs" / "init-db.log"
    monkeypatch.setenv("LOG_FILE", str(log_path))
    log_module.get_logger("db.init_db").warning("Please change the default password")

    file_handlers = [h for h in fresh_logging() if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    file_handlers[0].flush()
    assert "Please change the default password" in log_path.read_text(encoding="utf-8")
