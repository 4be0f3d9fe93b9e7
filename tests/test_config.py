import logging

from wigle_hub.config import Settings, get_settings
from wigle_hub.logs import setup_logger


def test_defaults():
    assert get_settings() == Settings()


def test_from_environment(monkeypatch):
    monkeypatch.setenv("WIGLE_API_KEY", "abc")
    monkeypatch.setenv("HTTP_TIMEOUT", "12.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE", "/tmp/wigle.log")
    monkeypatch.setenv("WEB_PORT", "9000")

    assert get_settings() == Settings(
        wigle_api_key="abc",
        http_timeout=12.5,
        log_level="DEBUG",
        log_file="/tmp/wigle.log",
        web_port=9000,
    )


def test_empty_api_key_is_unset(monkeypatch):
    monkeypatch.setenv("WIGLE_API_KEY", "")
    assert get_settings().wigle_api_key is None


def test_setup_logger_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "nodes.log"
    logger = setup_logger("wigle_nodes.test_file", str(log_file), "DEBUG")
    try:
        logger.debug("hello %s", "world")
        for h in logger.handlers:
            h.flush()
        assert "[DEBUG] hello world" in log_file.read_text()
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)


def test_setup_logger_is_idempotent():
    logger = setup_logger("wigle_nodes.test_idempotent")
    try:
        assert setup_logger("wigle_nodes.test_idempotent") is logger
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
