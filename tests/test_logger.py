from loguru import logger

from core.config import Settings
from core.utils import setup_logger


def test_file_sink_receives_messages(tmp_path):
    log_file = tmp_path / "logs" / "app.log"

    setup_logger("INFO", str(log_file))
    logger.debug("hidden below level")
    logger.info("hello file")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "hello file" in text
    assert "hidden below level" not in text
    assert "| INFO     |" in text


def test_console_only_without_log_file(tmp_path):
    setup_logger("DEBUG")
    logger.info("console only")
    logger.remove()

    assert list(tmp_path.iterdir()) == []


def test_rotation_defaults():
    settings = Settings(_env_file=None)

    assert settings.LOG_ROTATION == "10 MB"
    assert settings.LOG_RETENTION == "7 days"
