import logging

import pytest

from app.main import create_app
from app.platform.config import Settings
from app.platform.logger import LOG_FILE_NAME, configure_logging, get_log_dir, get_logger


@pytest.fixture(autouse=True)
def restore_log_dir():
    original = get_log_dir()
    yield
    configure_logging(original)


def flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_configured_directory_receives_log_lines(tmp_path):
    configure_logging(tmp_path / "custom")
    logger = get_logger("test_logger.custom")

    logger.info("entry created")
    flush(logger)

    assert "entry created" in (tmp_path / "custom" / LOG_FILE_NAME).read_text()


def test_existing_loggers_follow_reconfiguration(tmp_path):
    logger = get_logger("test_logger.early")
    configure_logging(tmp_path / "moved")

    logger.info("after the move")
    flush(logger)

    assert "after the move" in (tmp_path / "moved" / LOG_FILE_NAME).read_text()


def test_create_app_applies_log_dir_setting(tmp_path):
    settings = Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'waitlist.db'}",
        LOG_DIR=str(tmp_path / "app-logs"),
        _env_file=None,
    )

    create_app(settings)

    assert get_log_dir() == (tmp_path / "app-logs").resolve()
    assert (tmp_path / "app-logs" / LOG_FILE_NAME).exists()
