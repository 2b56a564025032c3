import logging

from rich.logging import RichHandler

from pathexclude.config import LoggingConfig
from pathexclude.logging_setup import configure_logging, init_logging


def test_init_logging_installs_rich_and_file_handlers(tmp_path, restore_root_logger):
    logfile = tmp_path / "logs" / "pathexclude.log"
    init_logging("debug", logfile)
    root_logger = restore_root_logger
    assert root_logger.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in root_logger.handlers)
    assert any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
    logging.getLogger("pathexclude.test").info("hello file")
    for handler in root_logger.handlers:
        handler.flush()
    assert "hello file" in logfile.read_text(encoding="utf-8")


def test_init_logging_falls_back_to_info(restore_root_logger):
    init_logging("verbose")
    assert restore_root_logger.level == logging.INFO
    assert not any(isinstance(h, logging.FileHandler) for h in restore_root_logger.handlers)


def test_init_logging_accepts_numeric_level(restore_root_logger):
    init_logging(logging.WARNING)
    assert restore_root_logger.level == logging.WARNING


def test_configure_logging_uses_settings_section(tmp_path, restore_root_logger):
    logfile = tmp_path / "pathexclude.log"
    configure_logging(LoggingConfig(level="error", file=logfile))
    assert restore_root_logger.level == logging.ERROR
    assert logfile.exists()
