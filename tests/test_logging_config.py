"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from dossier.logging_config import get_logger, setup_logging


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(quiet=True).level == logging.ERROR
        assert setup_logging().level == logging.WARNING

    def test_rich_handler_without_markup(self):
        setup_logging()
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert handlers[0].markup is False

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        setup_logging(verbose=True)
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "dossier.log"
        logger = setup_logging(verbose=True, log_file=str(log_file))
        logger.debug("resolved [app.Widget]")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "resolved [app.Widget]" in log_file.read_text()


class TestGetLogger:
    def test_namespace(self):
        assert get_logger().name == "dossier"
        assert get_logger("layout.paths").name == "dossier.layout.paths"
        assert get_logger("dossier.loader").name == "dossier.loader"
