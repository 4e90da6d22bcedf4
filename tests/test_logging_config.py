"""Tests for logging setup."""

import logging


class TestLogging:
    """Test setup_logging and get_logger."""

    def test_get_logger_prefix(self):
        from go_scaffold.wizard.logging_config import get_logger

        assert get_logger("materializer").name == "go_scaffold.materializer"
        assert get_logger("go_scaffold.git").name == "go_scaffold.git"

    def test_quiet_has_no_console_handler(self):
        from go_scaffold.wizard.logging_config import setup_logging

        logger = setup_logging(quiet=True)
        assert not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
                       for h in logger.handlers)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_log_file(self, tmp_path):
        from go_scaffold.wizard.logging_config import get_logger, setup_logging

        log_file = tmp_path / "logs" / "scaffold.log"
        logger = setup_logging(level=logging.DEBUG, log_file=log_file, quiet=True)
        get_logger("test").debug("hello from test")
        for handler in logger.handlers:
            handler.flush()

        assert "hello from test" in log_file.read_text()
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_debug_env(self, monkeypatch):
        from go_scaffold.wizard.logging_config import is_debug_mode, setup_logging

        monkeypatch.setenv("GO_SCAFFOLD_DEBUG", "true")
        assert is_debug_mode() is True
        assert setup_logging(quiet=True).level == logging.DEBUG

        monkeypatch.setenv("GO_SCAFFOLD_DEBUG", "0")
        assert is_debug_mode() is False
