"""
Tests for logging setup.
"""

import logging

from elide_bridge.core.observability.logging_config import parse_level, setup_logging


class TestParseLevel:
    def test_known(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("ERROR") == logging.ERROR

    def test_unknown_is_warning(self):
        assert parse_level("chatty") == logging.WARNING
        assert parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_console_only(self, restore_logging):
        setup_logging("INFO")
        assert restore_logging.level == logging.INFO
        assert len(restore_logging.handlers) == 1

    def test_replaces_existing_handlers(self, restore_logging):
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(restore_logging.handlers) == 1

    def test_file_handler_gets_detail(self, restore_logging, tmp_path):
        log_file = tmp_path / "bridge.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert restore_logging.level == logging.DEBUG

        logging.getLogger("elide_bridge.test").debug("Using Elide %s", "1.2.3")
        for handler in restore_logging.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "Using Elide 1.2.3" in text
        assert "elide_bridge.test" in text

    def test_file_level_defaults_to_console(self, restore_logging, tmp_path):
        log_file = tmp_path / "bridge.log"
        setup_logging("ERROR", log_file=str(log_file))
        logging.getLogger("elide_bridge.test").warning("quiet please")
        for handler in restore_logging.handlers:
            handler.flush()
        assert "quiet please" not in log_file.read_text()
