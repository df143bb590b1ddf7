"""Tests for logging helpers."""

import logging

import pytest

from fintracker.utils import logging_utils
from fintracker.utils.logging_utils import configure_logging, log_operation

logger = logging.getLogger("fintracker.tests.logging")


class TestConfigureLogging:
    @pytest.fixture
    def basic_config(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging_utils.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    def test_defaults_to_warning(self, basic_config):
        configure_logging()

        assert basic_config[0]["level"] == logging.WARNING
        assert basic_config[0]["force"] is True

    def test_accepts_names_in_any_case(self, basic_config):
        configure_logging("debug")

        assert basic_config[0]["level"] == logging.DEBUG

    def test_accepts_numbers(self, basic_config):
        configure_logging(logging.INFO)

        assert basic_config[0]["level"] == logging.INFO

    def test_unknown_level(self, basic_config):
        with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
            configure_logging("LOUD")
        assert basic_config == []


class TestLogOperation:
    def test_logs_start_and_completion(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=logger.name):
            with log_operation(logger, "create_transaction", amount=10):
                pass

        assert "Starting operation: create_transaction with parameters: amount=10" in caplog.text
        assert "Completed operation: create_transaction" in caplog.text

    def test_logs_and_reraises_failure(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=logger.name):
            with pytest.raises(KeyError):
                with log_operation(logger, "delete_transaction"):
                    raise KeyError("gone")

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Failed operation: delete_transaction" in errors[0].getMessage()
        assert "Completed operation" not in caplog.text
