"""Tests for the Loguru logging setup."""

import json

import pytest

from dagweave.core import logging as dagweave_logging
from dagweave.core.logging import configure_logging, get_logger, reset_logging


@pytest.fixture(autouse=True)
def _reset_sinks():
    reset_logging()
    yield
    reset_logging()


class TestConfigureLogging:
    """Test sink installation."""

    def test_installs_one_sink(self):
        """Test a single stderr sink is installed."""
        configure_logging(level="DEBUG", format="console")
        assert len(dagweave_logging._HANDLER_IDS) == 1

    def test_same_configuration_is_a_noop(self):
        """Test repeated calls keep the same sink."""
        configure_logging(level="INFO", format="structured")
        handler_ids = list(dagweave_logging._HANDLER_IDS)
        configure_logging(level="INFO", format="structured")
        assert dagweave_logging._HANDLER_IDS == handler_ids

    def test_force_reconfigure(self):
        """Test forcing replaces the sink."""
        configure_logging(level="INFO", format="console")
        handler_ids = list(dagweave_logging._HANDLER_IDS)
        configure_logging(level="INFO", format="console", force_reconfigure=True)
        assert dagweave_logging._HANDLER_IDS != handler_ids

    @pytest.mark.parametrize("log_format", ["console", "json", "structured", "rich"])
    def test_every_format(self, log_format):
        """Test each output format can be configured."""
        configure_logging(level="WARNING", format=log_format)
        assert dagweave_logging._CURRENT_CONFIG["format"] == log_format

    def test_output_file_receives_json(self, tmp_path):
        """Test the optional file sink writes serialized records."""
        log_file = tmp_path / "logs" / "dagweave.log"
        configure_logging(level="INFO", format="console", output_file=log_file)

        get_logger("tests.logging").info("Loaded graph", vertices=3)
        reset_logging()

        lines = log_file.read_text().splitlines()
        record = json.loads(lines[-1])["record"]
        assert record["message"] == "Loaded graph"
        assert record["extra"]["vertices"] == 3
        assert record["extra"]["module"] == "tests.logging"


class TestGetLogger:
    """Test logger lookup."""

    def test_logger_is_cached(self):
        """Test the same name gives the same bound logger."""
        assert get_logger("tests.cached") is get_logger("tests.cached")

    def test_bound_module(self, log_records):
        """Test records carry the logger name."""
        get_logger("tests.bound").warning("hello")
        assert log_records[-1]["extra"]["module"] == "tests.bound"
        assert log_records[-1]["message"] == "hello"
