"""Tests for logging infrastructure."""
import json
import logging
import sys
import tempfile
from pathlib import Path

import structlog
from structlog.testing import LogCapture

from oncall.utils.logging_setup import TRACE, SolverLogger, get_logger, setup_logging
from oncall.utils.structured_logging import (
    bind_context,
    clear_context,
    configure_structlog,
    get_structured_logger,
)


class TestLoggingSetup:
    """Tests for logging configuration."""

    def test_setup_logging_creates_logger(self):
        """Test that setup_logging returns a logger."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "test.log"
            logger = setup_logging(level="DEBUG", log_file=str(log_file))

            assert logger.name == "oncall"
            assert len(logger.handlers) == 2  # Console + file
            for handler in logger.handlers:
                handler.close()

    def test_setup_logging_creates_log_file(self):
        """Test that log file is created."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "logs" / "test.log"
            logger = setup_logging(level="DEBUG", log_file=str(log_file))
            logger.info("Test message")

            assert log_file.exists()
            for handler in logger.handlers:
                handler.close()

    def test_setup_logging_no_file(self):
        """Test logging without file output."""
        logger = setup_logging(level="INFO", log_file=None)
        assert len(logger.handlers) == 1  # Console only

    def test_console_writes_to_stderr(self):
        logger = setup_logging(level="INFO")
        assert logger.handlers[0].stream is sys.stderr

    def test_trace_level_name_accepted(self):
        logger = setup_logging(level="TRACE")
        assert logger.handlers[0].level == TRACE

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging(level="LOUD")
        assert logger.handlers[0].level == logging.INFO

    def test_trace_level(self):
        """Test custom TRACE level exists."""
        assert TRACE == 5
        assert logging.getLevelName(TRACE) == "TRACE"

    def test_get_logger(self):
        assert get_logger("oncall.solver").name == "oncall.solver"


class TestSolverLogger:
    """Tests for SolverLogger class."""

    def test_phase_logging(self, caplog):
        slog = SolverLogger("test.solver")
        with caplog.at_level(logging.INFO):
            slog.phase("Building Model")
        assert "Building Model" in caplog.text
        assert "=" in caplog.text

    def test_step_logging(self, caplog):
        slog = SolverLogger("test.solver")
        with caplog.at_level(logging.INFO):
            slog.step("Adding constraints")
        assert "▸" in caplog.text
        assert "Adding constraints" in caplog.text

    def test_nested_context(self, caplog):
        slog = SolverLogger("test.solver")
        with caplog.at_level(logging.DEBUG):
            slog.enter("Period 1")
            slog.detail("candidates", 3)
            slog.exit("Period 1 done")
        assert "┌─" in caplog.text
        assert "└─" in caplog.text
        assert slog.indent == 0

    def test_trace_hidden_at_debug(self, caplog):
        slog = SolverLogger("test.solver")
        with caplog.at_level(logging.DEBUG):
            slog.trace("per-variable detail")
        assert "per-variable detail" not in caplog.text


class TestStructuredLogging:

    def teardown_method(self):
        clear_context()
        structlog.reset_defaults()

    def test_bound_context_in_events(self):
        capture = LogCapture()
        structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
        bind_context(run_id="abc123")
        get_structured_logger("oncall.test").info("solve_started", people=4)

        assert capture.entries[0]["event"] == "solve_started"
        assert capture.entries[0]["run_id"] == "abc123"
        assert capture.entries[0]["people"] == 4

    def test_level_filter(self, capsys):
        configure_structlog(json_output=True, level=logging.WARNING)
        log = get_structured_logger("oncall.test")
        log.info("solve_started")
        log.warning("solve_slow", seconds=12)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "solve_started" not in captured.err
        assert json.loads(captured.err.strip())["event"] == "solve_slow"

    def test_clear_context(self):
        bind_context(run_id="abc123")
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_unconfigured_events_go_through_stdlib(self, caplog):
        bind_context(run_id="abc123")
        with caplog.at_level(logging.INFO, logger="oncall.solver"):
            get_structured_logger("oncall.solver").info("solve_started", people=4)

        record = caplog.records[0]
        assert record.name == "oncall.solver"
        assert record.getMessage().startswith("event='solve_started'")
        assert "run_id='abc123'" in record.getMessage()
