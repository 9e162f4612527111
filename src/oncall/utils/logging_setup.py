"""
Scheduler Logging
=================
Console and rotating-file handlers for the `oncall` logger tree.

Levels:
    TRACE (5): History seeds and per-variable details
    DEBUG (10): Fairness band, variable counts, solver response
    INFO (20): Model-building phases, solve outcome
    WARNING (30): Skipped or clipped calendar entries, failed validation
    ERROR (40): Infeasibility reasons
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER = "oncall"
CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints each level when writing to a terminal."""

    PALETTE = {
        TRACE: "90",
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def format(self, record):
        text = super().format(record)
        code = self.PALETTE.get(record.levelno)
        if code is None or not sys.stderr.isatty():
            return text
        return f"\033[{code}m{text}\033[0m"


def _parse_level(name: str) -> int:
    """Resolve a level name, including TRACE, to its number."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO


def _console_handler(level: int) -> logging.Handler:
    # stderr keeps stdout free for report and JSON output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_level: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the `oncall` logger. Calling it again replaces the handlers.

    Args:
        level: Level name for the file handler, and the console if
            `console_level` is not given
        log_file: Rotating log file path (None = console only)
        console_level: Console level name
        max_bytes: File size that triggers rotation
        backup_count: Rotated files kept

    Returns:
        The `oncall` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    # Handlers do the filtering
    logger.setLevel(TRACE)
    logger.handlers.clear()

    file_level = _parse_level(level)
    cons_level = _parse_level(console_level or level)
    logger.addHandler(_console_handler(cons_level))
    if log_file:
        logger.addHandler(_file_handler(Path(log_file), file_level, max_bytes, backup_count))

    logger.debug(
        f"Logging ready: console={logging.getLevelName(cons_level)}, "
        f"file={logging.getLevelName(file_level) if log_file else 'off'}"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module under the `oncall` tree, e.g. "oncall.solver"."""
    return logging.getLogger(name)


class SolverLogger:
    """Indented phase/step logger used while the model is built."""

    def __init__(self, name: str = "oncall.solver"):
        self.logger = logging.getLogger(name)
        self.indent = 0

    def _pad(self, extra: int = 0) -> str:
        return "  " * (self.indent + extra)

    def phase(self, name: str):
        self.logger.info(f"{'=' * 20} {name} {'=' * 20}")

    def step(self, description: str):
        self.logger.info(f"{self._pad()}▸ {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"{self._pad(1)}{key}: {value}")

    def trace(self, message: str):
        self.logger.log(TRACE, f"{self._pad(2)}{message}")

    def enter(self, context: str):
        """Open a nested block; details logged until `exit` are indented."""
        self.logger.debug(f"{self._pad()}┌─ {context}")
        self.indent += 1

    def exit(self, context: str = ""):
        self.indent = max(0, self.indent - 1)
        if context:
            self.logger.debug(f"{self._pad()}└─ {context}")
