"""Utilities package for the on-call scheduler."""
from .logging_setup import (
    TRACE,
    SolverLogger,
    get_logger,
    setup_logging,
)
from .structured_logging import (
    bind_context,
    clear_context,
    configure_structlog,
    get_structured_logger,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "SolverLogger",
    "TRACE",
    "configure_structlog",
    "get_structured_logger",
    "bind_context",
    "clear_context",
]
