"""Pytest configuration and fixtures."""
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
import structlog

from oncall.models.constraints import SchedulerConfig
from oncall.models.person import Person
from oncall.solver.history import StaticHistory


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers and structlog config a test installed."""
    yield
    logging.getLogger("oncall").handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def sample_people():
    """Four people split over two locations."""
    return [
        Person(name="A", location="X"),
        Person(name="B", location="X"),
        Person(name="C", location="Y"),
        Person(name="D", location="Y"),
    ]


@pytest.fixture
def sample_history():
    """A was Primary and B Secondary in the single committed period."""
    return StaticHistory(primary={0: {"A"}}, secondary={0: {"B"}})


@pytest.fixture
def default_config():
    """One committed period, four future ones."""
    return SchedulerConfig(horizon=4, lookback=1, seed=7, time_limit_seconds=30)


@pytest.fixture
def roster_csv(tmp_path):
    """Roster CSV on disk with one out-of-office person."""
    path = tmp_path / "roster.csv"
    path.write_text(
        "name,location,out_of_office\n"
        "A,X,0\n"
        "B,X,0\n"
        "C,Y,0\n"
        "D,Y,0\n"
        "E,Y,1\n",
        encoding="utf-8",
    )
    return path
