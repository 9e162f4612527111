"""
History Providers
=================
Answer who held which role in the lookback periods of a run.

Lookback indices are relative: index 0 is the oldest committed period the
run anchors against and `lookback - 1` the most recent one.

Implementations:
    StaticHistory: fixed lookup, used by tests and demos.
    AssignmentLogHistory: backed by a persisted CSV log of committed
        rotations (columns `period,role,name`, absolute period numbers).
"""
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Set, Tuple, Union

import pandas as pd

from oncall.models.person import Person
from oncall.models.role import Role
from oncall.models.schedule import OnCallSchedule
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.history")

LOG_COLUMNS = ["period", "role", "name"]


class HistoryProvider(Protocol):
    """Answers whether a person held a role in a lookback period."""

    def was_primary(self, period: int, person: Person) -> bool:
        ...

    def was_secondary(self, period: int, person: Person) -> bool:
        ...


class StaticHistory:
    """
    History from an in-memory lookup.

    Example:
        StaticHistory(primary={0: {"alice"}}, secondary={0: {"bob"}})
    """

    def __init__(
        self,
        primary: Optional[Dict[int, Set[str]]] = None,
        secondary: Optional[Dict[int, Set[str]]] = None,
    ):
        self.primary = {k: set(v) for k, v in (primary or {}).items()}
        self.secondary = {k: set(v) for k, v in (secondary or {}).items()}

    def was_primary(self, period: int, person: Person) -> bool:
        return person.name in self.primary.get(period, set())

    def was_secondary(self, period: int, person: Person) -> bool:
        return person.name in self.secondary.get(period, set())


class AssignmentLogHistory:
    """History read from the last `lookback` periods of an assignment log."""

    def __init__(self, log: pd.DataFrame, lookback: int):
        self.lookback = lookback
        self._held: Set[Tuple[int, Role, str]] = set()

        periods = sorted(log["period"].unique()) if not log.empty else []
        window = periods[-lookback:] if lookback > 0 else []
        # Missing older periods are padded at the front and read as empty
        offset = lookback - len(window)
        index_of = {int(p): offset + i for i, p in enumerate(window)}
        self.window: List[int] = [int(p) for p in window]

        for row in log.itertuples(index=False):
            idx = index_of.get(int(row.period))
            if idx is None:
                continue
            self._held.add((idx, Role.from_string(row.role), str(row.name)))

        logger.debug(f"History window {self.window} -> indices {offset}..{lookback - 1}")

    @classmethod
    def from_csv(cls, path: Union[str, Path], lookback: int) -> "AssignmentLogHistory":
        return cls(load_assignment_log(path), lookback)

    def was_primary(self, period: int, person: Person) -> bool:
        return (period, Role.PRIMARY, person.name) in self._held

    def was_secondary(self, period: int, person: Person) -> bool:
        return (period, Role.SECONDARY, person.name) in self._held


def load_assignment_log(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load an assignment log, or an empty one if the file does not exist.

    Raises:
        ValueError: a required column is missing.
    """
    path = Path(path)
    if not path.exists():
        return pd.DataFrame(columns=LOG_COLUMNS)

    df = pd.read_csv(path)
    missing = [c for c in LOG_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Assignment log {path} is missing columns: {missing}")
    df["period"] = df["period"].astype(int)
    df["name"] = df["name"].astype(str).str.strip()
    return df[LOG_COLUMNS]


def schedule_to_log_rows(schedule: OnCallSchedule, first_period: int) -> List[Dict]:
    """Rows for a schedule's future periods, numbered from `first_period`."""
    return [
        {
            "period": first_period + (a.period - schedule.lookback),
            "role": a.role.value,
            "name": a.person_name,
        }
        for a in schedule.assignments
    ]


def append_schedule(path: Union[str, Path], schedule: OnCallSchedule) -> int:
    """
    Commit a solved schedule to the assignment log.

    The schedule's first future period is numbered right after the last
    period already in the log, so the next run's lookback reads it back.

    Returns:
        Absolute period number given to the schedule's first future period.
    """
    log = load_assignment_log(path)
    first_period = int(log["period"].max()) + 1 if not log.empty else 0

    rows = schedule_to_log_rows(schedule, first_period)
    new_rows = pd.DataFrame(rows, columns=LOG_COLUMNS)
    updated = pd.concat([log, new_rows], ignore_index=True) if not log.empty else new_rows
    updated.to_csv(path, index=False)

    logger.info(f"Committed {len(rows)} assignments to {path} from period {first_period}")
    return first_period
