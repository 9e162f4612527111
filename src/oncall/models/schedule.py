"""Schedule and assignment models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from .role import ROLES, Role


@dataclass(frozen=True)
class FairnessTargets:
    """Per-person band for each role's total over the whole window."""
    min_target: int
    max_target: int

    @classmethod
    def for_window(cls, total_periods: int, people_count: int) -> "FairnessTargets":
        """Band for `total_periods` shared between `people_count` people."""
        min_target = total_periods // people_count
        if total_periods % people_count == 0:
            max_target = min_target
        else:
            max_target = min_target + 1
        return cls(min_target=min_target, max_target=max_target)

    def contains(self, count: int) -> bool:
        return self.min_target <= count <= self.max_target

    def deviation(self, count: int) -> int:
        """Distance from the band (0 inside it)."""
        if count < self.min_target:
            return self.min_target - count
        if count > self.max_target:
            return count - self.max_target
        return 0


@dataclass(frozen=True)
class RoleAssignment:
    """A single (period, role) assignment."""
    period: int
    role: Role
    person_name: str

    def __post_init__(self):
        if isinstance(self.role, str) and not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role.from_string(self.role))

    def __repr__(self):
        return f"#{self.period} {self.role.label}: {self.person_name}"


@dataclass
class OnCallSchedule:
    """Solved on-call schedule for the future periods of a window."""

    assignments: List[RoleAssignment] = field(default_factory=list)
    horizon: int = 0
    lookback: int = 0
    people: List[str] = field(default_factory=list)  # Variable order (post-shuffle)

    # Solver diagnostics
    status: str = "unknown"  # optimal, feasible
    objective: float = 0.0
    solve_time_seconds: float = 0.0
    targets: Optional[FairnessTargets] = None

    # Totals over the whole window, history included: name -> role value -> count
    person_totals: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def future_periods(self) -> range:
        return range(self.lookback, self.lookback + self.horizon)

    def get_assignee(self, period: int, role: Role) -> Optional[str]:
        """Name of the person holding `role` in `period`."""
        for a in self.assignments:
            if a.period == period and a.role == role:
                return a.person_name
        return None

    def get_person_assignments(self, name: str) -> List[RoleAssignment]:
        """All future assignments of a person."""
        return [a for a in self.assignments if a.person_name == name]

    def count_roles(self, name: str, role: Role) -> int:
        """Future periods in which `name` holds `role`."""
        return sum(1 for a in self.assignments if a.person_name == name and a.role == role)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert assignments to a DataFrame."""
        if not self.assignments:
            return pd.DataFrame(columns=["period", "role", "name"])

        rows = [
            {"period": a.period, "role": a.role.value, "name": a.person_name}
            for a in self.assignments
        ]
        return pd.DataFrame(rows)

    def to_matrix(self) -> pd.DataFrame:
        """Period × role matrix of assignee names."""
        df = self.to_dataframe()
        if df.empty:
            return pd.DataFrame()
        piv = df.pivot(index="period", columns="role", values="name")
        return piv.reindex(columns=[r.value for r in ROLES])

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "horizon": self.horizon,
            "lookback": self.lookback,
            "people": len(self.people),
            "status": self.status,
            "objective": self.objective,
            "solve_time": round(self.solve_time_seconds, 2),
            "min_target": self.targets.min_target if self.targets else None,
            "max_target": self.targets.max_target if self.targets else None,
        }
