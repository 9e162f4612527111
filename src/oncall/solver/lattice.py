"""
Shift Lattice
=============
Timeline of role/person assignment variables.

    vars[period][person_idx][role]

History periods (`period < lookback`) hold named fixed constants seeded from
the HistoryProvider; future periods hold free boolean decision variables.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence

from ortools.sat.python import cp_model

from oncall.models.person import Person
from oncall.models.role import ROLES, Role
from oncall.solver.history import HistoryProvider
from oncall.utils.logging_setup import SolverLogger

slog = SolverLogger("oncall.solver.lattice")

# Type alias: period -> person index -> role -> variable
LatticeVars = List[List[Dict[Role, cp_model.IntVar]]]


def variable_name(period: int, person: Person, role: Role, history: bool) -> str:
    """Deterministic, unique name for one assignment variable."""
    prefix = "past_" if history else ""
    return f"{prefix}{role.value}_{period}_{person.name}"


@dataclass
class ShiftLattice:
    """Assignment variables for the whole window, history included."""

    people: List[Person]
    lookback: int
    horizon: int
    vars: LatticeVars

    @classmethod
    def build(
        cls,
        model: cp_model.CpModel,
        people: Sequence[Person],
        lookback: int,
        horizon: int,
        history: HistoryProvider,
    ) -> "ShiftLattice":
        """Create history constants and future decision variables."""
        people = list(people)
        table: LatticeVars = []

        # History periods are fixed to what was committed
        slog.step(f"Seeding {lookback} history periods")
        for period in range(lookback):
            slog.enter(f"history period {period}")
            row = []
            for person in people:
                held = {
                    Role.PRIMARY: history.was_primary(period, person),
                    Role.SECONDARY: history.was_secondary(period, person),
                }
                cell = {}
                for role in ROLES:
                    value = int(held[role])
                    cell[role] = model.NewIntVar(value, value, variable_name(period, person, role, True))
                    if value:
                        slog.trace(f"history: {person.name} was {role.value} in period {period}")
                row.append(cell)
            table.append(row)
            slog.exit()

        slog.step(f"Creating decision variables for {horizon} periods")
        for period in range(lookback, lookback + horizon):
            row = []
            for person in people:
                row.append({
                    role: model.NewBoolVar(variable_name(period, person, role, False))
                    for role in ROLES
                })
            table.append(row)

        slog.detail("variables", len(table) * len(people) * len(ROLES))
        return cls(people=people, lookback=lookback, horizon=horizon, vars=table)

    @property
    def total_periods(self) -> int:
        return self.lookback + self.horizon

    @property
    def future_periods(self) -> range:
        return range(self.lookback, self.total_periods)

    def is_history(self, period: int) -> bool:
        return period < self.lookback

    def var(self, period: int, person_idx: int, role: Role) -> cp_model.IntVar:
        return self.vars[period][person_idx][role]

    def period_vars(self, period: int, role: Role) -> List[cp_model.IntVar]:
        """One variable per person for `role` in `period`."""
        return [cell[role] for cell in self.vars[period]]

    def person_series(self, person_idx: int, role: Role) -> List[cp_model.IntVar]:
        """A person's `role` variable in every period, history included."""
        return [row[person_idx][role] for row in self.vars]

    def person_index(self, name: str) -> int:
        """Variable index of a person by name."""
        for idx, person in enumerate(self.people):
            if person.name == name:
                return idx
        raise KeyError(name)
