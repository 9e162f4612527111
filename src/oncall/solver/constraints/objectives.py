"""
Objective Builders for CP-SAT Solver
====================================
Soft constraints and assignment costs. Every builder appends
`(expression, weight)` terms to a shared list that becomes the minimized
objective.
"""
from dataclasses import dataclass
from typing import List, Tuple, Union

from ortools.sat.python import cp_model

from oncall.models.constraints import Calendar, SchedulerConfig
from oncall.models.role import ROLES
from oncall.models.schedule import FairnessTargets
from oncall.solver.lattice import ShiftLattice
from oncall.utils.logging_setup import SolverLogger

slog = SolverLogger("oncall.solver.objectives")


# Type aliases
LinearTerm = Union[cp_model.LinearExpr, cp_model.IntVar, int]
ObjectiveTerms = List[Tuple[LinearTerm, int]]


@dataclass
class SlackPair:
    """Surplus and deficit attached to one soft inequality."""
    surplus: cp_model.IntVar
    deficit: cp_model.IntVar


def _new_slack_pair(model: cp_model.CpModel, slack_max: int, name: str) -> SlackPair:
    return SlackPair(
        surplus=model.NewIntVar(0, slack_max, f"{name}_surplus"),
        deficit=model.NewIntVar(0, slack_max, f"{name}_deficit"),
    )


def _penalize(slack: SlackPair, objective_terms: ObjectiveTerms) -> None:
    objective_terms.append((slack.surplus, 1))
    objective_terms.append((slack.deficit, 1))


def soft_lower_bound(
    model: cp_model.CpModel,
    value: LinearTerm,
    target: int,
    slack_max: int,
    objective_terms: ObjectiveTerms,
    name: str,
) -> SlackPair:
    """
    Softly enforce `target <= value`.

    Adds `target <= value + surplus - deficit` as a hard constraint, so
    feasibility never depends on it, and penalizes both slacks.
    """
    slack = _new_slack_pair(model, slack_max, name)
    model.Add(target <= value + slack.surplus - slack.deficit)
    _penalize(slack, objective_terms)
    return slack


def soft_upper_bound(
    model: cp_model.CpModel,
    value: LinearTerm,
    target: int,
    slack_max: int,
    objective_terms: ObjectiveTerms,
    name: str,
) -> SlackPair:
    """
    Softly enforce `value <= target`.

    Adds `value + surplus - deficit <= target` as a hard constraint. Only the
    deficit loosens the bound; it absorbs any excess above `target`, up to
    `slack_max`, at a penalty.
    """
    slack = _new_slack_pair(model, slack_max, name)
    model.Add(value + slack.surplus - slack.deficit <= target)
    _penalize(slack, objective_terms)
    return slack


def add_fairness_objective(
    model: cp_model.CpModel,
    lattice: ShiftLattice,
    targets: FairnessTargets,
    objective_terms: ObjectiveTerms,
    upper_slack_multiplier: int = 2,
) -> None:
    """
    Keep each person's per-role total, history included, inside the band.

    Four soft bounds per person: lower and upper, for Primary and Secondary.
    """
    slog.step(f"Soft: Fairness band [{targets.min_target}, {targets.max_target}]")
    upper_slack = upper_slack_multiplier * targets.max_target

    for p_idx, person in enumerate(lattice.people):
        for role in ROLES:
            total = sum(lattice.person_series(p_idx, role))
            soft_lower_bound(
                model, total, targets.min_target, targets.min_target,
                objective_terms, f"min_{role.value}_{person.name}",
            )
            soft_upper_bound(
                model, total, targets.max_target, upper_slack,
                objective_terms, f"max_{role.value}_{person.name}",
            )


def assignment_weight(
    location: str,
    offset: int,
    calendar: Calendar,
    config: SchedulerConfig,
) -> int:
    """Cost of one assignment at a future offset for someone at `location`."""
    if calendar.is_holiday(location, offset):
        return config.holiday_weight
    return config.base_weight


def add_assignment_costs(
    lattice: ShiftLattice,
    calendar: Calendar,
    config: SchedulerConfig,
    objective_terms: ObjectiveTerms,
) -> int:
    """
    Weight every future assignment, raising the cost during location holidays.

    Returns:
        Number of (period, person) cells carrying the holiday weight
    """
    slog.step("Soft: Assignment costs and location holidays")
    holiday_cells = 0

    for s in lattice.future_periods:
        offset = s - lattice.lookback
        for p_idx, person in enumerate(lattice.people):
            weight = assignment_weight(person.location, offset, calendar, config)
            if weight != config.base_weight:
                holiday_cells += 1
            for role in ROLES:
                objective_terms.append((lattice.var(s, p_idx, role), weight))

    if holiday_cells:
        slog.detail("holiday-weighted cells", holiday_cells)
    return holiday_cells
