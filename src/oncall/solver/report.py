"""Extraction and rendering of solved assignments."""
from typing import List

from ortools.sat.python import cp_model

from oncall.models.role import ROLES
from oncall.models.schedule import OnCallSchedule, RoleAssignment
from oncall.solver.lattice import ShiftLattice
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.report")


def extract_assignments(solver: cp_model.CpSolver, lattice: ShiftLattice) -> List[RoleAssignment]:
    """
    Read the assignee of every future (period, role), periods in order.

    Only call after a solve that returned OPTIMAL or FEASIBLE.
    """
    assignments = []
    for s in lattice.future_periods:
        for role in ROLES:
            for p_idx, person in enumerate(lattice.people):
                if solver.BooleanValue(lattice.var(s, p_idx, role)):
                    assignments.append(RoleAssignment(period=s, role=role, person_name=person.name))
    return assignments


def format_report(schedule: OnCallSchedule) -> List[str]:
    """One line per assignment, grouped by role like a duty sheet."""
    lines = []
    for role in ROLES:
        for a in schedule.assignments:
            if a.role == role:
                lines.append(f"{role.label} shift #{a.period} for: {a.person_name}")
    return lines


def log_report(schedule: OnCallSchedule) -> None:
    """Write the report lines to the log."""
    for line in format_report(schedule):
        logger.info(line)
