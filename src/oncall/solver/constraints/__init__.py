"""
Constraint Builders for CP-SAT Solver
=====================================
Hard constraints over the shift lattice. Each builder takes the model and
the lattice and adds constraints for every future period; history periods
are fixed and only appear as operands.
"""
from typing import List

from ortools.sat.python import cp_model

from oncall.models.constraints import Calendar
from oncall.models.role import ROLES, Role
from oncall.solver.lattice import ShiftLattice
from oncall.utils.logging_setup import SolverLogger

slog = SolverLogger("oncall.solver.constraints")


def add_role_exclusivity(model: cp_model.CpModel, lattice: ShiftLattice) -> None:
    """Add constraint: nobody is Primary and Secondary in the same period."""
    slog.step("Constraint: Primary and Secondary are exclusive")
    for s in lattice.future_periods:
        for p_idx in range(len(lattice.people)):
            model.Add(
                lattice.var(s, p_idx, Role.PRIMARY) + lattice.var(s, p_idx, Role.SECONDARY) <= 1
            )


def add_anti_consecutive(model: cp_model.CpModel, lattice: ShiftLattice) -> None:
    """
    Add constraint: nobody holds the same role back to back.

    Applies from the first future period on, so the last history period
    constrains the first future one.
    """
    slog.step("Constraint: No back-to-back role")
    for s in lattice.future_periods:
        if s < 1:
            continue
        for p_idx in range(len(lattice.people)):
            for role in ROLES:
                model.Add(lattice.var(s, p_idx, role) + lattice.var(s - 1, p_idx, role) <= 1)


def add_full_coverage(model: cp_model.CpModel, lattice: ShiftLattice) -> None:
    """Add constraint: exactly one Primary and one Secondary per period."""
    slog.step("Constraint: Every period has one Primary and one Secondary")
    for s in lattice.future_periods:
        for role in ROLES:
            model.Add(sum(lattice.period_vars(s, role)) == 1)


def add_time_off_constraints(
    model: cp_model.CpModel,
    lattice: ShiftLattice,
    calendar: Calendar,
) -> List[str]:
    """
    Add constraint: people on time off hold no role in those periods.

    Offsets are relative to the first future period. Entries for people
    outside the available roster, or offsets outside the horizon, are
    skipped.

    Returns:
        Names of the time-off entries that were skipped
    """
    if not calendar.time_off:
        return []

    slog.step(f"Constraint: Time off ({len(calendar.time_off)} entries)")
    skipped = []
    names = [p.name for p in lattice.people]

    for entry in calendar.time_off:
        if entry.person_name not in names:
            slog.logger.warning(f"Time off for {entry.person_name!r} ignored: not in the available roster")
            skipped.append(entry.person_name)
            continue

        p_idx = names.index(entry.person_name)
        offsets = [o for o in range(entry.start, entry.end) if 0 <= o < lattice.horizon]
        if len(offsets) < entry.end - entry.start:
            slog.logger.warning(
                f"Time off for {entry.person_name!r} [{entry.start}, {entry.end}) "
                f"clipped to the {lattice.horizon}-period horizon"
            )
        for offset in offsets:
            s = lattice.lookback + offset
            for role in ROLES:
                model.Add(lattice.var(s, p_idx, role) == 0)

    return skipped
