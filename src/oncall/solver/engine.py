"""
On-call Rotation Solver
=======================
Schedules a Primary and a Secondary responder per period with CP-SAT.

Key model:
- Variables: vars[period][person][role], history periods fixed from the
  HistoryProvider, future periods free booleans
- Hard: role exclusivity, no back-to-back role, full coverage, time off
- Soft: per-person role totals inside the fairness band, holiday costs
"""
import random
import time
import uuid
from typing import Optional, Sequence

from ortools.sat.python import cp_model

from oncall.models.constraints import Calendar, SchedulerConfig
from oncall.models.person import Person
from oncall.models.schedule import FairnessTargets, OnCallSchedule
from oncall.solver.base import SolverStatus
from oncall.solver.constraints import (
    add_anti_consecutive,
    add_full_coverage,
    add_role_exclusivity,
    add_time_off_constraints,
)
from oncall.solver.constraints.objectives import (
    ObjectiveTerms,
    add_assignment_costs,
    add_fairness_objective,
)
from oncall.solver.diagnosis import diagnose_infeasibility
from oncall.solver.errors import (
    InvalidConfiguration,
    ModelInvalid,
    SchedulingInfeasible,
    SolveInconclusive,
)
from oncall.solver.history import HistoryProvider, StaticHistory
from oncall.solver.lattice import ShiftLattice
from oncall.solver.report import extract_assignments, log_report
from oncall.solver.roster import filter_available
from oncall.solver.stats import calculate_person_stats, stats_to_totals
from oncall.utils.logging_setup import SolverLogger, get_logger
from oncall.utils.structured_logging import bind_context, clear_context, get_structured_logger

logger = get_logger("oncall.solver.engine")
slog = SolverLogger("oncall.solver.engine")


def validate_inputs(people: Sequence[Person], config: SchedulerConfig, calendar: Calendar) -> None:
    """
    Reject malformed inputs before any model is built.

    Raises:
        InvalidConfiguration: describing the first problem found
    """
    if config.horizon < 1:
        raise InvalidConfiguration(f"horizon must be at least 1, got {config.horizon}")
    if config.lookback < 0:
        raise InvalidConfiguration(f"lookback cannot be negative, got {config.lookback}")
    if not people:
        raise InvalidConfiguration("roster is empty")

    names = [p.name for p in people]
    if any(not n for n in names):
        raise InvalidConfiguration("every person needs a non-empty name")
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise InvalidConfiguration(f"duplicate names in roster: {duplicates}")

    if config.base_weight < 1 or config.holiday_weight < 1:
        raise InvalidConfiguration("assignment weights must be positive")
    if config.upper_slack_multiplier < 1:
        raise InvalidConfiguration("upper_slack_multiplier must be at least 1")
    if config.time_limit_seconds <= 0:
        raise InvalidConfiguration("time_limit_seconds must be positive")

    for entry in list(calendar.time_off) + list(calendar.holidays):
        if entry.start < 0 or entry.end < entry.start:
            raise InvalidConfiguration(f"invalid period range [{entry.start}, {entry.end}) in {entry}")


def _configure_solver(solver: cp_model.CpSolver, config: SchedulerConfig) -> None:
    solver.parameters.max_time_in_seconds = config.time_limit_seconds
    solver.parameters.num_search_workers = config.num_workers
    solver.parameters.log_search_progress = False
    if config.seed is not None:
        solver.parameters.random_seed = config.seed


def schedule_rotation(
    people: Sequence[Person],
    config: Optional[SchedulerConfig] = None,
    history: Optional[HistoryProvider] = None,
    calendar: Optional[Calendar] = None,
    rng: Optional[random.Random] = None,
) -> OnCallSchedule:
    """
    Build and solve the on-call model for the future periods of the window.

    Args:
        people: Full roster, out-of-office people included
        config: Window and solver configuration (defaults if None)
        history: Roles held in the lookback periods (none if None)
        calendar: Time off and location holidays (empty if None)
        rng: Random source for the roster shuffle; defaults to
            `random.Random(config.seed)`

    Returns:
        OnCallSchedule with one Primary and one Secondary per future period

    Raises:
        InvalidConfiguration: malformed window, roster or calendar
        UnsatisfiableRoster: fewer than two available people
        SchedulingInfeasible: the hard constraints cannot all hold
        SolveInconclusive: the solver stopped without an answer
        ModelInvalid: the solver rejected the model
    """
    config = config or SchedulerConfig()
    history = history or StaticHistory()
    calendar = calendar or Calendar()
    rng = rng if rng is not None else random.Random(config.seed)
    events = get_structured_logger("oncall.solver")
    start_time = time.time()

    validate_inputs(people, config, calendar)
    available = filter_available(people, rng)
    targets = FairnessTargets.for_window(config.total_periods, len(available))

    bind_context(run_id=uuid.uuid4().hex[:8])
    try:
        events.info(
            "solve_started",
            people=len(available),
            lookback=config.lookback,
            horizon=config.horizon,
        )

        slog.phase("Building On-call Model")
        logger.info(f"Scheduling: {len(available)} people, {config.lookback} lookback + {config.horizon} future periods")
        logger.info(f"min: {targets.min_target} max: {targets.max_target}")

        model = cp_model.CpModel()
        lattice = ShiftLattice.build(model, available, config.lookback, config.horizon, history)

        slog.phase("Adding Hard Constraints")
        add_role_exclusivity(model, lattice)
        add_anti_consecutive(model, lattice)
        add_full_coverage(model, lattice)
        add_time_off_constraints(model, lattice, calendar)

        slog.phase("Adding Soft Constraints")
        objective_terms: ObjectiveTerms = []
        add_fairness_objective(model, lattice, targets, objective_terms, config.upper_slack_multiplier)
        add_assignment_costs(lattice, calendar, config, objective_terms)
        model.Minimize(sum(term * weight for term, weight in objective_terms))

        slog.phase("Solving")
        solver = cp_model.CpSolver()
        _configure_solver(solver, config)
        code = solver.Solve(model)
        status = SolverStatus.from_cp_status(code, solver.WallTime(), config.time_limit_seconds)
        solve_time = time.time() - start_time

        logger.info(f"Solve complete: status={status.value}, time={solve_time:.2f}s")
        logger.debug(solver.ResponseStats())
        events.info("solve_finished", status=status.value, seconds=round(solve_time, 3))

        if status == SolverStatus.INFEASIBLE:
            reasons = diagnose_infeasibility(available, history, calendar, config)
            for reason in reasons:
                logger.error(f"Infeasible: {reason}")
            raise SchedulingInfeasible(reasons)
        if status == SolverStatus.ERROR:
            raise ModelInvalid(model.Validate() or "unknown validation error")
        if not status.is_success:
            raise SolveInconclusive(status, config.time_limit_seconds)

        slog.phase("Extracting Solution")
        schedule = OnCallSchedule(
            assignments=extract_assignments(solver, lattice),
            horizon=config.horizon,
            lookback=config.lookback,
            people=[p.name for p in available],
            status=status.value,
            objective=solver.ObjectiveValue(),
            solve_time_seconds=solve_time,
            targets=targets,
        )
        schedule.person_totals = stats_to_totals(calculate_person_stats(schedule, available, history))

        logger.info(f"Extracted {len(schedule.assignments)} assignments, objective={schedule.objective}")
        log_report(schedule)
        return schedule
    finally:
        clear_context()
