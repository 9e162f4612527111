"""
Scheduling Errors
=================
Typed failures of a scheduling run. Configuration and roster errors are
raised before the model is built; the others map a non-usable solver status.
"""
from typing import List, Optional

from oncall.solver.base import SolverStatus


class SchedulingError(Exception):
    """Base class for every scheduling failure."""

    status: Optional[SolverStatus] = None


class InvalidConfiguration(SchedulingError):
    """Horizon, lookback, roster or calendar is malformed."""


class UnsatisfiableRoster(SchedulingError):
    """Fewer than two people remain available after filtering."""

    def __init__(self, available: int, required: int = 2):
        self.available = available
        self.required = required
        super().__init__(
            f"Need at least {required} available people to fill Primary and Secondary, got {available}"
        )


class SchedulingInfeasible(SchedulingError):
    """The solver proved that the hard constraints cannot all hold."""

    status = SolverStatus.INFEASIBLE

    def __init__(self, reasons: List[str]):
        self.reasons = list(reasons)
        if self.reasons:
            detail = "; ".join(self.reasons)
        else:
            detail = "no structural cause found, check time-off and history against anti-consecutive rules"
        super().__init__(f"Schedule is infeasible: {detail}")


class SolveInconclusive(SchedulingError):
    """The solver stopped without a solution or a proof of infeasibility."""

    def __init__(self, status: SolverStatus, time_limit_seconds: float):
        self.status = status
        self.time_limit_seconds = time_limit_seconds
        super().__init__(
            f"Solver returned {status.value} within {time_limit_seconds}s; retry with a larger time limit"
        )


class ModelInvalid(SchedulingError):
    """The solver rejected the model itself."""

    status = SolverStatus.ERROR

    def __init__(self, message: str):
        super().__init__(f"Solver rejected the model: {message}")
