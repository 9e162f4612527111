"""
Solver Status
=============
Maps CP-SAT response codes onto the statuses the scheduler reports.
"""
from enum import Enum

from ortools.sat.python import cp_model


class SolverStatus(Enum):
    """Status of solver execution."""
    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"
    ERROR = "error"
    UNKNOWN = "unknown"

    @property
    def is_success(self) -> bool:
        """True if solver found a usable solution."""
        return self in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE)

    @classmethod
    def from_cp_status(cls, status: int, wall_time: float, time_limit: float) -> "SolverStatus":
        """
        Translate a CP-SAT status code.

        CP-SAT reports UNKNOWN both when it runs out of time and when it
        stops for another reason; the elapsed wall time tells them apart.
        """
        if status == cp_model.OPTIMAL:
            return cls.OPTIMAL
        if status == cp_model.FEASIBLE:
            return cls.FEASIBLE
        if status == cp_model.INFEASIBLE:
            return cls.INFEASIBLE
        if status == cp_model.MODEL_INVALID:
            return cls.ERROR
        if wall_time >= time_limit:
            return cls.TIMEOUT
        return cls.UNKNOWN
