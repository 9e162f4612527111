# oncall/solver - OR-Tools CP-SAT on-call scheduling
from .base import SolverStatus
from .engine import schedule_rotation, validate_inputs
from .errors import (
    InvalidConfiguration,
    ModelInvalid,
    SchedulingError,
    SchedulingInfeasible,
    SolveInconclusive,
    UnsatisfiableRoster,
)
from .history import AssignmentLogHistory, HistoryProvider, StaticHistory, append_schedule
from .lattice import ShiftLattice
from .report import extract_assignments, format_report
from .roster import filter_available
from .validation import ValidationResult, validate_schedule

__all__ = [
    "schedule_rotation",
    "validate_inputs",
    "SolverStatus",
    "SchedulingError",
    "InvalidConfiguration",
    "UnsatisfiableRoster",
    "SchedulingInfeasible",
    "SolveInconclusive",
    "ModelInvalid",
    "HistoryProvider",
    "StaticHistory",
    "AssignmentLogHistory",
    "append_schedule",
    "ShiftLattice",
    "filter_available",
    "extract_assignments",
    "format_report",
    "validate_schedule",
    "ValidationResult",
]
