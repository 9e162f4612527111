"""On-call rotation scheduler built on OR-Tools CP-SAT."""
from oncall.models import Calendar, HolidayWindow, OnCallSchedule, Person, Role, SchedulerConfig, TimeOff
from oncall.solver import (
    InvalidConfiguration,
    SchedulingError,
    SchedulingInfeasible,
    SolveInconclusive,
    StaticHistory,
    UnsatisfiableRoster,
    schedule_rotation,
)

__version__ = "0.1.0"

__all__ = [
    "schedule_rotation",
    "Person",
    "Role",
    "SchedulerConfig",
    "Calendar",
    "TimeOff",
    "HolidayWindow",
    "OnCallSchedule",
    "StaticHistory",
    "SchedulingError",
    "InvalidConfiguration",
    "UnsatisfiableRoster",
    "SchedulingInfeasible",
    "SolveInconclusive",
]
