# oncall/models - Data models for the on-call scheduler
from .constraints import Calendar, HolidayWindow, SchedulerConfig, TimeOff
from .person import Person
from .role import ROLES, Role
from .schedule import FairnessTargets, OnCallSchedule, RoleAssignment

__all__ = [
    "Person",
    "Role", "ROLES",
    "OnCallSchedule", "RoleAssignment", "FairnessTargets",
    "SchedulerConfig", "Calendar", "TimeOff", "HolidayWindow",
]
