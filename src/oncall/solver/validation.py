"""
Validation
==========
Recheck a solved schedule against the rotation rules, history included.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from oncall.models.person import Person
from oncall.models.role import ROLES, Role
from oncall.models.schedule import OnCallSchedule
from oncall.solver.history import HistoryProvider, StaticHistory
from oncall.solver.stats import calculate_person_stats
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "coverage", "exclusivity", "back_to_back", "fairness"
    severity: str  # "critical", "warning"
    period: int
    message: str
    person: str = ""
    role: str = ""


@dataclass
class ValidationResult:
    """Violation counts for a schedule."""
    coverage: int = 0        # Period/role slots without exactly one assignee
    exclusivity: int = 0     # Same person Primary and Secondary in a period
    back_to_back: int = 0    # Same role in consecutive periods
    out_of_band: int = 0     # Role totals outside the fairness band

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)

    def as_dict(self) -> Dict[str, int]:
        return {
            "coverage": self.coverage,
            "exclusivity": self.exclusivity,
            "back_to_back": self.back_to_back,
            "out_of_band": self.out_of_band,
        }

    @property
    def has_critical_issues(self) -> bool:
        """Hard-rule violations (fairness deviations are only warnings)."""
        return bool(self.coverage or self.exclusivity or self.back_to_back)


def _holders(
    schedule: OnCallSchedule,
    people: Sequence[Person],
    history: HistoryProvider,
) -> Dict[Tuple[int, Role], List[str]]:
    """Who held each (period, role), history periods included."""
    holders: Dict[Tuple[int, Role], List[str]] = {}
    for i in range(schedule.lookback):
        for p in people:
            if history.was_primary(i, p):
                holders.setdefault((i, Role.PRIMARY), []).append(p.name)
            if history.was_secondary(i, p):
                holders.setdefault((i, Role.SECONDARY), []).append(p.name)
    for a in schedule.assignments:
        holders.setdefault((a.period, a.role), []).append(a.person_name)
    return holders


def validate_schedule(
    schedule: OnCallSchedule,
    people: Sequence[Person],
    history: Optional[HistoryProvider] = None,
) -> ValidationResult:
    """
    Validate a schedule and count violations.

    Args:
        schedule: The schedule to validate
        people: People the schedule was built for
        history: History used for the run (None = no committed periods)

    Returns:
        ValidationResult with all counts
    """
    history = history or StaticHistory()
    result = ValidationResult()
    holders = _holders(schedule, people, history)

    for s in schedule.future_periods:
        for role in ROLES:
            names = holders.get((s, role), [])
            if len(names) != 1:
                result.coverage += 1
                result.add_violation(Violation(
                    type="coverage", severity="critical", period=s, role=role.value,
                    message=f"{role.label} in period {s} has {len(names)} assignees",
                ))

        both = set(holders.get((s, Role.PRIMARY), [])) & set(holders.get((s, Role.SECONDARY), []))
        for name in sorted(both):
            result.exclusivity += 1
            result.add_violation(Violation(
                type="exclusivity", severity="critical", period=s, person=name,
                message=f"{name} is Primary and Secondary in period {s}",
            ))

        if s < 1:
            continue
        for role in ROLES:
            repeated = set(holders.get((s, role), [])) & set(holders.get((s - 1, role), []))
            for name in sorted(repeated):
                result.back_to_back += 1
                result.add_violation(Violation(
                    type="back_to_back", severity="critical", period=s, person=name, role=role.value,
                    message=f"{name} is {role.label} in periods {s - 1} and {s}",
                ))

    for st in calculate_person_stats(schedule, people, history):
        for role, deviation in ((Role.PRIMARY, st.primary_deviation), (Role.SECONDARY, st.secondary_deviation)):
            if deviation:
                result.out_of_band += 1
                result.add_violation(Violation(
                    type="fairness", severity="warning", period=-1, person=st.name, role=role.value,
                    message=f"{st.name} {role.value} total is {deviation} outside the fairness band",
                ))

    if result.has_critical_issues:
        logger.warning(f"Schedule validation failed: {result.as_dict()}")
    else:
        logger.debug(f"Schedule validation: {result.as_dict()}")
    return result
