"""
Centralized Person Statistics
==============================
Per-person role totals over the whole window (history included), used by
schedule diagnostics and the JSON export.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence

from oncall.models.person import Person
from oncall.models.role import Role
from oncall.models.schedule import FairnessTargets, OnCallSchedule
from oncall.solver.history import HistoryProvider
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.solver.stats")


@dataclass
class PersonStats:
    """Statistics for a single person."""
    name: str
    location: str
    primary: int      # Primary periods, history included
    secondary: int    # Secondary periods, history included
    primary_deviation: int    # Distance from the fairness band
    secondary_deviation: int

    @property
    def total(self) -> int:
        return self.primary + self.secondary


def calculate_person_stats(
    schedule: OnCallSchedule,
    people: Sequence[Person],
    history: HistoryProvider,
) -> List[PersonStats]:
    """
    Calculate statistics for all scheduled people.

    Args:
        schedule: The solved schedule
        people: Available people, in any order
        history: History used for the run

    Returns:
        List of PersonStats, in the order of `people`
    """
    targets = schedule.targets or FairnessTargets.for_window(
        schedule.lookback + schedule.horizon, len(people)
    )
    stats = []

    for p in people:
        past_p = sum(1 for i in range(schedule.lookback) if history.was_primary(i, p))
        past_s = sum(1 for i in range(schedule.lookback) if history.was_secondary(i, p))
        primary = past_p + schedule.count_roles(p.name, Role.PRIMARY)
        secondary = past_s + schedule.count_roles(p.name, Role.SECONDARY)

        stats.append(PersonStats(
            name=p.name,
            location=p.location,
            primary=primary,
            secondary=secondary,
            primary_deviation=targets.deviation(primary),
            secondary_deviation=targets.deviation(secondary),
        ))

    logger.debug(f"Calculated stats for {len(stats)} people over {schedule.lookback + schedule.horizon} periods")
    return stats


def stats_to_totals(stats: List[PersonStats]) -> Dict[str, Dict[str, int]]:
    """Totals keyed by name then role value, as stored on the schedule."""
    return {
        s.name: {Role.PRIMARY.value: s.primary, Role.SECONDARY.value: s.secondary}
        for s in stats
    }


def stats_to_dict_list(stats: List[PersonStats]) -> List[Dict]:
    """Convert stats to list of dicts for DataFrame or export."""
    return [
        {
            "name": s.name,
            "location": s.location,
            "primary": s.primary,
            "secondary": s.secondary,
            "total": s.total,
            "primary_deviation": s.primary_deviation,
            "secondary_deviation": s.secondary_deviation,
        }
        for s in stats
    ]
