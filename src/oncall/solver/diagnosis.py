"""
Infeasibility Diagnosis
=======================
Explains why the hard constraints cannot all hold, from the inputs alone
(roster, history, calendar), without reading any solver value.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence

from oncall.models.constraints import Calendar, SchedulerConfig
from oncall.models.person import Person
from oncall.models.role import ROLES, Role
from oncall.models.schedule import FairnessTargets
from oncall.solver.history import HistoryProvider


@dataclass
class StaffingGap:
    """A future period that cannot be covered."""
    period: int
    free: List[str]
    message: str


def free_people(people: Sequence[Person], calendar: Calendar, offset: int) -> List[str]:
    """Names of people without time off at a future offset."""
    return [p.name for p in people if not calendar.is_off(p.name, offset)]


def find_staffing_gaps(
    people: Sequence[Person],
    history: HistoryProvider,
    calendar: Calendar,
    config: SchedulerConfig,
) -> List[StaffingGap]:
    """
    Future periods that are structurally uncoverable.

    - fewer than two people free of time off
    - at the history boundary, nobody left for a role once the people who
      held it in the last committed period are excluded
    """
    gaps = []
    lookback = config.lookback

    for offset in range(config.horizon):
        period = lookback + offset
        free = free_people(people, calendar, offset)

        if len(free) < 2:
            gaps.append(StaffingGap(
                period=period,
                free=free,
                message=f"period {period} has {len(free)} people free of time off, 2 are needed",
            ))
            continue

        if offset == 0 and lookback > 0:
            last = lookback - 1
            by_name = {p.name: p for p in people}
            held = {
                Role.PRIMARY: {n for n in free if history.was_primary(last, by_name[n])},
                Role.SECONDARY: {n for n in free if history.was_secondary(last, by_name[n])},
            }
            candidates = {role: [n for n in free if n not in held[role]] for role in ROLES}
            for role in ROLES:
                if not candidates[role]:
                    gaps.append(StaffingGap(
                        period=period,
                        free=free,
                        message=(
                            f"period {period} has no {role.value} candidate: "
                            f"every free person held {role.value} in period {last}"
                        ),
                    ))
            if all(candidates[r] for r in ROLES) and len(set(candidates[Role.PRIMARY]) | set(candidates[Role.SECONDARY])) < 2:
                gaps.append(StaffingGap(
                    period=period,
                    free=free,
                    message=f"period {period} has a single person eligible for both roles",
                ))

    return gaps


def find_overloaded_people(
    people: Sequence[Person],
    history: HistoryProvider,
    calendar: Calendar,
    config: SchedulerConfig,
) -> List[str]:
    """
    People forced above the soft upper bound's slack ceiling.

    A person is forced into every period where only two people are free.
    Those roles, plus the ones held in history, split over two roles; when
    even the even split exceeds `max_target + slack`, the bound is violated.
    """
    n = len(people)
    targets = FairnessTargets.for_window(config.total_periods, n)
    ceiling = targets.max_target * (1 + config.upper_slack_multiplier)

    forced: Dict[str, int] = {p.name: 0 for p in people}
    for offset in range(config.horizon):
        free = free_people(people, calendar, offset)
        if len(free) == 2:
            for name in free:
                forced[name] += 1

    reasons = []
    for p in people:
        past = sum(
            int(history.was_primary(i, p)) + int(history.was_secondary(i, p))
            for i in range(config.lookback)
        )
        per_role = -(-(forced[p.name] + past) // 2)
        if per_role > ceiling:
            reasons.append(
                f"{p.name} must cover at least {per_role} periods of one role, "
                f"above the limit of {ceiling} ({targets.max_target} + slack)"
            )
    return reasons


def diagnose_infeasibility(
    people: Sequence[Person],
    history: HistoryProvider,
    calendar: Calendar,
    config: SchedulerConfig,
) -> List[str]:
    """All structural reasons the schedule cannot be built."""
    reasons = [g.message for g in find_staffing_gaps(people, history, calendar, config)]
    reasons.extend(find_overloaded_people(people, history, calendar, config))
    return reasons
