"""Scheduler configuration and calendar definitions."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class TimeOff:
    """A person unavailable for future period offsets in [start, end)."""
    person_name: str
    start: int
    end: int

    def covers(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True)
class HolidayWindow:
    """Holiday at a location for future period offsets in [start, end)."""
    location: str
    start: int
    end: int

    def covers(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass
class Calendar:
    """Calendar overrides layered on top of the roster."""
    time_off: List[TimeOff] = field(default_factory=list)
    holidays: List[HolidayWindow] = field(default_factory=list)

    def is_off(self, person_name: str, offset: int) -> bool:
        """True if the person has time off at this future offset."""
        return any(t.person_name == person_name and t.covers(offset) for t in self.time_off)

    def is_holiday(self, location: str, offset: int) -> bool:
        """True if the location observes a holiday at this future offset."""
        return any(h.location == location and h.covers(offset) for h in self.holidays)


@dataclass
class SchedulerConfig:
    """Configuration for one scheduling run."""

    # Window
    horizon: int = 4  # Future periods to schedule
    lookback: int = 1  # Committed periods to anchor against

    # Solver behavior
    time_limit_seconds: float = 30.0
    num_workers: int = 4
    seed: Optional[int] = None  # Roster shuffle and solver seed

    # Assignment costs
    base_weight: int = 1
    holiday_weight: int = 10

    # Soft upper bound slack domain is [0, upper_slack_multiplier * max_target]
    upper_slack_multiplier: int = 2

    @property
    def total_periods(self) -> int:
        return self.lookback + self.horizon

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "horizon": self.horizon,
            "lookback": self.lookback,
            "time_limit_seconds": self.time_limit_seconds,
            "num_workers": self.num_workers,
            "seed": self.seed,
            "base_weight": self.base_weight,
            "holiday_weight": self.holiday_weight,
            "upper_slack_multiplier": self.upper_slack_multiplier,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "SchedulerConfig":
        """Create from dictionary, ignoring unknown keys."""
        cfg = cls()
        for key, value in d.items():
            if hasattr(cfg, key) and key != "total_periods":
                setattr(cfg, key, value)
        return cfg
