"""CSV loading and saving for roster and calendar data."""
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from oncall.models.constraints import Calendar, HolidayWindow, TimeOff
from oncall.models.person import Person

Source = Union[str, Path, pd.DataFrame]


def _safe_int(value, default: int = 0) -> int:
    """Safely convert value to int."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def _safe_bool(value, default: bool = False) -> bool:
    """Safely convert value to bool."""
    if isinstance(value, bool):
        return value
    # numpy scalars from pandas columns are not int/bool subclasses
    text = str(value).strip().lower()
    if not text:
        return default
    return text in ("1", "1.0", "true", "yes", "ooo")


def _read(source: Source, required: List[str]) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source)

    df = df.fillna("")
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"CSV must have columns {required}, missing {missing}")
    return df


def load_roster(source: Source) -> List[Person]:
    """
    Load the rotation from a CSV file or DataFrame.

    Columns: `name`, `location`, optional `out_of_office`. Rows without a
    name are skipped.
    """
    df = _read(source, ["name", "location"])

    people = []
    for _, row in df.iterrows():
        name = str(row["name"]).strip()
        if not name:
            continue
        people.append(Person(
            name=name,
            location=str(row["location"]).strip(),
            out_of_office=_safe_bool(row.get("out_of_office", False)),
        ))
    return people


def save_roster(people: List[Person], path: Union[str, Path]) -> None:
    """Save the rotation to a CSV file."""
    if not people:
        df = pd.DataFrame(columns=["name", "location", "out_of_office"])
    else:
        df = pd.DataFrame([p.to_dict() for p in people])
    df["out_of_office"] = df["out_of_office"].astype(int)
    df.to_csv(path, index=False)


def load_time_off(source: Source) -> List[TimeOff]:
    """Time-off ranges: columns `name,start,end` (future offsets, end exclusive)."""
    df = _read(source, ["name", "start", "end"])
    return [
        TimeOff(
            person_name=str(row["name"]).strip(),
            start=_safe_int(row["start"]),
            end=_safe_int(row["end"]),
        )
        for _, row in df.iterrows()
        if str(row["name"]).strip()
    ]


def load_holidays(source: Source) -> List[HolidayWindow]:
    """Holiday windows: columns `location,start,end` (future offsets, end exclusive)."""
    df = _read(source, ["location", "start", "end"])
    return [
        HolidayWindow(
            location=str(row["location"]).strip(),
            start=_safe_int(row["start"]),
            end=_safe_int(row["end"]),
        )
        for _, row in df.iterrows()
        if str(row["location"]).strip()
    ]


def load_calendar(
    time_off: Optional[Source] = None,
    holidays: Optional[Source] = None,
) -> Calendar:
    """Build a Calendar from optional time-off and holiday sources."""
    return Calendar(
        time_off=load_time_off(time_off) if time_off is not None else [],
        holidays=load_holidays(holidays) if holidays is not None else [],
    )
