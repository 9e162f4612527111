"""
Results Export
==============
Exports a solved schedule to JSON for inspection by scripts.
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from oncall.models.constraints import SchedulerConfig
from oncall.models.person import Person
from oncall.models.schedule import OnCallSchedule
from oncall.solver.history import HistoryProvider
from oncall.solver.stats import calculate_person_stats, stats_to_dict_list
from oncall.solver.validation import validate_schedule
from oncall.utils.logging_setup import get_logger

logger = get_logger("oncall.io.results_export")


def build_results(
    schedule: OnCallSchedule,
    people: Sequence[Person],
    history: HistoryProvider,
    config: Optional[SchedulerConfig] = None,
) -> Dict[str, Any]:
    """Everything worth keeping about a run, as plain data."""
    scheduled = [p for p in people if p.name in schedule.people]
    validation = validate_schedule(schedule, scheduled, history)

    return {
        "metadata": {
            "exported_at": datetime.now().isoformat(timespec="seconds"),
            "config": config.to_dict() if config else None,
        },
        "summary": schedule.summary(),
        "validation": validation.as_dict(),
        "people": stats_to_dict_list(calculate_person_stats(schedule, scheduled, history)),
        "assignments": [
            {"period": a.period, "role": a.role.value, "name": a.person_name}
            for a in schedule.assignments
        ],
    }


def export_results(
    schedule: OnCallSchedule,
    people: Sequence[Person],
    history: HistoryProvider,
    path: Union[str, Path],
    config: Optional[SchedulerConfig] = None,
) -> Path:
    """
    Export results to a JSON file.

    Returns:
        Path to the exported JSON file
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    results = build_results(schedule, people, history, config)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    logger.info(f"Exported results to {output_path}")
    return output_path
