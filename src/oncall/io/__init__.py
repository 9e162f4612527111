# oncall/io - Input/output handling
from .csv_loader import load_calendar, load_holidays, load_roster, load_time_off, save_roster
from .results_export import build_results, export_results

__all__ = [
    "load_roster",
    "save_roster",
    "load_time_off",
    "load_holidays",
    "load_calendar",
    "build_results",
    "export_results",
]
