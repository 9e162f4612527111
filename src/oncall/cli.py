from __future__ import annotations

import argparse
import json
import logging
import random
from typing import Any, Dict

from pydantic import ValidationError

from oncall.io.csv_loader import load_calendar, load_roster
from oncall.io.results_export import build_results, export_results
from oncall.models.constraints import SchedulerConfig
from oncall.models.validated import ValidatedSchedulerConfig
from oncall.solver.engine import schedule_rotation
from oncall.solver.errors import (
    InvalidConfiguration,
    ModelInvalid,
    SchedulingInfeasible,
    SolveInconclusive,
    UnsatisfiableRoster,
)
from oncall.solver.history import AssignmentLogHistory, StaticHistory, append_schedule
from oncall.solver.report import format_report
from oncall.utils.logging_setup import setup_logging
from oncall.utils.structured_logging import configure_structlog

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_INFEASIBLE = 3
EXIT_INCONCLUSIVE = 4
EXIT_SOLVER_ERROR = 5

LOG_LEVELS = ["WARNING", "INFO", "DEBUG", "TRACE"]


def _build_cfg(args: argparse.Namespace) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {
        "horizon": args.weeks,
        "lookback": args.lookback,
    }
    if args.seed is not None:
        cfg["seed"] = args.seed
    if args.time_limit is not None:
        cfg["time_limit_seconds"] = args.time_limit
    if args.workers is not None:
        cfg["num_workers"] = args.workers
    if args.holiday_weight is not None:
        cfg["holiday_weight"] = args.holiday_weight
    if args.upper_slack_multiplier is not None:
        cfg["upper_slack_multiplier"] = args.upper_slack_multiplier
    return cfg


def _load_config(args: argparse.Namespace) -> SchedulerConfig:
    try:
        return ValidatedSchedulerConfig(**_build_cfg(args)).to_dataclass()
    except ValidationError as e:
        raise InvalidConfiguration(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="On-call rotation scheduler (Primary + Secondary per period)")
    p.add_argument("--roster", required=True, help="Roster CSV (name,location[,out_of_office])")
    p.add_argument("--weeks", type=int, default=4, help="Number of periods to look forward (default: 4)")
    p.add_argument("--lookback", type=int, default=1, help="Committed periods to anchor against (default: 1)")
    p.add_argument("--history", help="Assignment log CSV (period,role,name)")
    p.add_argument("--commit", action="store_true", help="Append the result to the --history log")
    p.add_argument("--time-off", dest="time_off", help="Time-off CSV (name,start,end)")
    p.add_argument("--holidays", help="Holiday CSV (location,start,end)")
    p.add_argument("--seed", type=int, help="Seed for roster shuffling and the solver")
    p.add_argument("--time-limit", dest="time_limit", type=float, help="Solver time limit in seconds")
    p.add_argument("--workers", type=int, help="Solver search workers")
    p.add_argument("--holiday-weight", dest="holiday_weight", type=int, help="Cost of a holiday assignment")
    p.add_argument("--upper-slack-multiplier", dest="upper_slack_multiplier", type=int,
                   help="Upper fairness slack as a multiple of the max target")
    p.add_argument("--json", dest="json_out", action="store_true", help="JSON output")
    p.add_argument("--export", help="Write full results JSON to this path")
    p.add_argument("--log-file", dest="log_file", help="Rotating log file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)]
    setup_logging(level=level, log_file=args.log_file)
    # Logs and lifecycle events go to stderr; stdout carries only the result
    configure_structlog(level=logging.INFO if args.verbose else logging.WARNING)

    if args.commit and not args.history:
        print("error: --commit requires --history")
        return EXIT_CONFIG

    try:
        config = _load_config(args)
        people = load_roster(args.roster)
        calendar = load_calendar(time_off=args.time_off, holidays=args.holidays)
        if args.history:
            history = AssignmentLogHistory.from_csv(args.history, config.lookback)
        else:
            history = StaticHistory()

        schedule = schedule_rotation(
            people,
            config=config,
            history=history,
            calendar=calendar,
            rng=random.Random(config.seed),
        )
    except (InvalidConfiguration, UnsatisfiableRoster, FileNotFoundError, ValueError) as e:
        print(f"error: {e}")
        return EXIT_CONFIG
    except SchedulingInfeasible as e:
        print(f"infeasible: {e}")
        return EXIT_INFEASIBLE
    except SolveInconclusive as e:
        print(f"inconclusive: {e}")
        return EXIT_INCONCLUSIVE
    except ModelInvalid as e:
        print(f"solver error: {e}")
        return EXIT_SOLVER_ERROR

    if args.export:
        export_results(schedule, people, history, args.export, config)
    if args.commit:
        append_schedule(args.history, schedule)

    if args.json_out:
        print(json.dumps(build_results(schedule, people, history, config), ensure_ascii=False, indent=2))
    else:
        print("Summary:")
        for k, v in schedule.summary().items():
            print(f" - {k}: {v}")
        for line in format_report(schedule):
            print(line)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
