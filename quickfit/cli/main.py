"""Terminal CLI entrypoint for QuickFit."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from quickfit.core.engine import SessionEngine
from quickfit.workout.export import export_history_csv, export_history_json
from quickfit.workout.library import DEFAULT_TEMPLATE_ID
from quickfit.workout.parser import WorkoutParseError, load_template
from quickfit.workout.progress import DEFAULT_WEEK_START


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="QuickFit workout tracker")
    parser.add_argument(
        "--state-file",
        type=Path,
        default=None,
        help="Path of the state file (default: ~/.quickfit/state.json)",
    )
    parser.add_argument(
        "--week-start",
        type=int,
        choices=range(7),
        default=DEFAULT_WEEK_START,
        help="First day of the week, 0=Monday .. 6=Sunday",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument("--status", action="store_true", help="Print session and stats")
    parser.add_argument(
        "--start",
        nargs="?",
        const=DEFAULT_TEMPLATE_ID,
        default=None,
        metavar="TEMPLATE_ID",
        help="Start a new session from a template",
    )
    parser.add_argument(
        "--complete",
        nargs="*",
        type=int,
        default=None,
        metavar="INDEX",
        help="Complete the active exercise, or SECTION EXERCISE when given",
    )
    parser.add_argument(
        "--save-progress", action="store_true", help="Record partial progress"
    )
    parser.add_argument(
        "--check-stale",
        action="store_true",
        help="Archive a session left over from a previous day",
    )
    parser.add_argument("--reset", action="store_true", help="Discard the active session")
    parser.add_argument(
        "--import",
        dest="import_path",
        type=Path,
        default=None,
        help="Add a JSON workout template to the catalog",
    )
    parser.add_argument("--export-csv", type=Path, default=None, help="Export history as CSV")
    parser.add_argument("--export-json", type=Path, default=None, help="Export history as JSON")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI)",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8089, help="Port for --ui-web")
    return parser


def print_status(engine: SessionEngine) -> None:
    snapshot = engine.session_snapshot()
    if snapshot is None:
        print("No active session")
    else:
        state = "completed" if snapshot.workout_completed else "in progress"
        print(
            f"{snapshot.name} [{snapshot.template_id}] {state} - "
            f"{snapshot.completed_exercises}/{snapshot.total_exercises} "
            f"({snapshot.progress_pct}%)"
        )
        if not snapshot.workout_completed:
            print(
                f"Next: section {snapshot.active_section}, "
                f"exercise {snapshot.active_exercise}"
            )

    stats = engine.stats()
    print(f"Streak: {stats.current_streak} days")
    print(f"Total workouts: {stats.total_workouts}")
    print(f"This week: {stats.this_week_completed}/{stats.weekly_goal}")
    print(f"Time spent: {stats.total_time_spent} min")


def run_command(args: argparse.Namespace, engine: SessionEngine) -> int:
    if args.import_path is not None:
        try:
            template = load_template(args.import_path)
        except (OSError, WorkoutParseError) as exc:
            print(f"Cannot import {args.import_path}: {exc}")
            return 1
        engine.add_template(template)
        print(f"Imported template '{template.id}'")

    if args.reset:
        engine.reset_session()
    if args.check_stale:
        engine.check_for_stale_sessions()
    if args.start is not None:
        engine.start_session(args.start)
    if args.complete is not None:
        if len(args.complete) == 0:
            engine.complete_exercise()
        elif len(args.complete) == 2:
            engine.complete_exercise(args.complete[0], args.complete[1])
        else:
            print("--complete takes no index or SECTION EXERCISE")
            return 1
    if args.save_progress:
        engine.save_partial_progress()

    if args.export_csv is not None:
        print(f"History written to {export_history_csv(engine.state.history, args.export_csv)}")
    if args.export_json is not None:
        print(f"History written to {export_history_json(engine.state.history, args.export_json)}")

    if args.status:
        print_status(engine)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.ui_web:
        from quickfit.ui.web_app import run_web_ui

        return run_web_ui(
            state_path=args.state_file,
            week_start=args.week_start,
            host=args.web_host,
            port=args.web_port,
        )

    actions = (
        args.status,
        args.start is not None,
        args.complete is not None,
        args.save_progress,
        args.check_stale,
        args.reset,
        args.import_path is not None,
        args.export_csv is not None,
        args.export_json is not None,
    )
    if not any(actions):
        parser.print_help()
        return 1

    engine = SessionEngine(state_path=args.state_file, week_start=args.week_start)
    return run_command(args, engine)


if __name__ == "__main__":
    raise SystemExit(main())
