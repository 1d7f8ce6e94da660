"""
Command line interface for XER schedule import.

Usage:
    python -m xer_schedule <file.xer> [options]

Options:
    --json                  Print the schedule payload as JSON
    --output PATH           Write the schedule payload to a JSON file
    --csv-dir DIR           Export every raw XER table to CSV
    --insights              Show schedule quality insights
    --compare               Compare calculated float with P6's stored float
    --near-critical-hours N Near-critical float threshold (hours)
    --verbose               Debug logging
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from xer_schedule.config.settings import settings
from xer_schedule.primavera.analysis.critical_path import (
    critical_tasks,
    float_distribution,
    summarize_float,
)
from xer_schedule.primavera.analysis.insights import compute_schedule_insights
from xer_schedule.primavera.cpm.engine import compare_with_imported
from xer_schedule.primavera.importer import schedule_from_tables
from xer_schedule.primavera.xer_parser import XERParser
from xer_schedule.schemas import SchemaValidationError, validate_schedule_payload
from xer_schedule.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def print_float_report(schedule, result, near_critical_hours: float) -> None:
    """Print a formatted float report."""
    summary = summarize_float(schedule.tasks, near_critical_hours)

    print("=" * 80)
    print("CRITICAL PATH REPORT")
    print("=" * 80)

    if schedule.project:
        print(f"\nProject: {schedule.project.project_name} ({schedule.project.project_id})")
        print(f"Data Date: {schedule.project.data_date}")
    print(f"Project End: {result.project_end}")
    print(f"Total Tasks: {summary.total}")
    print(summary.get_risk_summary())
    if result.cycles:
        print(f"Relationship cycles skipped: {len(result.cycles)} "
              f"({len(result.cycle_task_ids)} tasks)")

    print("\n--- Float Distribution ---")
    for bucket, count in sorted(float_distribution(schedule.tasks).items()):
        pct = count / summary.total * 100 if summary.total else 0
        bar = '#' * int(pct / 2)
        print(f"  {bucket:15s}: {count:5d} ({pct:5.1f}%) {bar}")

    critical = critical_tasks(schedule.tasks)
    print("\n--- Critical Path (first 20 tasks) ---")
    for i, task in enumerate(critical[:20]):
        float_days = task.total_float_hours / settings.HOURS_PER_DAY
        print(f"  {i+1:3d}. {task.task_code:20s} | {task.task_name[:40]:40s} | "
              f"TF {float_days:6.1f}d")
    if len(critical) > 20:
        print(f"  ... and {len(critical) - 20} more critical tasks")

    print("\n" + "=" * 80)


def print_comparison(schedule) -> None:
    comparison = compare_with_imported(schedule.tasks)
    total = comparison['total_compared']
    print("\n--- Calculated vs Imported Float ---")
    print(f"  Tasks compared: {total}")
    print(f"  Float match: {comparison['float_match']} "
          f"({comparison['float_match'] / max(1, total) * 100:.1f}%)")
    print(f"  Float diff: {comparison['float_diff']}")
    print(f"  Critical match: {comparison['critical_match']}")
    for diff in comparison['differences'][:5]:
        print(f"  {diff['task_name'][:40]}: calculated {diff['calculated']:.1f}h, "
              f"imported {diff['imported']:.1f}h")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Import a Primavera P6 XER schedule and calculate total float',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('xer_file', type=Path, help='XER file to import')
    parser.add_argument('--json', action='store_true',
                        help='Print the schedule payload as JSON')
    parser.add_argument('--output', '-o', type=Path, default=None,
                        help='Write the schedule payload to a JSON file')
    parser.add_argument('--csv-dir', type=Path, default=None,
                        help='Export every raw XER table to CSV in this directory')
    parser.add_argument('--insights', action='store_true',
                        help='Show schedule quality insights')
    parser.add_argument('--compare', action='store_true',
                        help="Compare calculated float with P6's stored float")
    parser.add_argument('--near-critical-hours', type=float,
                        default=settings.NEAR_CRITICAL_THRESHOLD_HOURS,
                        help='Near-critical float threshold in hours (default: %(default)s)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    problems = settings.validate_required_settings()
    if problems:
        for problem in problems:
            logger.error("Invalid setting: %s", problem)
        return 1

    xer_parser = XERParser(args.xer_file)
    try:
        tables = xer_parser.parse()
    except OSError as e:
        logger.error("Cannot read %s: %s", args.xer_file, e)
        return 1

    schedule, result = schedule_from_tables(tables)
    payload = schedule.to_dict()

    if args.csv_dir:
        xer_parser.export_all_to_csv(args.csv_dir)

    if args.output:
        try:
            validate_schedule_payload(payload)
        except SchemaValidationError as e:
            logger.error("%s", e)
            for error in e.errors[:10]:
                logger.error("  %s", error)
            return 1
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(payload, indent=2), encoding='utf-8')
        logger.info("Wrote schedule payload to %s", args.output)

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    print_float_report(schedule, result, args.near_critical_hours)

    if args.compare:
        print_comparison(schedule)

    if args.insights:
        insights = compute_schedule_insights(schedule)
        print(f"\n{insights.summary}")
        for detail in insights.hard_constraints + insights.missing_logic:
            print(f"  [{detail.severity}] {detail.message}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
