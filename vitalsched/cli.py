"""
Command-line entry point.

    vitalsched analyze  [-i VITALS_CSV] [-o REPORT]
    vitalsched check    [-i VITALS_CSV]
    vitalsched schedule [-s SUMMARY_CSV] [-p POLICY ...] [--parallel]
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from vitalsched.config import settings
from vitalsched.core.ingestion import (
    aggregate_vitals,
    check_data_quality,
    load_vitals,
    read_summary,
    write_summary,
)
from vitalsched.core.reports import ScheduleReportGenerator, VitalsReportGenerator, write_report
from vitalsched.core.scheduling import SchedulingEngine
from vitalsched.utils import get_logger, setup_logging, VitalSchedError

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vitalsched",
        description="Patient vitals analysis and scheduling simulations",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Aggregate raw vitals into the patient summary")
    analyze.add_argument("-i", "--input", type=Path, default=settings.vitals_file,
                         help="Raw vitals CSV")
    analyze.add_argument("-o", "--output", type=Path, default=None,
                         help="Daily summary report path (default: reports dir)")
    analyze.add_argument("-s", "--summary", type=Path, default=settings.summary_file,
                         help="Patient summary CSV to write")

    check = sub.add_parser("check", help="Check raw vitals for duplicates and missing data")
    check.add_argument("-i", "--input", type=Path, default=settings.vitals_file,
                       help="Raw vitals CSV")

    schedule = sub.add_parser("schedule", help="Run scheduling simulations")
    schedule.add_argument("-s", "--summary", type=Path, default=settings.summary_file,
                          help="Patient summary CSV")
    schedule.add_argument("-i", "--input", type=Path, default=settings.vitals_file,
                          help="Raw vitals CSV used when the summary is missing")
    schedule.add_argument("-p", "--policy", action="append", dest="policies",
                          help="Policy to run (repeatable; default: all)")
    schedule.add_argument("--parallel", action="store_true",
                          help="Run policies on a thread pool")
    return parser


def cmd_analyze(args: argparse.Namespace) -> int:
    df = load_vitals(args.input)
    patients = aggregate_vitals(df)
    write_summary(patients, args.summary)

    generator = VitalsReportGenerator(output_dir=settings.reports_dir)
    if args.output:
        content = generator.render(patients)
        write_report(args.output, content, "daily_summary")
        path = args.output
    else:
        report = generator.generate(patients)
        content, path = report.content, report.path

    print(content)
    print(f"Analysis complete. Report generated at: {path}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    report = check_data_quality(load_vitals(args.input))

    print("Checking data quality...")
    print("=======================")
    print("\nMissing values per column:")
    for column, count in report.missing_values.items():
        print(f"{column}: {count} missing")
    print("\nDuplicate entries (by patient_id and timestamp):")
    for patient_id, timestamp in report.duplicates:
        print(f"Duplicate found: {patient_id},{timestamp}")
    return 0


def _ensure_summary(summary: Path, vitals: Path) -> None:
    if summary.exists():
        return
    print("Patient summary not found. Aggregating raw vitals to generate it...")
    patients = aggregate_vitals(load_vitals(vitals))
    write_summary(patients, summary)
    VitalsReportGenerator(output_dir=settings.reports_dir).generate(patients)


def cmd_schedule(args: argparse.Namespace) -> int:
    _ensure_summary(args.summary, args.input)
    table = read_summary(args.summary)

    engine = SchedulingEngine()
    runs = engine.run_all(table.patients, policies=args.policies, parallel=args.parallel)

    diagnostics = list(table.diagnostics) + (list(runs[0].diagnostics) if runs else [])
    report = ScheduleReportGenerator(output_dir=settings.reports_dir).generate(runs, diagnostics)
    print(report.content)

    for diag in diagnostics:
        print(f"Skipped row {diag.row_number} [{diag.kind}]: {diag.message}", file=sys.stderr)

    print(f"All scheduling simulations completed. See: {report.path}")
    return 0


_COMMANDS = {
    "analyze": cmd_analyze,
    "check": cmd_check,
    "schedule": cmd_schedule,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, settings.log_file)

    try:
        return _COMMANDS[args.command](args)
    except VitalSchedError as e:
        logger.error(f"{e.code}: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
