"""Command-line interface for the on-call report tool."""

import argparse
import logging
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

from oncallreport.domain.calendars import BankHolidayCalendar, CalendarRegistry
from oncallreport.domain.config import ExcludedHours, ReportConfig, RotationUser, load_settings
from oncallreport.domain.models import CoveragePeriod, DayCategory, ScheduleCoverage
from oncallreport.errors import OnCallReportError
from oncallreport.logging_config import setup_logging
from oncallreport.output.console_report import ConsoleReport
from oncallreport.output.pdf_report import PDFReport
from oncallreport.output.writer import ReportWriter
from oncallreport.reporting.report_generator import (
    ALL_SCHEDULES,
    ReportGenerator,
    billing_window,
    previous_month,
)
from oncallreport.sources.coverage import load_coverage

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("console", "pdf")


def parse_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM argument into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month '{value}', expected YYYY-MM")
    return parsed.year, parsed.month


def parse_schedule_ids(value: str) -> list[str]:
    """Parse a comma-separated list of schedule IDs."""
    ids = [s.strip() for s in value.split(",") if s.strip()]
    if not ids:
        raise argparse.ArgumentTypeError("at least one schedule ID is required")
    return ids


def create_writer(output_format: str, currency: str, directory: Optional[str]) -> ReportWriter:
    """Create the report writer for an output format.

    Unsupported formats fall back to console output.
    """
    if output_format not in OUTPUT_FORMATS:
        logger.warning(
            "output format %s not supported. Defaulting to 'console'", output_format
        )
        output_format = "console"

    if output_format == "pdf":
        return PDFReport(currency=currency, directory=directory or Path.home())
    return ConsoleReport(currency=currency)


def run_report(
    config_path: str,
    coverage_path: str,
    schedules: list[str],
    output_format: str = "console",
    directory: Optional[str] = None,
    month: Optional[tuple[int, int]] = None,
) -> str:
    """Generate a report and return the writer's message."""
    config, calendars = load_settings(config_path)

    year, month_number = month or previous_month()
    start, end = billing_window(year, month_number, config.rotation_starts_at)
    logger.info("startDate: %s, endDate: %s", start, end)

    coverage = load_coverage(coverage_path, start, end)
    generator = ReportGenerator(config, calendars)
    selected = generator.select_schedules(schedules, [s.id for s in coverage])
    by_id = {s.id: s for s in coverage}

    data = generator.generate([by_id[s] for s in selected], start, end)

    writer = create_writer(output_format, config.currency, directory)
    return writer.generate_report(data)


def create_sample_setup(year: int, month: int) -> tuple[ReportConfig, CalendarRegistry, list[ScheduleCoverage]]:
    """Create a sample configuration and two weekly-rotating schedules.

    Args:
        year: Year of the billing month.
        month: Billing month.
    """
    names = ["Alice", "Bob", "Carol", "David", "Eve"]
    users = {
        f"P{i + 1:03d}": RotationUser(
            user_id=f"P{i + 1:03d}",
            name=name,
            holidays_calendar="uk" if i % 2 == 0 else "ie",
        )
        for i, name in enumerate(names)
    }

    config = ReportConfig(
        currency="GBP",
        day_prices={
            DayCategory.WEEKDAY: 100.0,
            DayCategory.WEEKEND: 200.0,
            DayCategory.BANK_HOLIDAY: 300.0,
        },
        # Office hours are covered by the on-site team
        excluded_hours={DayCategory.WEEKDAY: ExcludedHours(starts_at=9, ends_at=17)},
        rotation_starts_at=8,
        rotation_users=users,
    )

    first_day = date(year, month, 1)
    calendars = CalendarRegistry(
        [
            BankHolidayCalendar("uk", year, frozenset({first_day + timedelta(days=13)})),
            BankHolidayCalendar("ie", year, frozenset({first_day + timedelta(days=16)})),
        ]
    )

    start, end = billing_window(year, month, config.rotation_starts_at)
    schedules = []
    for index, (schedule_id, schedule_name) in enumerate(
        [("PSCHED1", "Platform"), ("PSCHED2", "Payments")]
    ):
        coverage = ScheduleCoverage(
            id=schedule_id, name=schedule_name, start=start, end=end
        )
        user_ids = list(users)[index:] + list(users)[:index]
        handover = start + timedelta(hours=config.rotation_starts_at)
        rotation = 0
        current = start
        while current < end:
            next_handover = min(handover + timedelta(days=7 * (rotation + 1)), end)
            user = users[user_ids[rotation % len(user_ids)]]
            coverage.add_period(user.user_id, user.name, CoveragePeriod(current, next_handover))
            current = next_handover
            rotation += 1
        schedules.append(coverage)

    return config, calendars, schedules


def run_demo(month: Optional[tuple[int, int]] = None) -> str:
    """Run a report over generated sample schedules."""
    year, month_number = month or previous_month()
    config, calendars, schedules = create_sample_setup(year, month_number)
    start, end = billing_window(year, month_number, config.rotation_starts_at)

    generator = ReportGenerator(config, calendars)
    data = generator.generate(schedules, start, end)
    return ConsoleReport(currency=config.currency).generate_report(data)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="On-call Report - rotation hours and compensation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report -c config.json -i coverage.json
                                      Report all schedules for last month
  %(prog)s report -c config.json -i coverage.json -s PSCHED1,PSCHED2
                                      Report two schedules
  %(prog)s report -c config.json -i coverage.json -o pdf -d reports/
                                      Write a PDF report
  %(prog)s demo --month 2024-03       Report generated sample schedules
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    report_parser = subparsers.add_parser(
        "report",
        help="Generate the report for the given schedules",
    )
    report_parser.add_argument(
        "--config", "-c",
        type=str,
        required=True,
        help="Configuration file (JSON)",
    )
    report_parser.add_argument(
        "--coverage", "-i",
        type=str,
        required=True,
        help="Exported schedules file (JSON)",
    )
    report_parser.add_argument(
        "--schedules", "-s",
        type=parse_schedule_ids,
        default=[ALL_SCHEDULES],
        help="Schedule IDs to report (comma-separated), or 'all' (default: all)",
    )
    report_parser.add_argument(
        "--output-format", "-o",
        type=str,
        default="console",
        help="Output format: console or pdf (default: console)",
    )
    report_parser.add_argument(
        "--output", "-d",
        type=str,
        default=None,
        help="Output directory for PDF reports (default: home directory)",
    )
    report_parser.add_argument(
        "--month", "-m",
        type=parse_month,
        default=None,
        help="Billing month as YYYY-MM (default: previous month)",
    )

    demo_parser = subparsers.add_parser("demo", help="Run a report over sample data")
    demo_parser.add_argument(
        "--month", "-m",
        type=parse_month,
        default=None,
        help="Billing month as YYYY-MM (default: previous month)",
    )

    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        if args.command == "report":
            message = run_report(
                args.config,
                args.coverage,
                args.schedules,
                args.output_format,
                args.output,
                args.month,
            )
        elif args.command == "demo":
            message = run_demo(args.month)
        else:
            parser.print_help()
            return 1
    except OnCallReportError as e:
        logger.error("%s", e)
        return 1

    if message:
        print(message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
