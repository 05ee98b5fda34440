"""Plain text report for terminal output.

This module renders:
- One table per schedule with each user's day counts and amount
- A summary table of every user across all schedules
"""

from typing import Union

from oncallreport.domain.models import (
    CrossScheduleSummary,
    ReportData,
    ScheduleUserReport,
)
from oncallreport.output.writer import ReportWriter, format_amount, window_label

RowSource = Union[ScheduleUserReport, CrossScheduleSummary]

LINE_WIDTH = 80


class ConsoleReport(ReportWriter):
    """Renders the report as fixed-width text.

    ``generate_report`` returns the rendered text so the caller can log
    or print it.
    """

    def __init__(self, currency: str = ""):
        self.currency = currency

    def generate_report(self, data: ReportData) -> str:
        return self.generate_to_string(data)

    def generate_to_string(self, data: ReportData) -> str:
        """Render the full report."""
        lines = []

        lines.append("=" * LINE_WIDTH)
        lines.append(f"ON-CALL REPORT - {window_label(data)}")
        lines.append("=" * LINE_WIDTH)
        lines.append("")

        for schedule in data.schedules:
            lines.append(f"Schedule: '{schedule.name}' ({schedule.id})")
            lines.extend(self._table(schedule.users))
            lines.append("")

        lines.append("-" * LINE_WIDTH)
        lines.append("USERS SUMMARY (all schedules)")
        lines.extend(self._table(sorted(data.summary, key=lambda s: s.name)))
        lines.append("")

        return "\n".join(lines)

    def _table(self, rows: list[RowSource]) -> list[str]:
        lines = [
            "-" * LINE_WIDTH,
            f"{'User':<24} {'Weekdays':>10} {'Weekend':>10} {'Bank hol.':>10} "
            f"{'Total':>20}",
            "-" * LINE_WIDTH,
        ]
        if not rows:
            lines.append("  (no users)")
            return lines

        for row in rows:
            lines.append(
                f"{row.name[:24]:<24} {row.work_days:>10.2f} {row.weekend_days:>10.2f} "
                f"{row.bank_holiday_days:>10.2f} "
                f"{format_amount(row.total_amount, self.currency):>20}"
            )
        return lines
