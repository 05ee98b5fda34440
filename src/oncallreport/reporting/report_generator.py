"""Report orchestration.

This module provides the high-level ReportGenerator that resolves
pricing, aggregates each requested schedule and builds the
cross-schedule summary.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from oncallreport.domain.calendars import CalendarRegistry
from oncallreport.domain.config import ReportConfig
from oncallreport.domain.models import ReportData, ScheduleCoverage
from oncallreport.errors import ScheduleNotFoundError
from oncallreport.reporting.aggregator import ScheduleAggregator
from oncallreport.reporting.pricing import PricingInfo, PricingResolver
from oncallreport.reporting.summary import calculate_summary

logger = logging.getLogger(__name__)

ALL_SCHEDULES = "all"


def previous_month(today: Optional[date] = None) -> tuple[int, int]:
    """Year and month of the calendar month before ``today``."""
    today = today or date.today()
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def billing_window(year: int, month: int, rotation_starts_at: int) -> tuple[datetime, datetime]:
    """Start and end of the billing window for a month.

    The window runs from midnight on the first of the month until the
    rotation start hour on the first of the next month, so the last
    night of the month is included.
    """
    start = datetime(year, month, 1)
    if month == 12:
        next_month = datetime(year + 1, 1, 1)
    else:
        next_month = datetime(year, month + 1, 1)
    return start, next_month + timedelta(hours=rotation_starts_at)


class ReportGenerator:
    """Generates on-call reports for a set of schedules.

    Example:
        >>> generator = ReportGenerator(config, calendars)
        >>> ids = generator.select_schedules(["all"], [s.id for s in coverage])
        >>> data = generator.generate([s for s in coverage if s.id in ids], start, end)
    """

    def __init__(self, config: ReportConfig, calendars: CalendarRegistry):
        self.config = config
        self.calendars = calendars

    def select_schedules(
        self,
        requested: Iterable[str],
        available: Iterable[str],
    ) -> list[str]:
        """Resolve the schedule IDs to report.

        ``["all"]`` selects every available schedule that is not in the
        configured ignore list. Explicit IDs are kept in the order given,
        with repeats dropped.

        Raises:
            ScheduleNotFoundError: If an explicit ID is not available.
        """
        requested = list(dict.fromkeys(requested))
        available = list(available)

        if requested == [ALL_SCHEDULES]:
            selected = []
            for schedule_id in available:
                if self.config.is_schedule_ignored(schedule_id):
                    logger.info("Ignoring schedule '%s'", schedule_id)
                    continue
                selected.append(schedule_id)
            return selected

        missing = [s for s in requested if s not in available]
        if missing:
            raise ScheduleNotFoundError(
                f"schedule(s) not found: {', '.join(missing)}"
            )
        return requested

    def resolve_pricing(self) -> PricingInfo:
        """Resolve pricing and log the resulting hourly prices."""
        pricing = PricingResolver(self.config).resolve()
        logger.info(
            "Hourly prices (in %s) - Week day: %.4f (%dh), Weekend day: %.4f (%dh), "
            "Bank holiday: %.4f (%dh)",
            self.config.currency or "-",
            pricing.weekday.hourly_price,
            pricing.weekday.billable_hours,
            pricing.weekend.hourly_price,
            pricing.weekend.billable_hours,
            pricing.bank_holiday.hourly_price,
            pricing.bank_holiday.billable_hours,
        )
        return pricing

    def generate(
        self,
        schedules: list[ScheduleCoverage],
        start: datetime,
        end: datetime,
    ) -> ReportData:
        """Generate the report data for the given schedules.

        Args:
            schedules: Coverage of each schedule to report, in report order.
            start: Start of the billing window.
            end: End of the billing window.

        Returns:
            Per-schedule reports and the cross-schedule summary.
        """
        pricing = self.resolve_pricing()
        aggregator = ScheduleAggregator(self.config, self.calendars, pricing)

        data = ReportData(start=start, end=end, currency=self.config.currency)
        for schedule in schedules:
            logger.info("Loading information for the schedule '%s'", schedule.id)
            data.schedules.append(aggregator.aggregate(schedule))

        data.summary = calculate_summary(data.schedules, pricing)
        return data
