"""Per-schedule aggregation of on-call hours and amounts.

The aggregator walks every coverage period of every user in a schedule
at the configured sampling step, feeds each sample to the classifier and
turns the resulting hour totals into day counts and amounts.
"""

import logging
from datetime import timedelta
from typing import Optional

from oncallreport.domain.calendars import CalendarLookup, CalendarRegistry
from oncallreport.domain.config import ReportConfig
from oncallreport.domain.models import (
    DayCategory,
    DayCategoryTotals,
    ScheduleCoverage,
    ScheduleReport,
    ScheduleUserReport,
    UserRotation,
)
from oncallreport.errors import UserLookupError
from oncallreport.reporting.classifier import DayClassifier
from oncallreport.reporting.pricing import PricingInfo

logger = logging.getLogger(__name__)


class ScheduleAggregator:
    """Aggregates coverage of a schedule into per-user reports.

    Users without a rotation user entry in the configuration are logged
    and skipped. A missing bank holiday calendar is not recoverable and
    propagates ``CalendarNotFoundError`` to the caller.

    Example:
        >>> aggregator = ScheduleAggregator(config, calendars, pricing)
        >>> report = aggregator.aggregate(schedule_coverage)
        >>> [u.name for u in report.users]
        ['Alice', 'Bob']
    """

    def __init__(
        self,
        config: ReportConfig,
        calendars: CalendarRegistry,
        pricing: PricingInfo,
        classifier: Optional[DayClassifier] = None,
    ):
        """Initialize the aggregator.

        Args:
            config: Report configuration.
            calendars: Registry used to resolve each user's calendar.
            pricing: Pricing resolved for this report run.
            classifier: Sample classifier. Built from config if omitted.
        """
        self.config = config
        self.calendars = calendars
        self.pricing = pricing
        self.classifier = classifier or DayClassifier(config)
        self.step = timedelta(minutes=config.check_every_minutes)

    def aggregate(self, schedule: ScheduleCoverage) -> ScheduleReport:
        """Build the report of every user with coverage in a schedule."""
        report = ScheduleReport(id=schedule.id, name=schedule.name)
        month = schedule.start.month if schedule.start is not None else None

        for user_id, rotation in schedule.rotations.items():
            try:
                rotation_user = self.config.find_rotation_user(user_id)
            except UserLookupError as e:
                logger.warning("Skipping user in schedule '%s': %s", schedule.id, e)
                continue

            if rotation.periods:
                year = self._calendar_year(schedule, rotation)
                calendar = self.calendars.resolve(
                    rotation_user.holidays_calendar, year, user_id
                )
                totals = self.accumulate_rotation(rotation, calendar, month)
            else:
                totals = DayCategoryTotals()

            logger.debug(
                "Schedule '%s', user '%s': %.1fh weekday, %.1fh weekend, "
                "%.1fh bank holiday",
                schedule.id,
                rotation.name,
                totals.work_hours,
                totals.weekend_hours,
                totals.bank_holiday_hours,
            )
            report.users.append(self.build_user_report(rotation.name, totals))

        return report

    def accumulate_rotation(
        self,
        rotation: UserRotation,
        calendar: CalendarLookup,
        month: Optional[int] = None,
    ) -> DayCategoryTotals:
        """Sample every period of a rotation into fresh totals.

        Args:
            rotation: The user's coverage periods.
            calendar: The user's bank holiday calendar.
            month: Month of the billing period. When None, each period
                uses the month of its own start.
        """
        totals = DayCategoryTotals()
        for period in rotation.periods:
            period_month = month if month is not None else period.start.month
            for sample in period.samples(self.step):
                self.classifier.accumulate(sample, calendar, totals, period_month)
        return totals

    def build_user_report(self, name: str, totals: DayCategoryTotals) -> ScheduleUserReport:
        """Derive day counts and amounts from hour totals."""
        weekday = self.pricing.for_category(DayCategory.WEEKDAY)
        weekend = self.pricing.for_category(DayCategory.WEEKEND)
        bank_holiday = self.pricing.for_category(DayCategory.BANK_HOLIDAY)

        work_amount = totals.work_hours * weekday.hourly_price
        weekend_amount = totals.weekend_hours * weekend.hourly_price
        bank_holiday_amount = totals.bank_holiday_hours * bank_holiday.hourly_price

        return ScheduleUserReport(
            name=name,
            totals=totals,
            work_days=totals.work_hours / weekday.billable_hours,
            weekend_days=totals.weekend_hours / weekend.billable_hours,
            bank_holiday_days=totals.bank_holiday_hours / bank_holiday.billable_hours,
            work_amount=work_amount,
            weekend_amount=weekend_amount,
            bank_holiday_amount=bank_holiday_amount,
            total_amount=work_amount + weekend_amount + bank_holiday_amount,
        )

    @staticmethod
    def _calendar_year(schedule: ScheduleCoverage, rotation: UserRotation) -> int:
        if schedule.start is not None:
            return schedule.start.year
        # Without a billing window, use the earliest coverage
        return min(p.start for p in rotation.periods).year
