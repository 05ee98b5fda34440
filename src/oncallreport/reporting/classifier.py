"""Day classification and hour accumulation for single samples.

Every sample taken while walking a coverage period is attributed to a
rotation day, classified as weekday, weekend or bank holiday, checked
against that category's excluded window and, when billable, added to
the user's running totals.

Rotation days start at ``rotation_starts_at`` rather than midnight: a
sample at 02:00 still belongs to the previous night's on-call shift and
is classified as 23:xx of the previous calendar day.
"""

from datetime import datetime, timedelta
from typing import Optional

from oncallreport.domain.calendars import CalendarLookup
from oncallreport.domain.config import ReportConfig
from oncallreport.domain.models import DayCategory, DayCategoryTotals


class DayClassifier:
    """Classifies samples and accumulates billable hours.

    The same excluded-window test is applied to every day category: a
    sample is billable when its hour is before ``excluded_starts_at`` or
    at/after ``excluded_ends_at``.

    Example:
        >>> classifier = DayClassifier(config)
        >>> totals = DayCategoryTotals()
        >>> classifier.accumulate(datetime(2024, 3, 4, 12), calendar, totals)
        <DayCategory.WEEKDAY: 'weekday'>
        >>> totals.work_hours
        0.5
    """

    def __init__(self, config: ReportConfig):
        self.config = config
        self.sample_hours = config.sample_hours

    def rotation_instant(self, instant: datetime, month: int) -> Optional[datetime]:
        """Map a sample to the instant used to classify its rotation day.

        Samples before the rotation start hour are moved back to 23:xx of
        the previous calendar day. If that lands outside ``month`` the
        sample belongs to a rotation day of another billing period and
        None is returned.
        """
        if instant.hour >= self.config.rotation_starts_at:
            return instant

        previous_night = instant - timedelta(hours=instant.hour + 1)
        if previous_night.month != month:
            return None
        return previous_night

    def categorize(self, day: datetime, calendar: CalendarLookup) -> DayCategory:
        """Classify a calendar day; bank holidays take precedence over weekends."""
        if calendar.is_bank_holiday(day):
            return DayCategory.BANK_HOLIDAY
        if calendar.is_weekend(day):
            return DayCategory.WEEKEND
        return DayCategory.WEEKDAY

    def is_billable(self, category: DayCategory, hour: int) -> bool:
        """Check if an hour of a category's day is outside its excluded window."""
        excluded = self.config.find_excluded_hours(category)
        if excluded is None:
            return True
        return not excluded.contains(hour)

    def accumulate(
        self,
        instant: datetime,
        calendar: CalendarLookup,
        totals: DayCategoryTotals,
        month: Optional[int] = None,
    ) -> Optional[DayCategory]:
        """Add one sample's worth of hours to the matching bucket.

        Args:
            instant: Sample instant in the schedule's local time.
            calendar: Bank holiday calendar of the user.
            totals: Running totals of the user, updated in place.
            month: Month of the billing period being processed. Defaults
                to the month of ``instant``.

        Returns:
            The category the sample was counted in, or None when the sample
            was discarded or fell inside an excluded window.
        """
        if month is None:
            month = instant.month

        rotation_instant = self.rotation_instant(instant, month)
        if rotation_instant is None:
            return None

        category = self.categorize(rotation_instant, calendar)
        if not self.is_billable(category, rotation_instant.hour):
            return None

        totals.add(category, self.sample_hours)
        return category
