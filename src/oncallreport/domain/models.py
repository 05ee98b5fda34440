"""Domain models for on-call reporting.

This module contains the data structures shared by the reporting engine,
the coverage source and the report writers: coverage periods, per-user
rotations, hour totals by day category and the per-schedule and
cross-schedule report entries.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterator, Optional


class DayCategory(Enum):
    """Billing category of a rotation day.

    Values double as the keys used in the configuration file.
    """

    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    BANK_HOLIDAY = "bankholiday"


@dataclass(frozen=True)
class CoveragePeriod:
    """A contiguous block of time during which a user is on call.

    Attributes:
        start: First instant of coverage (inclusive).
        end: Last instant of coverage (exclusive).
    """

    start: datetime
    end: datetime

    @property
    def duration_hours(self) -> float:
        """Wall-clock length of the period in hours."""
        if self.end <= self.start:
            return 0.0
        return (self.end - self.start).total_seconds() / 3600

    def samples(self, step: timedelta) -> Iterator[datetime]:
        """Yield sample instants from start while before end.

        Stepping happens on absolute time so daylight saving transitions
        neither skip nor repeat samples. Each sample is expressed in the
        time zone of ``start``.
        """
        if step <= timedelta(0):
            raise ValueError("step must be positive")

        tz = self.start.tzinfo
        if tz is None:
            current, end = self.start, self.end
        else:
            current = self.start.astimezone(timezone.utc)
            end = self.end.astimezone(timezone.utc)

        while current < end:
            yield current if tz is None else current.astimezone(tz)
            current += step


@dataclass
class UserRotation:
    """All coverage periods of one user within one schedule.

    Attributes:
        user_id: Identifier of the user in the paging service.
        name: Display name, used to merge users across schedules.
        periods: Coverage periods in the order they were rendered.
    """

    user_id: str
    name: str
    periods: list[CoveragePeriod] = field(default_factory=list)

    @property
    def covered_hours(self) -> float:
        """Total wall-clock hours across all periods."""
        return sum(p.duration_hours for p in self.periods)


@dataclass
class DayCategoryTotals:
    """Hours accumulated per day category.

    Buckets only ever grow: ``add`` rejects negative increments.
    """

    work_hours: float = 0.0
    weekend_hours: float = 0.0
    bank_holiday_hours: float = 0.0

    def add(self, category: DayCategory, hours: float) -> None:
        """Add hours to the bucket for a category."""
        if hours < 0:
            raise ValueError(f"cannot add negative hours: {hours}")
        if category is DayCategory.WEEKDAY:
            self.work_hours += hours
        elif category is DayCategory.WEEKEND:
            self.weekend_hours += hours
        else:
            self.bank_holiday_hours += hours

    def hours_for(self, category: DayCategory) -> float:
        """Hours accumulated for a category."""
        if category is DayCategory.WEEKDAY:
            return self.work_hours
        if category is DayCategory.WEEKEND:
            return self.weekend_hours
        return self.bank_holiday_hours

    @property
    def total_hours(self) -> float:
        return self.work_hours + self.weekend_hours + self.bank_holiday_hours

    def merge(self, other: "DayCategoryTotals") -> None:
        """Add another set of totals into this one."""
        self.work_hours += other.work_hours
        self.weekend_hours += other.weekend_hours
        self.bank_holiday_hours += other.bank_holiday_hours


@dataclass(frozen=True)
class ScheduleUserReport:
    """Hours, day counts and amounts of one user in one schedule.

    Attributes:
        name: User display name.
        totals: Hours accumulated per day category.
        work_days: Weekday hours divided by billable weekday hours.
        weekend_days: Weekend hours divided by billable weekend hours.
        bank_holiday_days: Bank holiday hours divided by billable hours.
        work_amount: Weekday hours times the weekday hourly price.
        weekend_amount: Weekend hours times the weekend hourly price.
        bank_holiday_amount: Bank holiday hours times its hourly price.
        total_amount: Sum of the three amounts.
    """

    name: str
    totals: DayCategoryTotals
    work_days: float = 0.0
    weekend_days: float = 0.0
    bank_holiday_days: float = 0.0
    work_amount: float = 0.0
    weekend_amount: float = 0.0
    bank_holiday_amount: float = 0.0
    total_amount: float = 0.0

    @property
    def work_hours(self) -> float:
        return self.totals.work_hours

    @property
    def weekend_hours(self) -> float:
        return self.totals.weekend_hours

    @property
    def bank_holiday_hours(self) -> float:
        return self.totals.bank_holiday_hours


@dataclass
class ScheduleReport:
    """Per-user results for a single schedule."""

    id: str
    name: str
    users: list[ScheduleUserReport] = field(default_factory=list)

    @property
    def total_amount(self) -> float:
        return sum(u.total_amount for u in self.users)


@dataclass
class CrossScheduleSummary:
    """Totals of one user name summed over every processed schedule."""

    name: str
    totals: DayCategoryTotals = field(default_factory=DayCategoryTotals)
    work_days: float = 0.0
    weekend_days: float = 0.0
    bank_holiday_days: float = 0.0
    work_amount: float = 0.0
    weekend_amount: float = 0.0
    bank_holiday_amount: float = 0.0
    total_amount: float = 0.0

    @property
    def work_hours(self) -> float:
        return self.totals.work_hours

    @property
    def weekend_hours(self) -> float:
        return self.totals.weekend_hours

    @property
    def bank_holiday_hours(self) -> float:
        return self.totals.bank_holiday_hours


@dataclass
class ScheduleCoverage:
    """Coverage of one schedule over a billing window.

    Attributes:
        id: Schedule identifier.
        name: Schedule display name.
        time_zone: IANA name of the schedule's time zone.
        start: Start of the billing window, if known.
        end: End of the billing window, if known.
        rotations: User rotations keyed by user ID, in first-seen order.
    """

    id: str
    name: str
    time_zone: str = "UTC"
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    rotations: dict[str, UserRotation] = field(default_factory=dict)

    def add_period(self, user_id: str, name: str, period: CoveragePeriod) -> None:
        """Append a period to a user's rotation, creating it if needed."""
        rotation = self.rotations.get(user_id)
        if rotation is None:
            rotation = UserRotation(user_id=user_id, name=name)
            self.rotations[user_id] = rotation
        rotation.periods.append(period)


@dataclass
class ReportData:
    """Everything a report writer needs to render a report."""

    start: datetime
    end: datetime
    currency: str = ""
    schedules: list[ScheduleReport] = field(default_factory=list)
    summary: list[CrossScheduleSummary] = field(default_factory=list)
