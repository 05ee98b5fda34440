"""Bank holiday calendars.

A calendar answers two questions about a date: is it a bank holiday and
is it a weekend day. Calendars are registered per region and year under
the key ``"<name>-<year>"`` and resolved per user when a schedule is
aggregated.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Union

from oncallreport.errors import CalendarNotFoundError, ConfigurationError

DateLike = Union[date, datetime]


class CalendarLookup(ABC):
    """Abstract base class for day classification lookups."""

    @abstractmethod
    def is_bank_holiday(self, day: DateLike) -> bool:
        """Check if a date is a bank holiday."""
        pass

    @abstractmethod
    def is_weekend(self, day: DateLike) -> bool:
        """Check if a date falls on a weekend day."""
        pass


def _as_date(day: DateLike) -> date:
    if isinstance(day, datetime):
        return day.date()
    return day


@dataclass(frozen=True)
class BankHolidayCalendar(CalendarLookup):
    """Calendar backed by an explicit list of bank holidays.

    Attributes:
        name: Calendar name as referenced by rotation users (e.g. "uk").
        year: Year the holiday list covers.
        holidays: Bank holiday dates.
        weekend_days: Weekday numbers treated as weekend (Monday is 0).
    """

    name: str
    year: int
    holidays: frozenset[date] = field(default_factory=frozenset)
    weekend_days: frozenset[int] = frozenset({5, 6})

    @property
    def key(self) -> str:
        return calendar_key(self.name, self.year)

    def is_bank_holiday(self, day: DateLike) -> bool:
        return _as_date(day) in self.holidays

    def is_weekend(self, day: DateLike) -> bool:
        return _as_date(day).weekday() in self.weekend_days


def calendar_key(name: str, year: int) -> str:
    """Registry key of a calendar for a given year."""
    return f"{name}-{year}"


class CalendarRegistry:
    """Bank holiday calendars indexed by ``"<name>-<year>"``.

    Example:
        >>> registry = CalendarRegistry([BankHolidayCalendar("uk", 2024)])
        >>> registry.resolve("uk", 2024).is_weekend(date(2024, 3, 3))
        True
    """

    def __init__(self, calendars: Optional[Iterable[BankHolidayCalendar]] = None):
        self._calendars: dict[str, BankHolidayCalendar] = {}
        for calendar in calendars or ():
            self.add(calendar)

    def add(self, calendar: BankHolidayCalendar) -> None:
        self._calendars[calendar.key] = calendar

    def __contains__(self, key: str) -> bool:
        return key in self._calendars

    def __len__(self) -> int:
        return len(self._calendars)

    def resolve(self, name: str, year: int, user_id: str = "") -> BankHolidayCalendar:
        """Get the calendar for a name and year.

        Raises:
            CalendarNotFoundError: If no calendar is registered for the key.
        """
        key = calendar_key(name, year)
        calendar = self._calendars.get(key)
        if calendar is None:
            raise CalendarNotFoundError(key, user_id)
        return calendar

    @classmethod
    def from_dict(cls, data: dict) -> "CalendarRegistry":
        """Build a registry from the ``calendars`` section of the config.

        The section maps ``"<name>-<year>"`` keys to objects holding a
        ``holidays`` list of ISO dates and an optional ``weekend_days``
        list of weekday numbers.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("'calendars' must be a JSON object")

        registry = cls()
        for key, entry in data.items():
            name, sep, year_text = key.rpartition("-")
            if not sep or not name or not year_text.isdigit():
                raise ConfigurationError(
                    f"calendar key '{key}' must look like '<name>-<year>'"
                )
            if not isinstance(entry, dict):
                raise ConfigurationError(f"calendar '{key}' must be a JSON object")
            try:
                holidays = frozenset(
                    date.fromisoformat(d) for d in entry.get("holidays", [])
                )
                weekend_days = frozenset(entry.get("weekend_days", (5, 6)))
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"calendar '{key}': {e}") from e

            if not all(isinstance(d, int) and 0 <= d <= 6 for d in weekend_days):
                raise ConfigurationError(
                    f"calendar '{key}': weekend_days must be integers in 0-6"
                )

            registry.add(
                BankHolidayCalendar(
                    name=name,
                    year=int(year_text),
                    holidays=holidays,
                    weekend_days=weekend_days,
                )
            )
        return registry
