"""Report configuration.

The configuration is a JSON document holding the daily rotation prices,
excluded-hours windows, rotation timing, the rotation users with their
holiday calendars, the schedules to ignore and the bank holiday
calendars themselves. It is parsed once into a ``ReportConfig`` that is
passed explicitly to every component that needs it.

Example document::

    {
        "rotation_info": {
            "daily_rotation_starts_at": 6,
            "check_rotation_change_every": 30
        },
        "rotation_prices": {
            "currency": "GBP",
            "days_prices": [
                {"day": "weekday", "price": 100},
                {"day": "weekend", "price": 200},
                {"day": "bankholiday", "price": 300}
            ]
        },
        "rotation_excluded_hours": [
            {"day": "weekday", "excluded_starts_at": 9, "excluded_ends_at": 17}
        ],
        "rotation_users": [
            {"user_id": "PABC123", "name": "Alice", "holidays_calendar": "uk"}
        ],
        "schedules_to_ignore": ["PIGNORE"],
        "calendars": {"uk-2024": {"holidays": ["2024-12-25"]}}
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from oncallreport.domain.calendars import CalendarRegistry
from oncallreport.domain.models import DayCategory
from oncallreport.errors import ConfigurationError, UserLookupError

HOURS_PER_DAY = 24

DEFAULT_ROTATION_STARTS_AT = 6
DEFAULT_CHECK_EVERY_MINUTES = 30


@dataclass(frozen=True)
class ExcludedHours:
    """Hour-of-day window [starts_at, ends_at) that is not billed.

    Attributes:
        starts_at: First excluded hour.
        ends_at: First hour after the window.
    """

    starts_at: int
    ends_at: int

    def __post_init__(self):
        if not 0 <= self.starts_at <= self.ends_at <= HOURS_PER_DAY:
            raise ConfigurationError(
                f"invalid excluded hours window [{self.starts_at}, {self.ends_at})"
            )

    @property
    def width(self) -> int:
        """Number of excluded hours."""
        return self.ends_at - self.starts_at

    def contains(self, hour: int) -> bool:
        """Check if an hour of day falls inside the window."""
        return self.starts_at <= hour < self.ends_at


@dataclass(frozen=True)
class RotationUser:
    """A user allowed to appear in rotations.

    Attributes:
        user_id: Identifier of the user in the paging service.
        name: Display name.
        holidays_calendar: Name of the bank holiday calendar to apply.
    """

    user_id: str
    name: str
    holidays_calendar: str


@dataclass
class ReportConfig:
    """Parsed report configuration.

    Attributes:
        currency: Currency label printed next to amounts.
        day_prices: Daily rate per day category.
        excluded_hours: Optional excluded window per day category.
        rotation_starts_at: Hour at which a rotation day starts; samples
            before it belong to the previous day.
        check_every_minutes: Sampling step used to walk coverage periods.
        rotation_users: Rotation users keyed by user ID.
        schedules_to_ignore: Schedule IDs skipped when reporting all.
    """

    currency: str = ""
    day_prices: dict[DayCategory, float] = field(default_factory=dict)
    excluded_hours: dict[DayCategory, ExcludedHours] = field(default_factory=dict)
    rotation_starts_at: int = DEFAULT_ROTATION_STARTS_AT
    check_every_minutes: int = DEFAULT_CHECK_EVERY_MINUTES
    rotation_users: dict[str, RotationUser] = field(default_factory=dict)
    schedules_to_ignore: frozenset[str] = frozenset()

    def __post_init__(self):
        if not 0 <= self.rotation_starts_at < HOURS_PER_DAY:
            raise ConfigurationError(
                f"daily_rotation_starts_at must be in [0, 24), "
                f"got {self.rotation_starts_at}"
            )
        if self.check_every_minutes <= 0:
            raise ConfigurationError(
                f"check_rotation_change_every must be positive, "
                f"got {self.check_every_minutes}"
            )

    @property
    def sample_hours(self) -> float:
        """Hours represented by one sample."""
        return self.check_every_minutes / 60

    def find_price(self, category: DayCategory) -> float:
        """Get the daily price for a category.

        Raises:
            ConfigurationError: If no price is configured for the category.
        """
        price = self.day_prices.get(category)
        if price is None:
            raise ConfigurationError(f"rotation price for '{category.value}' not found")
        return price

    def find_excluded_hours(self, category: DayCategory) -> Optional[ExcludedHours]:
        """Get the excluded window for a category, if any."""
        return self.excluded_hours.get(category)

    def find_rotation_user(self, user_id: str) -> RotationUser:
        """Get the rotation user with the given ID.

        Raises:
            UserLookupError: If the user is not configured.
        """
        user = self.rotation_users.get(user_id)
        if user is None:
            raise UserLookupError(user_id)
        return user

    def is_schedule_ignored(self, schedule_id: str) -> bool:
        return schedule_id in self.schedules_to_ignore

    @classmethod
    def from_dict(cls, data: dict) -> "ReportConfig":
        """Build a configuration from a parsed JSON document."""
        try:
            rotation_info = data.get("rotation_info", {})
            prices = data.get("rotation_prices", {})

            day_prices = {}
            for entry in prices.get("days_prices", []):
                day_prices[_parse_category(entry["day"])] = float(entry["price"])

            excluded_hours = {}
            for entry in data.get("rotation_excluded_hours", []):
                excluded_hours[_parse_category(entry["day"])] = ExcludedHours(
                    starts_at=int(entry["excluded_starts_at"]),
                    ends_at=int(entry["excluded_ends_at"]),
                )

            rotation_users = {}
            for entry in data.get("rotation_users", []):
                user = RotationUser(
                    user_id=str(entry["user_id"]),
                    name=str(entry.get("name", "")),
                    holidays_calendar=str(entry["holidays_calendar"]),
                )
                rotation_users[user.user_id] = user

            return cls(
                currency=str(prices.get("currency", "")),
                day_prices=day_prices,
                excluded_hours=excluded_hours,
                rotation_starts_at=int(
                    rotation_info.get("daily_rotation_starts_at", DEFAULT_ROTATION_STARTS_AT)
                ),
                check_every_minutes=int(
                    rotation_info.get("check_rotation_change_every", DEFAULT_CHECK_EVERY_MINUTES)
                ),
                rotation_users=rotation_users,
                schedules_to_ignore=frozenset(data.get("schedules_to_ignore", [])),
            )
        except KeyError as e:
            raise ConfigurationError(f"missing configuration key: {e}") from e
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"invalid configuration value: {e}") from e


def _parse_category(value: str) -> DayCategory:
    try:
        return DayCategory(value)
    except ValueError:
        valid = ", ".join(c.value for c in DayCategory)
        raise ConfigurationError(
            f"unknown day '{value}', expected one of: {valid}"
        ) from None


def load_settings(path: Union[str, Path]) -> tuple[ReportConfig, CalendarRegistry]:
    """Load the configuration and bank holiday calendars from a JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"cannot read configuration file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"configuration file '{path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration file '{path}' must hold a JSON object")

    config = ReportConfig.from_dict(data)
    calendars = CalendarRegistry.from_dict(data.get("calendars", {}))
    return config, calendars
