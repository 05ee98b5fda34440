"""Shared fixtures for reporting tests."""

import logging
from datetime import date

import pytest

from oncallreport.domain.calendars import BankHolidayCalendar, CalendarRegistry
from oncallreport.domain.config import ReportConfig, RotationUser
from oncallreport.domain.models import DayCategory


def make_config(**overrides) -> ReportConfig:
    """Build a config with 100/200/300 daily prices and two UK users."""
    values = dict(
        currency="GBP",
        day_prices={
            DayCategory.WEEKDAY: 100.0,
            DayCategory.WEEKEND: 200.0,
            DayCategory.BANK_HOLIDAY: 300.0,
        },
        rotation_starts_at=6,
        check_every_minutes=30,
        rotation_users={
            "P001": RotationUser("P001", "Alice", "uk"),
            "P002": RotationUser("P002", "Bob", "uk"),
        },
    )
    values.update(overrides)
    return ReportConfig(**values)


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def uk_calendar():
    """UK 2024 calendar with Good Friday and Easter Monday."""
    return BankHolidayCalendar(
        name="uk",
        year=2024,
        holidays=frozenset({date(2024, 3, 29), date(2024, 4, 1), date(2024, 12, 25)}),
    )


@pytest.fixture
def calendars(uk_calendar):
    return CalendarRegistry([uk_calendar])


@pytest.fixture
def config_factory():
    """Factory building configs with selected fields overridden."""
    return make_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging() in CLI runs."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
