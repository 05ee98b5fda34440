"""Domain models, configuration and calendars for on-call reporting."""

from oncallreport.domain.calendars import (
    BankHolidayCalendar,
    CalendarLookup,
    CalendarRegistry,
)
from oncallreport.domain.config import (
    ExcludedHours,
    ReportConfig,
    RotationUser,
    load_settings,
)
from oncallreport.domain.models import (
    CoveragePeriod,
    CrossScheduleSummary,
    DayCategory,
    DayCategoryTotals,
    ReportData,
    ScheduleCoverage,
    ScheduleReport,
    ScheduleUserReport,
    UserRotation,
)

__all__ = [
    # Models
    "CoveragePeriod",
    "CrossScheduleSummary",
    "DayCategory",
    "DayCategoryTotals",
    "ReportData",
    "ScheduleCoverage",
    "ScheduleReport",
    "ScheduleUserReport",
    "UserRotation",
    # Configuration
    "ExcludedHours",
    "ReportConfig",
    "RotationUser",
    "load_settings",
    # Calendars
    "BankHolidayCalendar",
    "CalendarLookup",
    "CalendarRegistry",
]
