"""Exception hierarchy for report generation.

Configuration and calendar errors abort the whole report. User lookup
errors are isolated to the user they concern: the aggregator logs them
and carries on with the remaining users.
"""


class OnCallReportError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(OnCallReportError):
    """Configuration is missing a required value or holds an invalid one."""


class CalendarNotFoundError(OnCallReportError, LookupError):
    """A user's bank holiday calendar has no entry for the required year."""

    def __init__(self, calendar_name: str, user_id: str = ""):
        self.calendar_name = calendar_name
        self.user_id = user_id
        message = f"calendar '{calendar_name}' not found"
        if user_id:
            message += f" for user '{user_id}'"
        super().__init__(f"{message}. Aborting")


class UserLookupError(OnCallReportError, LookupError):
    """A user present in coverage data has no rotation user configured."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"user '{user_id}' not found in rotation users")


class CoverageParseError(OnCallReportError, ValueError):
    """Coverage data for a schedule could not be parsed."""


class ScheduleNotFoundError(OnCallReportError, LookupError):
    """A requested schedule is not present in the coverage source."""
