"""Coverage source backed by exported schedule data.

Schedules are read from a JSON document in the shape returned by the
paging service's schedule endpoint::

    {
        "schedules": [
            {
                "id": "PSCHED1",
                "name": "Platform",
                "time_zone": "Europe/London",
                "final_schedule": {
                    "rendered_schedule_entries": [
                        {
                            "start": "2024-03-01T08:00:00Z",
                            "end": "2024-03-08T08:00:00Z",
                            "user": {"id": "PABC123", "summary": "Alice"}
                        }
                    ]
                }
            }
        ]
    }

Entries are converted to the schedule's time zone, clipped to the
billing window and grouped per user.
"""

import json
import logging
from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from oncallreport.domain.models import CoveragePeriod, ScheduleCoverage
from oncallreport.errors import CoverageParseError

logger = logging.getLogger(__name__)


def resolve_time_zone(name: str) -> tzinfo:
    """Get the tzinfo for an IANA name, falling back to UTC."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone '%s', using UTC", name)
        return timezone.utc


def parse_timestamp(value: str, tz: tzinfo) -> datetime:
    """Parse an RFC 3339 timestamp and express it in ``tz``.

    Raises:
        ValueError: If the value is not a timestamp with a UTC offset.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected a timestamp string, got {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp '{value}' has no UTC offset")
    return parsed.astimezone(tz)


def parse_schedule(
    data: dict,
    window_start: Optional[datetime] = None,
    window_end: Optional[datetime] = None,
) -> ScheduleCoverage:
    """Parse one schedule into coverage grouped per user.

    Args:
        data: Schedule object of the exported document.
        window_start: Start of the billing window. Naive values are taken
            to be in the schedule's time zone.
        window_end: End of the billing window, same convention.

    Raises:
        CoverageParseError: If a field is missing or a timestamp is malformed.
    """
    if not isinstance(data, dict):
        raise CoverageParseError(f"expected a schedule object, got {data!r}")

    schedule_id = str(data.get("id", ""))
    try:
        time_zone = data.get("time_zone") or "UTC"
        tz = resolve_time_zone(time_zone)
        start = _localize(window_start, tz)
        end = _localize(window_end, tz)

        coverage = ScheduleCoverage(
            id=schedule_id,
            name=str(data.get("name", schedule_id)),
            time_zone=time_zone,
            start=start,
            end=end,
        )

        entries = data["final_schedule"]["rendered_schedule_entries"]
        for entry in entries:
            entry_start = parse_timestamp(entry["start"], tz)
            entry_end = parse_timestamp(entry["end"], tz)

            if start is not None and entry_start < start:
                entry_start = start
            if end is not None and entry_end > end:
                entry_end = end
            if entry_end <= entry_start:
                continue

            user = entry["user"]
            coverage.add_period(
                user_id=str(user["id"]),
                name=str(user.get("summary", user["id"])),
                period=CoveragePeriod(start=entry_start, end=entry_end),
            )
    except KeyError as e:
        raise CoverageParseError(
            f"schedule '{schedule_id}': missing field {e}"
        ) from e
    except (TypeError, ValueError) as e:
        raise CoverageParseError(f"schedule '{schedule_id}': {e}") from e

    return coverage


def load_coverage(
    path: Union[str, Path],
    window_start: Optional[datetime] = None,
    window_end: Optional[datetime] = None,
) -> list[ScheduleCoverage]:
    """Load every schedule of an exported coverage file.

    Raises:
        CoverageParseError: If the file cannot be read or a schedule is malformed.
    """
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise CoverageParseError(f"cannot read coverage file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise CoverageParseError(f"coverage file '{path}' is not valid JSON: {e}") from e

    if isinstance(document, dict):
        schedules = document.get("schedules", [])
    else:
        schedules = document
    if not isinstance(schedules, list):
        raise CoverageParseError(f"coverage file '{path}' holds no schedule list")

    return [parse_schedule(s, window_start, window_end) for s in schedules]


def _localize(value: Optional[datetime], tz: tzinfo) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)
