"""Cross-schedule summary.

Users are merged by display name, not by ID: two distinct users sharing
a display name end up in one summary entry.
"""

from oncallreport.domain.models import (
    CrossScheduleSummary,
    DayCategory,
    ScheduleReport,
)
from oncallreport.reporting.pricing import PricingInfo


def calculate_summary(
    schedules: list[ScheduleReport],
    pricing: PricingInfo,
) -> list[CrossScheduleSummary]:
    """Sum every user's hours and amounts over all schedules.

    Day counts are recomputed from the summed hours rather than summed,
    using the same pricing as the per-schedule reports.

    Args:
        schedules: Per-schedule reports to fold.
        pricing: Pricing of the report run.

    Returns:
        One summary per distinct user name, in first-seen order.
    """
    summaries: dict[str, CrossScheduleSummary] = {}

    for schedule in schedules:
        for user in schedule.users:
            summary = summaries.get(user.name)
            if summary is None:
                summary = CrossScheduleSummary(name=user.name)
                summaries[user.name] = summary

            summary.totals.merge(user.totals)
            summary.work_amount += user.work_amount
            summary.weekend_amount += user.weekend_amount
            summary.bank_holiday_amount += user.bank_holiday_amount
            summary.total_amount += user.total_amount

    for summary in summaries.values():
        summary.work_days = (
            summary.work_hours / pricing.for_category(DayCategory.WEEKDAY).billable_hours
        )
        summary.weekend_days = (
            summary.weekend_hours / pricing.for_category(DayCategory.WEEKEND).billable_hours
        )
        summary.bank_holiday_days = (
            summary.bank_holiday_hours
            / pricing.for_category(DayCategory.BANK_HOLIDAY).billable_hours
        )

    return list(summaries.values())
