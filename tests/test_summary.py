"""Tests for the cross-schedule summary."""

import pytest

from oncallreport.domain.config import ExcludedHours
from oncallreport.domain.models import (
    DayCategory,
    DayCategoryTotals,
    ScheduleReport,
)
from oncallreport.reporting.aggregator import ScheduleAggregator
from oncallreport.reporting.pricing import PricingResolver
from oncallreport.reporting.summary import calculate_summary


@pytest.fixture
def pricing(config_factory):
    config = config_factory(
        excluded_hours={DayCategory.WEEKDAY: ExcludedHours(9, 17)}
    )
    return PricingResolver(config).resolve()


@pytest.fixture
def builder(config, calendars, pricing):
    """Aggregator used only to derive user reports from totals."""
    return ScheduleAggregator(config, calendars, pricing)


class TestCalculateSummary:
    """Tests for calculate_summary."""

    def test_sums_users_sharing_a_name(self, builder, pricing):
        platform = ScheduleReport(
            id="PSCHED1",
            name="Platform",
            users=[
                builder.build_user_report("Alice", DayCategoryTotals(16.0, 24.0, 0.0)),
                builder.build_user_report("Bob", DayCategoryTotals(8.0, 0.0, 0.0)),
            ],
        )
        payments = ScheduleReport(
            id="PSCHED2",
            name="Payments",
            users=[
                builder.build_user_report("Alice", DayCategoryTotals(8.0, 12.0, 24.0)),
            ],
        )

        summary = calculate_summary([platform, payments], pricing)

        assert [s.name for s in summary] == ["Alice", "Bob"]
        alice = summary[0]
        assert alice.work_hours == 24.0
        assert alice.weekend_hours == 36.0
        assert alice.bank_holiday_hours == 24.0
        assert alice.work_amount == pytest.approx(
            platform.users[0].work_amount + payments.users[0].work_amount
        )
        assert alice.total_amount == pytest.approx(
            platform.users[0].total_amount + payments.users[0].total_amount
        )

    def test_day_counts_recomputed_from_summed_hours(self, builder, pricing):
        reports = [
            ScheduleReport(
                id=f"S{i}",
                name=f"Schedule {i}",
                users=[builder.build_user_report("Alice", DayCategoryTotals(8.0, 6.0, 0.0))],
            )
            for i in range(3)
        ]

        (alice,) = calculate_summary(reports, pricing)

        assert alice.work_days == pytest.approx(24.0 / 16)
        assert alice.weekend_days == pytest.approx(18.0 / 24)
        assert alice.bank_holiday_days == 0.0

    def test_summary_does_not_mutate_schedule_totals(self, builder, pricing):
        totals = DayCategoryTotals(8.0, 0.0, 0.0)
        report = ScheduleReport(
            id="S1", name="Schedule", users=[builder.build_user_report("Alice", totals)]
        )

        calculate_summary([report, report], pricing)

        assert totals.work_hours == 8.0

    def test_no_schedules(self, pricing):
        assert calculate_summary([], pricing) == []
