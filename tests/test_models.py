"""Tests for domain models."""

from datetime import datetime, timedelta, timezone

import pytest

from oncallreport.domain.models import (
    CoveragePeriod,
    DayCategory,
    DayCategoryTotals,
    ScheduleCoverage,
)


class TestCoveragePeriod:
    """Tests for CoveragePeriod."""

    def test_samples_half_open(self):
        period = CoveragePeriod(datetime(2024, 3, 4, 0), datetime(2024, 3, 4, 2))

        samples = list(period.samples(timedelta(minutes=30)))

        assert samples == [
            datetime(2024, 3, 4, 0),
            datetime(2024, 3, 4, 0, 30),
            datetime(2024, 3, 4, 1),
            datetime(2024, 3, 4, 1, 30),
        ]

    def test_samples_keep_time_zone_of_start(self):
        tz = timezone(timedelta(hours=2))
        period = CoveragePeriod(
            datetime(2024, 3, 4, 10, tzinfo=tz), datetime(2024, 3, 4, 11, tzinfo=tz)
        )

        samples = list(period.samples(timedelta(minutes=30)))

        assert [s.hour for s in samples] == [10, 10]
        assert all(s.utcoffset() == timedelta(hours=2) for s in samples)

    def test_reversed_period_has_no_samples(self):
        period = CoveragePeriod(datetime(2024, 3, 4, 2), datetime(2024, 3, 4, 0))

        assert list(period.samples(timedelta(minutes=30))) == []
        assert period.duration_hours == 0.0

    def test_non_positive_step_rejected(self):
        period = CoveragePeriod(datetime(2024, 3, 4, 0), datetime(2024, 3, 4, 2))

        with pytest.raises(ValueError):
            list(period.samples(timedelta(0)))


class TestDayCategoryTotals:
    """Tests for DayCategoryTotals."""

    def test_add_routes_to_bucket(self):
        totals = DayCategoryTotals()

        totals.add(DayCategory.WEEKDAY, 0.5)
        totals.add(DayCategory.WEEKEND, 1.0)
        totals.add(DayCategory.BANK_HOLIDAY, 1.5)

        assert totals.work_hours == 0.5
        assert totals.weekend_hours == 1.0
        assert totals.bank_holiday_hours == 1.5
        assert totals.total_hours == 3.0
        assert totals.hours_for(DayCategory.WEEKEND) == 1.0

    def test_totals_never_decrease(self):
        totals = DayCategoryTotals()
        previous = 0.0
        for i in range(10):
            totals.add(list(DayCategory)[i % 3], 0.5)
            assert totals.total_hours >= previous
            previous = totals.total_hours

        with pytest.raises(ValueError):
            totals.add(DayCategory.WEEKDAY, -0.5)


class TestScheduleCoverage:
    """Tests for ScheduleCoverage."""

    def test_add_period_groups_by_user(self):
        coverage = ScheduleCoverage(id="S1", name="Schedule")
        first = CoveragePeriod(datetime(2024, 3, 1), datetime(2024, 3, 2))
        second = CoveragePeriod(datetime(2024, 3, 3), datetime(2024, 3, 4))

        coverage.add_period("P001", "Alice", first)
        coverage.add_period("P002", "Bob", first)
        coverage.add_period("P001", "Alice", second)

        assert list(coverage.rotations) == ["P001", "P002"]
        assert coverage.rotations["P001"].periods == [first, second]
        assert coverage.rotations["P001"].covered_hours == 48.0
