"""Tests for pricing resolution."""

import pytest

from oncallreport.domain.config import ExcludedHours
from oncallreport.domain.models import DayCategory
from oncallreport.errors import ConfigurationError
from oncallreport.reporting.pricing import PricingResolver


class TestPricingResolver:
    """Tests for PricingResolver."""

    def test_full_day_without_excluded_hours(self, config):
        """Without an excluded window a day has 24 billable hours."""
        pricing = PricingResolver(config).resolve()

        assert pricing.weekday.billable_hours == 24
        assert pricing.weekday.hourly_price == pytest.approx(100 / 24)
        assert pricing.weekend.hourly_price == pytest.approx(200 / 24)
        assert pricing.bank_holiday.hourly_price == pytest.approx(300 / 24)

    def test_excluded_window_reduces_billable_hours(self, config_factory):
        """A [9, 17) window leaves 16 billable hours."""
        config = config_factory(
            excluded_hours={DayCategory.WEEKDAY: ExcludedHours(9, 17)}
        )
        pricing = PricingResolver(config).resolve()

        assert pricing.weekday.billable_hours == 16
        assert pricing.weekday.hourly_price == pytest.approx(100 / 16)
        # Other categories are unaffected
        assert pricing.weekend.billable_hours == 24

    @pytest.mark.parametrize("window", [None, (9, 17), (0, 23), (22, 24)])
    def test_hourly_price_round_trips_to_daily_rate(self, config_factory, window):
        """hourly_price * billable_hours equals the daily rate."""
        excluded = {}
        if window:
            excluded = {DayCategory.WEEKEND: ExcludedHours(*window)}
        pricing = PricingResolver(config_factory(excluded_hours=excluded)).resolve()

        for category in DayCategory:
            entry = pricing.for_category(category)
            assert entry.hourly_price * entry.billable_hours == pytest.approx(
                entry.daily_rate
            )

    def test_missing_rate_is_configuration_error(self, config_factory):
        config = config_factory(day_prices={DayCategory.WEEKDAY: 100.0})

        with pytest.raises(ConfigurationError, match="weekend"):
            PricingResolver(config).resolve()

    def test_fully_excluded_category_is_configuration_error(self, config_factory):
        config = config_factory(
            excluded_hours={DayCategory.BANK_HOLIDAY: ExcludedHours(0, 24)}
        )

        with pytest.raises(ConfigurationError, match="bankholiday"):
            PricingResolver(config).resolve()

    def test_amount_for_eight_weekday_hours(self, config):
        """8 weekday hours at 100/day cost 33.33 and count as a third of a day."""
        weekday = PricingResolver(config).resolve().weekday

        assert 8 * weekday.hourly_price == pytest.approx(33.333, abs=1e-3)
        assert 8 / weekday.billable_hours == pytest.approx(0.333, abs=1e-3)
