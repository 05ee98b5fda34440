"""Pricing resolution.

Rates are configured per full day. A day category with an excluded
window has fewer than 24 billable hours, so its hourly price is the
daily rate spread over the billable hours only.
"""

from dataclasses import dataclass

from oncallreport.domain.config import HOURS_PER_DAY, ReportConfig
from oncallreport.domain.models import DayCategory
from oncallreport.errors import ConfigurationError


@dataclass(frozen=True)
class CategoryPricing:
    """Pricing of one day category.

    Attributes:
        daily_rate: Configured price of a full day.
        billable_hours: Hours per day that are billed.
        hourly_price: daily_rate / billable_hours.
    """

    daily_rate: float
    billable_hours: int
    hourly_price: float


@dataclass(frozen=True)
class PricingInfo:
    """Pricing of all day categories for one report run."""

    weekday: CategoryPricing
    weekend: CategoryPricing
    bank_holiday: CategoryPricing

    def for_category(self, category: DayCategory) -> CategoryPricing:
        if category is DayCategory.WEEKDAY:
            return self.weekday
        if category is DayCategory.WEEKEND:
            return self.weekend
        return self.bank_holiday


class PricingResolver:
    """Derives billable hours and hourly prices from the configuration.

    Example:
        >>> pricing = PricingResolver(config).resolve()
        >>> pricing.weekday.hourly_price
        4.166666666666667
    """

    def __init__(self, config: ReportConfig):
        self.config = config

    def resolve(self) -> PricingInfo:
        """Resolve pricing for every day category.

        Raises:
            ConfigurationError: If a category has no price or no billable hours.
        """
        return PricingInfo(
            weekday=self.resolve_category(DayCategory.WEEKDAY),
            weekend=self.resolve_category(DayCategory.WEEKEND),
            bank_holiday=self.resolve_category(DayCategory.BANK_HOLIDAY),
        )

    def resolve_category(self, category: DayCategory) -> CategoryPricing:
        daily_rate = self.config.find_price(category)

        excluded = self.config.find_excluded_hours(category)
        excluded_width = excluded.width if excluded is not None else 0
        billable_hours = HOURS_PER_DAY - excluded_width
        if billable_hours <= 0:
            raise ConfigurationError(
                f"excluded hours for '{category.value}' leave no billable hours"
            )

        return CategoryPricing(
            daily_rate=daily_rate,
            billable_hours=billable_hours,
            hourly_price=daily_rate / billable_hours,
        )
