"""Reporting engine: pricing, classification, aggregation and summary."""

from oncallreport.reporting.aggregator import ScheduleAggregator
from oncallreport.reporting.classifier import DayClassifier
from oncallreport.reporting.pricing import (
    CategoryPricing,
    PricingInfo,
    PricingResolver,
)
from oncallreport.reporting.report_generator import (
    ReportGenerator,
    billing_window,
    previous_month,
)
from oncallreport.reporting.summary import calculate_summary

__all__ = [
    # Engine
    "DayClassifier",
    "ScheduleAggregator",
    "calculate_summary",
    # Pricing
    "CategoryPricing",
    "PricingInfo",
    "PricingResolver",
    # Orchestration
    "ReportGenerator",
    "billing_window",
    "previous_month",
]
