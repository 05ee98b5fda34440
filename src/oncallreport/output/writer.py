"""Report writer interface."""

from abc import ABC, abstractmethod

from oncallreport.domain.models import ReportData


class ReportWriter(ABC):
    """Abstract base class for report writers."""

    @abstractmethod
    def generate_report(self, data: ReportData) -> str:
        """Render the report.

        Args:
            data: Per-schedule reports and the cross-schedule summary.

        Returns:
            A message for the caller to log (may be empty).
        """
        pass


def format_amount(amount: float, currency: str) -> str:
    """Format an amount with two decimals and an optional currency label."""
    if currency:
        return f"{currency} {amount:,.2f}"
    return f"{amount:,.2f}"


def window_label(data: ReportData) -> str:
    return f"{data.start:%Y-%m-%d %H:%M} - {data.end:%Y-%m-%d %H:%M}"
