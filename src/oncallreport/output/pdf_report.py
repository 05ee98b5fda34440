"""PDF generation for on-call reports.

This module creates a printable PDF containing:
- One section per schedule with each user's hours, days and amounts
- A summary page of every user across all schedules
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from oncallreport.domain.models import (
    CrossScheduleSummary,
    ReportData,
    ScheduleUserReport,
)
from oncallreport.output.writer import ReportWriter, format_amount, window_label

RowSource = Union[ScheduleUserReport, CrossScheduleSummary]

# Column headers and x offsets (points from the left margin)
COLUMNS = [
    ("User", 0),
    ("Weekday h", 170),
    ("Weekend h", 235),
    ("Bank hol. h", 300),
    ("Weekdays", 375),
    ("Weekend", 440),
    ("Bank hol.", 505),
    ("Amount", 580),
]

HEADER_FILL = (0.85, 0.88, 0.95)
STRIPE_FILL = (0.96, 0.96, 0.96)


class PDFReport(ReportWriter):
    """Generates printable PDF reports.

    Example:
        >>> writer = PDFReport(currency="GBP", directory="/tmp")
        >>> writer.generate_report(data)
        'PDF report written to /tmp/schedules_report_2024-03-01_2024-04-01.pdf'
    """

    def __init__(
        self,
        currency: str = "",
        directory: Union[str, Path] = ".",
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.currency = currency
        self.directory = Path(directory)
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def output_path(self, data: ReportData) -> Path:
        """Path of the PDF file for a report."""
        name = f"schedules_report_{data.start:%Y-%m-%d}_{data.end:%Y-%m-%d}.pdf"
        return self.directory / name

    def generate_report(self, data: ReportData) -> str:
        path = self.output_path(data)
        self.generate(data, path)
        return f"PDF report written to {path}"

    def generate(self, data: ReportData, output_path: Union[str, Path]) -> None:
        """Generate the PDF and save it to a file."""
        canvas = _import_canvas()
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        self._draw_report(c, data)
        c.save()

    def generate_to_buffer(self, data: ReportData) -> BytesIO:
        """Generate the PDF and return it as a bytes buffer."""
        canvas = _import_canvas()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        self._draw_report(c, data)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_report(self, c, data: ReportData) -> None:
        y = self._draw_header(c, data)

        for schedule in data.schedules:
            y = self._draw_section(
                c, data, f"Schedule: {schedule.name} ({schedule.id})", schedule.users, y
            )

        c.showPage()
        y = self._draw_header(c, data)
        self._draw_section(
            c,
            data,
            "Users summary (all schedules)",
            sorted(data.summary, key=lambda s: s.name),
            y,
        )
        c.showPage()

    def _draw_header(self, c, data: ReportData) -> float:
        """Draw page header and return the y position below it."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(self.margin, self.page_height - self.margin - 20, "On-call Report")

        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"Period: {window_label(data)}",
        )
        return self.page_height - self.margin - 60

    def _draw_section(
        self,
        c,
        data: ReportData,
        title: str,
        rows: list[RowSource],
        y: float,
    ) -> float:
        """Draw a titled table, starting new pages as needed."""
        row_height = 16

        if y < self.margin + 4 * row_height:
            c.showPage()
            y = self._draw_header(c, data)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, title)
        y -= row_height
        y = self._draw_column_headers(c, y, row_height)

        if not rows:
            c.setFont("Helvetica-Oblique", 9)
            c.drawString(self.margin + 4, y, "No users")
            return y - 2 * row_height

        for i, row in enumerate(rows):
            if y < self.margin + row_height:
                c.showPage()
                y = self._draw_header(c, data)
                y = self._draw_column_headers(c, y, row_height)

            if i % 2:
                c.setFillColorRGB(*STRIPE_FILL)
                c.rect(
                    self.margin,
                    y - 4,
                    self.page_width - 2 * self.margin,
                    row_height,
                    fill=1,
                    stroke=0,
                )
            c.setFillColorRGB(0, 0, 0)
            c.setFont("Helvetica", 9)
            values = [
                row.name[:30],
                f"{row.work_hours:.1f}",
                f"{row.weekend_hours:.1f}",
                f"{row.bank_holiday_hours:.1f}",
                f"{row.work_days:.2f}",
                f"{row.weekend_days:.2f}",
                f"{row.bank_holiday_days:.2f}",
                format_amount(row.total_amount, self.currency),
            ]
            for (_, offset), value in zip(COLUMNS, values):
                c.drawString(self.margin + offset + 4, y, value)
            y -= row_height

        return y - row_height

    def _draw_column_headers(self, c, y: float, row_height: float) -> float:
        c.setFillColorRGB(*HEADER_FILL)
        c.rect(
            self.margin,
            y - 4,
            self.page_width - 2 * self.margin,
            row_height,
            fill=1,
            stroke=0,
        )
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 9)
        for label, offset in COLUMNS:
            c.drawString(self.margin + offset + 4, y, label)
        return y - row_height


def _import_canvas():
    try:
        from reportlab.pdfgen import canvas
    except ImportError:
        raise ImportError(
            "reportlab is required for PDF generation. "
            "Install with: pip install reportlab"
        )
    return canvas
