"""Output generation modules for on-call reports."""

from oncallreport.output.console_report import ConsoleReport
from oncallreport.output.pdf_report import PDFReport
from oncallreport.output.writer import ReportWriter

__all__ = ["ConsoleReport", "PDFReport", "ReportWriter"]
