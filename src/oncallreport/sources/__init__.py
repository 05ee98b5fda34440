"""Coverage sources."""

from oncallreport.sources.coverage import load_coverage, parse_schedule

__all__ = ["load_coverage", "parse_schedule"]
