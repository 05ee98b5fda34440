"""On-call rotation hours and compensation reports."""

__version__ = "0.1.0"
