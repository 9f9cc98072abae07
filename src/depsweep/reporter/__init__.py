"""Report assembly and output."""
from .report import ReportGenerator, format_size

__all__ = ["ReportGenerator", "format_size"]
