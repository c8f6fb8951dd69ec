"""Text reports for dispatch outcomes."""

from uc_engine.reporting.text import (
    TextReportConfig,
    format_outcome,
    format_schedule,
)

__all__ = [
    "TextReportConfig",
    "format_outcome",
    "format_schedule",
]
