# session_scheduler/export/__init__.py
"""Export package public API.

Example
-------
from session_scheduler.export import ReportBuilder
"""

from .report_builder import REPORT_COLUMNS, ReportBuilder, ReportFormat

__all__ = [
    "REPORT_COLUMNS",
    "ReportBuilder",
    "ReportFormat",
]
