"""Report helpers."""

from .printing import ReportUnavailable, build_print_report, export_report_workbook

__all__ = ["ReportUnavailable", "build_print_report", "export_report_workbook"]
