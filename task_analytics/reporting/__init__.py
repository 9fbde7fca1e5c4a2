"""Report assembly and rendering."""

from .report import AnalyticsReport, build_report

__all__ = ['AnalyticsReport', 'build_report']
