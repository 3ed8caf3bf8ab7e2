"""
Reports module.

Usage:
    from pera_analytics.features.reports import ReportBuilder

    builder = ReportBuilder(athletes, sessions, standards)
    print(builder.team_summary())
"""

from .builder import ReportBuilder

__all__ = ["ReportBuilder"]
