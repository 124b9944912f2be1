"""Application Layer: Use cases and service orchestration.

This layer contains:
- services/: Business logic orchestration
  - analytics.py: Performance metrics and breakdowns
  - calendar_view.py: Calendar month and day views
"""

from journal_analytics.application.services import (
    AnalyticsService,
    AnalyticsReport,
    CalendarService,
    DaySummary,
)

__all__ = [
    "AnalyticsService",
    "AnalyticsReport",
    "CalendarService",
    "DaySummary",
]
