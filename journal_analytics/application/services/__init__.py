"""Application Services for journal analytics.

Services orchestrate repository access to implement use cases.

Available services:
- AnalyticsService: Metrics, risk metrics, breakdowns, equity curve
- CalendarService: Month grid and single-day drill-down
"""

from journal_analytics.application.services.analytics import (
    AnalyticsService,
    AnalyticsReport,
    DAY_NAMES,
    trades_to_frame,
)
from journal_analytics.application.services.calendar_view import (
    CalendarService,
    DaySummary,
    month_bounds,
)

__all__ = [
    "AnalyticsService",
    "AnalyticsReport",
    "DAY_NAMES",
    "trades_to_frame",
    "CalendarService",
    "DaySummary",
    "month_bounds",
]
