"""Domain Layer: Core business logic and entities.

This layer contains:
- models.py: Data structures (Trade, MetricsResult, breakdown stats)
- calculations.py: Per-trade PNL and duration arithmetic
- metrics/: Performance and risk calculations
"""

from journal_analytics.domain.models import (
    Trade,
    TradeSide,
    Tag,
    MetricsResult,
    RiskMetrics,
    DayOfWeekStats,
    HourOfDayStats,
    TagStats,
    SymbolStats,
    EquityCurvePoint,
    CalendarDay,
    normalize_side,
    generate_slug,
)
from journal_analytics.domain.calculations import (
    calculate_pnl,
    calculate_pnl_percentage,
    calculate_duration_seconds,
)
from journal_analytics.domain.metrics import (
    PROFIT_FACTOR_UNBOUNDED,
    calculate_metrics,
    win_rate,
    profit_factor,
    expectancy,
    sharpe_ratio,
    max_drawdown,
    kelly_criterion,
    r_multiple,
)

__all__ = [
    # Models
    "Trade",
    "TradeSide",
    "Tag",
    "MetricsResult",
    "RiskMetrics",
    "DayOfWeekStats",
    "HourOfDayStats",
    "TagStats",
    "SymbolStats",
    "EquityCurvePoint",
    "CalendarDay",
    "normalize_side",
    "generate_slug",
    # Calculations
    "calculate_pnl",
    "calculate_pnl_percentage",
    "calculate_duration_seconds",
    # Metrics
    "PROFIT_FACTOR_UNBOUNDED",
    "calculate_metrics",
    "win_rate",
    "profit_factor",
    "expectancy",
    "sharpe_ratio",
    "max_drawdown",
    "kelly_criterion",
    "r_multiple",
]
