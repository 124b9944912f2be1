"""Trading metrics for journal performance analysis.

This package provides metrics for evaluating closed trades:

- Performance: Win rate, profit factor, expectancy, averages, extremes
- Risk: Sharpe ratio, max drawdown, Kelly criterion, R-multiple

Usage:
    from journal_analytics.domain.metrics import (
        calculate_metrics,
        sharpe_ratio,
        max_drawdown,
    )
"""

# Performance
from journal_analytics.domain.metrics.performance import (
    PROFIT_FACTOR_UNBOUNDED,
    win_rate,
    profit_factor,
    profit_factor_from_totals,
    expectancy,
    average_win,
    average_loss,
    largest_win,
    largest_loss,
    average_duration,
    calculate_metrics,
)

# Risk
from journal_analytics.domain.metrics.risk import (
    sharpe_ratio,
    max_drawdown,
    kelly_criterion,
    r_multiple,
    equity_curve_from_pnl,
)

__all__ = [
    # Performance
    "PROFIT_FACTOR_UNBOUNDED",
    "win_rate",
    "profit_factor",
    "profit_factor_from_totals",
    "expectancy",
    "average_win",
    "average_loss",
    "largest_win",
    "largest_loss",
    "average_duration",
    "calculate_metrics",
    # Risk
    "sharpe_ratio",
    "max_drawdown",
    "kelly_criterion",
    "r_multiple",
    "equity_curve_from_pnl",
]
