"""Journal Analytics: Trading journal performance metrics.

Reduces closed trades to performance statistics (win rate, profit
factor, expectancy, Sharpe ratio, drawdown, Kelly criterion) and
breaks them down by weekday, hour, tag, symbol and date.

Architecture:
- domain/: Core business logic (models, calculations, metrics)
- infrastructure/: Configuration, logging and data access
- application/: Use cases and services
- interfaces/: CLI
"""

__version__ = "0.3.0"

from journal_analytics.domain import (
    Trade,
    MetricsResult,
    RiskMetrics,
    calculate_metrics,
    PROFIT_FACTOR_UNBOUNDED,
)
from journal_analytics.infrastructure import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    RepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # Domain
    "Trade",
    "MetricsResult",
    "RiskMetrics",
    "calculate_metrics",
    "PROFIT_FACTOR_UNBOUNDED",
    # Infrastructure
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "RepositoryError",
]
