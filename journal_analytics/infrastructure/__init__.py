"""Infrastructure layer for journal analytics.

Contains:
- config: Data paths and analysis configuration
- logging: Logger setup
- repositories: Data access abstractions
"""

from journal_analytics.infrastructure.config import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
)
from journal_analytics.infrastructure.logging import setup_logging, get_logger
from journal_analytics.infrastructure.repositories import (
    Repository,
    RepositoryError,
    TradeRepository,
    TradeFilters,
    NO_FILTERS,
    TagRepository,
)

__all__ = [
    # Config
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    # Logging
    "setup_logging",
    "get_logger",
    # Repositories
    "Repository",
    "RepositoryError",
    "TradeRepository",
    "TradeFilters",
    "NO_FILTERS",
    "TagRepository",
]
