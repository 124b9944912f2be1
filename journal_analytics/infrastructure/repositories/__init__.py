"""Data repositories for journal analytics.

Provides abstracted data access through the Repository pattern:
- TradeRepository: Closed trades, scoped per owner
- TagRepository: User tag definitions
"""

from journal_analytics.infrastructure.repositories.base import Repository, RepositoryError
from journal_analytics.infrastructure.repositories.trade_repo import (
    TradeRepository,
    TradeFilters,
    NO_FILTERS,
)
from journal_analytics.infrastructure.repositories.tag_repo import TagRepository

__all__ = [
    "Repository",
    "RepositoryError",
    "TradeRepository",
    "TradeFilters",
    "NO_FILTERS",
    "TagRepository",
]
