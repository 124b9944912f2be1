"""Trade Repository: Access to closed trade records.

Provides read access to data/trades.parquet (or data/trades.json).
Rows use the journal store's snake_case column names, one row per
closed trade, for every account owner. Queries are always scoped to
a single user_id.
"""

from dataclasses import dataclass
from datetime import date, datetime

import polars as pl

from journal_analytics.domain.models import Trade, normalize_side
from journal_analytics.infrastructure.config import (
    AnalysisConfig,
    DataPaths,
    DEFAULT_CONFIG,
    DEFAULT_PATHS,
)
from journal_analytics.infrastructure.logging import get_logger
from journal_analytics.infrastructure.repositories.base import Repository, RepositoryError

logger = get_logger(__name__)

REQUIRED_COLUMNS = (
    "id",
    "user_id",
    "instrument",
    "side",
    "quantity",
    "entry_price",
    "exit_price",
    "pnl",
)


# =============================================================================
# Query Filters
# =============================================================================

@dataclass(frozen=True)
class TradeFilters:
    """Optional constraints for trade queries.

    Attributes:
        start_date: Earliest trade date (inclusive)
        end_date: Latest trade date (inclusive)
        instrument: Exact symbol match
        side: "long"/"short" (BUY/SELL accepted)
        tags: Trade must carry at least one of these tag ids
        min_pnl: Minimum pnl (inclusive)
        max_pnl: Maximum pnl (inclusive)
        limit: Page size (at least 1, capped by AnalysisConfig.max_query_limit)
        offset: Rows to skip
    """

    start_date: date | None = None
    end_date: date | None = None
    instrument: str | None = None
    side: str | None = None
    tags: tuple[str, ...] = ()
    min_pnl: float | None = None
    max_pnl: float | None = None
    limit: int | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.side is not None:
            object.__setattr__(self, "side", normalize_side(self.side))
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got: {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset must be non-negative, got: {self.offset}")
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise ValueError("start_date must not be after end_date")

    def matches(self, trade: Trade) -> bool:
        """Check the per-trade constraints (everything except paging)."""
        if self.instrument is not None and trade.instrument != self.instrument:
            return False
        if self.side is not None and trade.side != self.side:
            return False
        if self.min_pnl is not None and trade.pnl < self.min_pnl:
            return False
        if self.max_pnl is not None and trade.pnl > self.max_pnl:
            return False
        if self.start_date is not None or self.end_date is not None:
            if trade.trade_date is None:
                return False
            if self.start_date is not None and trade.trade_date < self.start_date:
                return False
            if self.end_date is not None and trade.trade_date > self.end_date:
                return False
        if self.tags and not set(self.tags).intersection(trade.tags):
            return False
        return True


NO_FILTERS = TradeFilters()


def _to_trade(row: dict) -> Trade:
    try:
        return Trade.from_record(row)
    except (KeyError, TypeError, ValueError) as e:
        raise RepositoryError(f"Invalid trade {row.get('id')}: {e}") from e


def _chronological_key(trade: Trade) -> tuple:
    # Untimed trades sort last within their day
    return (
        trade.trade_date or date.min,
        trade.entry_time is None,
        trade.entry_time or datetime.min,
        trade.id,
    )


# =============================================================================
# Repository
# =============================================================================

class TradeRepository(Repository[pl.DataFrame]):
    """Repository for closed trades.

    Loads the whole trade table once and caches it. The side column is
    normalized to "long"/"short" on load.

    Example:
        >>> repo = TradeRepository()
        >>> trades = repo.get_trades("user-1")
        >>> longs = repo.get_trades("user-1", TradeFilters(side="long"))
    """

    def __init__(
        self,
        paths: DataPaths = DEFAULT_PATHS,
        config: AnalysisConfig = DEFAULT_CONFIG,
    ):
        self._paths = paths
        self._config = config
        self._cache: pl.DataFrame | None = None

    def get_all(self) -> pl.DataFrame:
        """Load all trade rows.

        Returns:
            DataFrame with at least the REQUIRED_COLUMNS

        Raises:
            RepositoryError: If no trade file exists, it cannot be read,
                or required columns are missing
        """
        if self._cache is not None:
            return self._cache

        path = self._paths.trades_file
        if path is None:
            raise RepositoryError("Trade data not found", str(self._paths.trades_parquet))

        try:
            if path.suffix == ".parquet":
                df = pl.read_parquet(path)
            else:
                df = pl.read_json(path)
        except Exception as e:
            logger.error("Failed to read trades from %s: %s", path, e)
            raise RepositoryError(f"Failed to read trades: {e}", str(path)) from e

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise RepositoryError(
                f"Trade data missing columns: {', '.join(missing)}", str(path)
            )

        df = df.with_columns(
            pl.col("id").cast(pl.Utf8),
            pl.col("user_id").cast(pl.Utf8),
            pl.col("side")
            .cast(pl.Utf8)
            .str.strip_chars()
            .str.to_lowercase()
            .replace({"buy": "long", "sell": "short"}),
        )

        logger.debug("Loaded %d trades from %s", len(df), path)
        self._cache = df
        return self._cache

    def get_frame(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> pl.DataFrame:
        """Get raw rows for one owner with column-level filters applied.

        Applies user, instrument, side and pnl constraints. Date, tag and
        paging constraints need parsed trades; see get_trades().
        """
        df = self.get_all().filter(pl.col("user_id") == user_id)

        if filters.instrument is not None:
            df = df.filter(pl.col("instrument") == filters.instrument)
        if filters.side is not None:
            df = df.filter(pl.col("side") == filters.side)
        if filters.min_pnl is not None:
            df = df.filter(pl.col("pnl") >= filters.min_pnl)
        if filters.max_pnl is not None:
            df = df.filter(pl.col("pnl") <= filters.max_pnl)

        return df

    def get_trades(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> list[Trade]:
        """Get an owner's trades as domain objects.

        Trades are ordered by trade date, then entry time, then id.
        Trades without an entry time sort after timed trades of the
        same day.

        Raises:
            ValueError: If filters.limit exceeds the configured maximum
            RepositoryError: If a row cannot be converted to a Trade
        """
        max_limit = self._config.max_query_limit
        if filters.limit is not None and filters.limit > max_limit:
            raise ValueError(f"limit must not exceed {max_limit}, got: {filters.limit}")

        trades = [
            trade
            for trade in map(_to_trade, self.get_frame(user_id, filters).iter_rows(named=True))
            if filters.matches(trade)
        ]
        trades.sort(key=_chronological_key)

        if filters.offset:
            trades = trades[filters.offset:]
        if filters.limit is not None:
            trades = trades[:filters.limit]

        return trades

    def get_trade(self, user_id: str, trade_id: str) -> Trade:
        """Get a single trade owned by user_id.

        Raises:
            RepositoryError: If the trade does not exist for this owner
                or its row cannot be converted to a Trade
        """
        df = self.get_frame(user_id).filter(pl.col("id") == trade_id)
        if len(df) == 0:
            raise RepositoryError(f"Trade {trade_id} not found")
        return _to_trade(df.row(0, named=True))

    def list_users(self) -> list[str]:
        """Get list of all owners with trades."""
        return self.get_all()["user_id"].unique().sort().to_list()

    def clear_cache(self) -> None:
        """Clear cached data."""
        self._cache = None
