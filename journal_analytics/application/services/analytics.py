"""Analytics Service: Trading performance for one account owner.

Orchestrates the analytics use cases:
1. Load the owner's trades via TradeRepository
2. Reduce them with the domain metrics
3. Break performance down by weekday, hour, tag and symbol
4. Build the daily equity curve

Breakdowns group a polars frame of the trades; per-group win rate and
profit factor follow the same conventions as the aggregate metrics.
"""

from dataclasses import dataclass

import numpy as np
import polars as pl

from journal_analytics.domain.calculations import calculate_pnl_percentage
from journal_analytics.domain.metrics import (
    calculate_metrics,
    equity_curve_from_pnl,
    kelly_criterion,
    max_drawdown,
    profit_factor_from_totals,
    r_multiple,
    sharpe_ratio,
)
from journal_analytics.domain.models import (
    DayOfWeekStats,
    EquityCurvePoint,
    HourOfDayStats,
    MetricsResult,
    RiskMetrics,
    SymbolStats,
    TagStats,
    Trade,
)
from journal_analytics.infrastructure.config import AnalysisConfig, DEFAULT_CONFIG
from journal_analytics.infrastructure.logging import get_logger
from journal_analytics.infrastructure.repositories import (
    NO_FILTERS,
    RepositoryError,
    TagRepository,
    TradeFilters,
    TradeRepository,
)

logger = get_logger(__name__)

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

UNTAGGED_COLOR = "#6b7280"

# Schema for the per-trade analysis frame
_FRAME_SCHEMA = {
    "id": pl.Utf8,
    "instrument": pl.Utf8,
    "pnl": pl.Float64,
    "trade_date": pl.Date,
    "weekday": pl.Int8,
    "hour": pl.Int8,
    "tags": pl.List(pl.Utf8),
}


# =============================================================================
# Frame Helpers
# =============================================================================

def trades_to_frame(trades: list[Trade]) -> pl.DataFrame:
    """Build the analysis frame for a list of trades.

    weekday is 0 (Monday) to 6 (Sunday); hour is the entry hour and is
    null when the trade has no entry time.
    """
    return pl.DataFrame(
        {
            "id": [t.id for t in trades],
            "instrument": [t.instrument for t in trades],
            "pnl": [t.pnl for t in trades],
            "trade_date": [t.trade_date for t in trades],
            "weekday": [
                t.trade_date.weekday() if t.trade_date is not None else None
                for t in trades
            ],
            "hour": [
                t.entry_time.hour if t.entry_time is not None else None
                for t in trades
            ],
            "tags": [list(t.tags) for t in trades],
        },
        schema=_FRAME_SCHEMA,
    )


def _group_stats(df: pl.DataFrame, key: str) -> pl.DataFrame:
    """Aggregate pnl totals, counts and gross profit/loss per key."""
    return (
        df.filter(pl.col(key).is_not_null())
        .group_by(key)
        .agg(
            pl.col("pnl").sum().alias("total_pnl"),
            pl.len().alias("trade_count"),
            (pl.col("pnl") > 0).sum().alias("wins"),
            pl.col("pnl").filter(pl.col("pnl") > 0).sum().alias("gross_profit"),
            pl.col("pnl").filter(pl.col("pnl") < 0).sum().alias("gross_loss"),
        )
    )


def _rate(wins: int, count: int) -> float:
    if count == 0:
        return 0.0
    return wins / count * 100


# =============================================================================
# Analytics Service
# =============================================================================

@dataclass(frozen=True, slots=True)
class AnalyticsReport:
    """Overall metrics together with risk metrics."""
    metrics: MetricsResult
    risk: RiskMetrics

    def to_dict(self) -> dict:
        return {"metrics": self.metrics.to_dict(), "risk": self.risk.to_dict()}


class AnalyticsService:
    """Service for trading performance analytics.

    Example:
        >>> service = AnalyticsService(TradeRepository(), TagRepository())
        >>> metrics = service.get_metrics("user-1")
        >>> by_day = service.by_day_of_week("user-1")
    """

    def __init__(
        self,
        trade_repo: TradeRepository,
        tag_repo: TagRepository | None = None,
        config: AnalysisConfig = DEFAULT_CONFIG,
    ):
        """Initialize the service.

        Args:
            trade_repo: Source of closed trades
            tag_repo: Tag definitions for tag breakdowns (optional)
            config: Analysis configuration
        """
        self._trade_repo = trade_repo
        self._tag_repo = tag_repo
        self._config = config

    def _load(self, user_id: str, filters: TradeFilters) -> list[Trade]:
        trades = self._trade_repo.get_trades(user_id, filters)
        logger.info("Loaded %d trades for user %s", len(trades), user_id)
        return trades

    # --- Aggregate Metrics ---

    def get_metrics(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> MetricsResult:
        """Calculate overall performance metrics."""
        return calculate_metrics(self._load(user_id, filters))

    def get_risk_metrics(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> RiskMetrics:
        """Calculate risk-adjusted metrics."""
        trades = self._load(user_id, filters)
        return self._risk_metrics(trades, calculate_metrics(trades))

    def get_report(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> AnalyticsReport:
        """Calculate overall and risk metrics from a single load."""
        trades = self._load(user_id, filters)
        metrics = calculate_metrics(trades)
        return AnalyticsReport(metrics=metrics, risk=self._risk_metrics(trades, metrics))

    def _risk_metrics(self, trades: list[Trade], metrics: MetricsResult) -> RiskMetrics:
        returns = [
            t.pnl_percent
            if t.pnl_percent is not None
            else calculate_pnl_percentage(t.entry_price, t.exit_price, t.side)
            for t in trades
        ]
        curve = equity_curve_from_pnl(
            [t.pnl for t in trades], self._config.starting_equity
        )
        r_values = [r_multiple(t.pnl, self._config.default_risk_amount) for t in trades]

        return RiskMetrics(
            sharpe_ratio=sharpe_ratio(returns, self._config.risk_free_rate),
            max_drawdown=max_drawdown(curve),
            kelly_criterion=kelly_criterion(
                metrics.win_rate / 100, metrics.average_win, metrics.average_loss
            ),
            average_r_multiple=sum(r_values) / len(r_values) if r_values else 0.0,
        )

    # --- Breakdowns ---

    def by_day_of_week(
        self, user_id: str, filters: TradeFilters = NO_FILTERS
    ) -> list[DayOfWeekStats]:
        """Performance per weekday, Monday first, days with trades only."""
        trades = self._load(user_id, filters)
        if not trades:
            return []

        stats = _group_stats(trades_to_frame(trades), "weekday").sort("weekday")

        return [
            DayOfWeekStats(
                day=DAY_NAMES[row["weekday"]],
                total_pnl=row["total_pnl"],
                trade_count=row["trade_count"],
                win_rate=_rate(row["wins"], row["trade_count"]),
            )
            for row in stats.iter_rows(named=True)
        ]

    def by_hour(
        self, user_id: str, filters: TradeFilters = NO_FILTERS
    ) -> list[HourOfDayStats]:
        """Performance per entry hour (0-23), ascending."""
        trades = self._load(user_id, filters)
        if not trades:
            return []

        stats = _group_stats(trades_to_frame(trades), "hour").sort("hour")

        return [
            HourOfDayStats(
                hour=row["hour"],
                total_pnl=row["total_pnl"],
                trade_count=row["trade_count"],
                win_rate=_rate(row["wins"], row["trade_count"]),
            )
            for row in stats.iter_rows(named=True)
        ]

    def by_tag(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> list[TagStats]:
        """Performance per tag, best total pnl first.

        A trade with several tags counts toward each of them.
        """
        trades = self._load(user_id, filters)
        if not trades:
            return []

        df = trades_to_frame(trades).explode("tags").rename({"tags": "tag_id"})
        stats = _group_stats(df, "tag_id").sort(["total_pnl", "tag_id"], descending=[True, False])

        tags = {}
        if self._tag_repo is not None:
            try:
                tags = self._tag_repo.get_all()
            except RepositoryError as e:
                logger.warning("Tag names unavailable: %s", e)

        results = []
        for row in stats.iter_rows(named=True):
            tag = tags.get(row["tag_id"])
            results.append(
                TagStats(
                    tag_id=row["tag_id"],
                    tag_name=tag.name if tag else row["tag_id"],
                    tag_color=tag.color if tag else UNTAGGED_COLOR,
                    total_pnl=row["total_pnl"],
                    trade_count=row["trade_count"],
                    win_rate=_rate(row["wins"], row["trade_count"]),
                    profit_factor=profit_factor_from_totals(
                        row["gross_profit"], row["gross_loss"]
                    ),
                )
            )
        return results

    def by_symbol(self, user_id: str, filters: TradeFilters = NO_FILTERS) -> list[SymbolStats]:
        """Performance per instrument, best total pnl first."""
        trades = self._load(user_id, filters)
        if not trades:
            return []

        stats = _group_stats(trades_to_frame(trades), "instrument").sort(
            ["total_pnl", "instrument"], descending=[True, False]
        )

        return [
            SymbolStats(
                instrument=row["instrument"],
                total_pnl=row["total_pnl"],
                trade_count=row["trade_count"],
                win_rate=_rate(row["wins"], row["trade_count"]),
                profit_factor=profit_factor_from_totals(
                    row["gross_profit"], row["gross_loss"]
                ),
            )
            for row in stats.iter_rows(named=True)
        ]

    # --- Equity Curve ---

    def equity_curve(
        self, user_id: str, filters: TradeFilters = NO_FILTERS
    ) -> list[EquityCurvePoint]:
        """Cumulative realized pnl at the end of each trading day."""
        trades = self._load(user_id, filters)
        if not trades:
            return []

        daily = _group_stats(trades_to_frame(trades), "trade_date").sort("trade_date")
        cumulative = np.cumsum(daily["total_pnl"].to_numpy())

        return [
            EquityCurvePoint(date=d, cumulative_pnl=float(c))
            for d, c in zip(daily["trade_date"].to_list(), cumulative)
        ]
