"""Calendar Service: Date-keyed trade aggregates.

Provides the month grid (one CalendarDay per session with trades) and
the single-day drill-down used by the journal calendar.
"""

import calendar
from dataclasses import dataclass
from datetime import date

import polars as pl

from journal_analytics.domain.models import CalendarDay, Trade
from journal_analytics.infrastructure.logging import get_logger
from journal_analytics.infrastructure.repositories import TradeFilters, TradeRepository

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DaySummary:
    """All trades for one session date with totals."""
    date: date
    trades: tuple[Trade, ...]
    trade_count: int
    total_pnl: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "trades": [t.to_dict() for t in self.trades],
            "summary": {
                "tradeCount": self.trade_count,
                "totalPnl": self.total_pnl,
            },
        }


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar date of a month.

    Raises:
        ValueError: If month is not 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class CalendarService:
    """Service for calendar views of an owner's trades.

    Example:
        >>> service = CalendarService(TradeRepository())
        >>> days = service.get_month("user-1", 2024, 3)
        >>> detail = service.get_day("user-1", date(2024, 3, 4))
    """

    def __init__(self, trade_repo: TradeRepository):
        self._trade_repo = trade_repo

    def get_month(self, user_id: str, year: int, month: int) -> list[CalendarDay]:
        """Daily aggregates for every date in the month that has trades."""
        start, end = month_bounds(year, month)
        trades = self._trade_repo.get_trades(
            user_id, TradeFilters(start_date=start, end_date=end)
        )
        logger.info("Calendar %04d-%02d for user %s: %d trades", year, month, user_id, len(trades))
        if not trades:
            return []

        df = pl.DataFrame(
            {
                "trade_date": [t.trade_date for t in trades],
                "pnl": [t.pnl for t in trades],
            },
            schema={"trade_date": pl.Date, "pnl": pl.Float64},
        )

        daily = (
            df.group_by("trade_date")
            .agg(
                pl.col("pnl").sum().alias("total_pnl"),
                pl.len().alias("trade_count"),
                (pl.col("pnl") > 0).sum().alias("wins"),
                (pl.col("pnl") < 0).sum().alias("losses"),
            )
            .sort("trade_date")
        )

        return [
            CalendarDay(
                date=row["trade_date"],
                total_pnl=row["total_pnl"],
                trade_count=row["trade_count"],
                win_rate=row["wins"] / row["trade_count"] * 100,
                wins=row["wins"],
                losses=row["losses"],
            )
            for row in daily.iter_rows(named=True)
        ]

    def get_day(self, user_id: str, day: date) -> DaySummary:
        """All trades on a single date with the day's totals."""
        trades = self._trade_repo.get_trades(
            user_id, TradeFilters(start_date=day, end_date=day)
        )
        return DaySummary(
            date=day,
            trades=tuple(trades),
            trade_count=len(trades),
            total_pnl=sum(t.pnl for t in trades),
        )
