"""Domain Models: Core data structures for journal analytics.

These models represent the fundamental business entities:
- Trade: A closed trade record as stored by the journal
- MetricsResult: Flat performance statistics for a trade set
- Breakdown stats: Per-day, per-hour, per-tag, per-symbol aggregates
- CalendarDay / EquityCurvePoint: Date-keyed aggregates

Design Principles:
- Immutable (frozen dataclass)
- Validation in __post_init__
- Optional fields are explicit None, never sentinel values
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, Mapping

from journal_analytics.domain.calculations import calculate_duration_seconds

# Normalized trade direction
TradeSide = Literal["long", "short"]

# Wire encodings accepted for each side
_SIDE_ALIASES = {
    "long": "long",
    "buy": "long",
    "short": "short",
    "sell": "short",
}


def normalize_side(side: str) -> TradeSide:
    """Normalize a trade side to "long" or "short".

    Accepts "long"/"short" and the BUY/SELL wire encoding, case-insensitive.

    Raises:
        ValueError: If side is not a recognized encoding
    """
    normalized = _SIDE_ALIASES.get(str(side).strip().lower())
    if normalized is None:
        raise ValueError(f"side must be long/short or BUY/SELL, got: {side}")
    return normalized  # type: ignore[return-value]


def parse_timestamp(value: datetime | str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp (a trailing "Z" is accepted)."""
    if value is None or isinstance(value, datetime):
        return value
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _validate_positive(value: int | float, field_name: str) -> None:
    if value <= 0:
        raise ValueError(f"{field_name} must be positive, got: {value}")


def _validate_non_negative(value: int | float, field_name: str) -> None:
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got: {value}")


# =============================================================================
# Trade
# =============================================================================

@dataclass(frozen=True, slots=True)
class Trade:
    """A closed trade with realized PNL.

    Attributes:
        id: Opaque trade id
        user_id: Owner id
        instrument: Traded symbol (e.g., "ESZ4")
        side: "long" or "short" (BUY/SELL normalized on construction)
        quantity: Contracts or shares traded (must be positive)
        entry_price: Fill price on entry (must be positive)
        exit_price: Fill price on exit (must be positive)
        entry_time: Entry timestamp
        exit_time: Exit timestamp
        pnl: Realized profit or loss in account currency
        duration_seconds: Recorded holding time, if any
        commission: Fees paid, if recorded
        pnl_percent: Recorded return percentage, if any
        notes: Free-form journal notes
        tags: Tag ids attached to this trade
        trade_date: Session date (defaults to the entry date)

    Example:
        >>> trade = Trade(
        ...     id="t1", user_id="u1", instrument="ES", side="BUY",
        ...     quantity=1, entry_price=5000.0, exit_price=5010.0,
        ...     entry_time=datetime(2024, 3, 4, 9, 30),
        ...     exit_time=datetime(2024, 3, 4, 9, 45),
        ...     pnl=500.0,
        ... )
        >>> trade.side
        'long'
        >>> trade.duration
        900.0
    """

    id: str
    user_id: str
    instrument: str
    side: TradeSide
    quantity: float
    entry_price: float
    exit_price: float
    entry_time: datetime | None
    exit_time: datetime | None
    pnl: float
    duration_seconds: float | None = None
    commission: float | None = None
    pnl_percent: float | None = None
    notes: str | None = None
    tags: tuple[str, ...] = ()
    trade_date: date | None = None

    def __post_init__(self) -> None:
        """Validate and normalize fields after initialization."""
        if not self.instrument:
            raise ValueError("instrument cannot be empty")
        object.__setattr__(self, "side", normalize_side(self.side))
        _validate_positive(self.quantity, "quantity")
        _validate_positive(self.entry_price, "entry_price")
        _validate_positive(self.exit_price, "exit_price")
        if self.commission is not None:
            _validate_non_negative(self.commission, "commission")
        if self.duration_seconds is not None:
            _validate_non_negative(self.duration_seconds, "duration_seconds")
        if (
            self.entry_time is not None
            and self.exit_time is not None
            and self.exit_time < self.entry_time
        ):
            raise ValueError("exit_time must not be before entry_time")
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))
        if self.trade_date is None and self.entry_time is not None:
            object.__setattr__(self, "trade_date", self.entry_time.date())

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Trade:
        """Build a trade from a storage row (snake_case columns).

        Timestamps may be datetime objects or ISO-8601 strings.
        """
        trade_date = record.get("trade_date")
        if isinstance(trade_date, datetime):
            trade_date = trade_date.date()
        elif isinstance(trade_date, str) and trade_date:
            trade_date = parse_timestamp(trade_date).date()

        tags = record.get("tags") or ()

        return cls(
            id=str(record["id"]),
            user_id=str(record["user_id"]),
            instrument=record["instrument"],
            side=record["side"],
            quantity=float(record["quantity"]),
            entry_price=float(record["entry_price"]),
            exit_price=float(record["exit_price"]),
            entry_time=parse_timestamp(record.get("entry_time")),
            exit_time=parse_timestamp(record.get("exit_time")),
            pnl=float(record["pnl"]),
            duration_seconds=_optional_float(record.get("duration_seconds")),
            commission=_optional_float(record.get("commission")),
            pnl_percent=_optional_float(record.get("pnl_percent")),
            notes=record.get("notes"),
            tags=tuple(str(t) for t in tags),
            trade_date=trade_date or None,
        )

    @property
    def duration(self) -> float | None:
        """Holding time in seconds, or None if it cannot be determined."""
        if self.duration_seconds is not None:
            return float(self.duration_seconds)
        if self.entry_time is None or self.exit_time is None:
            return None
        return calculate_duration_seconds(self.entry_time, self.exit_time)

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    @property
    def is_loss(self) -> bool:
        return self.pnl < 0

    @property
    def is_breakeven(self) -> bool:
        return self.pnl == 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "instrument": self.instrument,
            "side": self.side,
            "quantity": self.quantity,
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "entry_time": self.entry_time.isoformat() if self.entry_time else None,
            "exit_time": self.exit_time.isoformat() if self.exit_time else None,
            "pnl": self.pnl,
            "duration_seconds": self.duration_seconds,
            "duration": self.duration,
            "commission": self.commission,
            "pnl_percent": self.pnl_percent,
            "notes": self.notes,
            "tags": list(self.tags),
            "trade_date": self.trade_date.isoformat() if self.trade_date else None,
        }


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    result = float(value)
    # polars yields NaN for missing floats in some read paths
    if math.isnan(result):
        return None
    return result


# =============================================================================
# Metrics Result
# =============================================================================

@dataclass(frozen=True, slots=True)
class MetricsResult:
    """Performance statistics for a set of closed trades.

    Percentages (win_rate) are on a 0-100 scale. average_loss is a
    positive magnitude; largest_loss keeps its sign. profit_factor is
    math.inf when there are gains and no losses.
    """
    total_pnl: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    profit_factor: float
    average_win: float
    average_loss: float
    largest_win: float
    largest_loss: float
    average_duration: float
    expectancy: float

    @property
    def breakeven_trades(self) -> int:
        """Trades with pnl == 0 (counted as neither win nor loss)."""
        return self.total_trades - self.winning_trades - self.losing_trades

    @property
    def has_unbounded_profit_factor(self) -> bool:
        return math.isinf(self.profit_factor)

    def to_dict(self) -> dict:
        """Serialize with response field names.

        An unbounded profit factor is rendered as None (JSON null).
        """
        return {
            "totalPnl": self.total_pnl,
            "totalTrades": self.total_trades,
            "winningTrades": self.winning_trades,
            "losingTrades": self.losing_trades,
            "winRate": self.win_rate,
            "profitFactor": None if self.has_unbounded_profit_factor else self.profit_factor,
            "averageWin": self.average_win,
            "averageLoss": self.average_loss,
            "largestWin": self.largest_win,
            "largestLoss": self.largest_loss,
            "averageDuration": self.average_duration,
            "expectancy": self.expectancy,
        }


@dataclass(frozen=True, slots=True)
class RiskMetrics:
    """Risk-adjusted statistics derived from a trade set.

    Attributes:
        sharpe_ratio: Mean per-trade return over its population stddev
        max_drawdown: Largest peak-to-trough decline of equity (0-100)
        kelly_criterion: Kelly fraction as a percentage
        average_r_multiple: Mean pnl expressed in units of risk
    """
    sharpe_ratio: float
    max_drawdown: float
    kelly_criterion: float
    average_r_multiple: float

    def to_dict(self) -> dict:
        return {
            "sharpeRatio": self.sharpe_ratio,
            "maxDrawdown": self.max_drawdown,
            "kellyCriterion": self.kelly_criterion,
            "averageRMultiple": self.average_r_multiple,
        }


# =============================================================================
# Breakdowns
# =============================================================================

@dataclass(frozen=True, slots=True)
class DayOfWeekStats:
    day: str
    total_pnl: float
    trade_count: int
    win_rate: float

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "totalPnl": self.total_pnl,
            "tradeCount": self.trade_count,
            "winRate": self.win_rate,
        }


@dataclass(frozen=True, slots=True)
class HourOfDayStats:
    hour: int
    total_pnl: float
    trade_count: int
    win_rate: float

    def to_dict(self) -> dict:
        return {
            "hour": self.hour,
            "totalPnl": self.total_pnl,
            "tradeCount": self.trade_count,
            "winRate": self.win_rate,
        }


@dataclass(frozen=True, slots=True)
class TagStats:
    tag_id: str
    tag_name: str
    tag_color: str
    total_pnl: float
    trade_count: int
    win_rate: float
    profit_factor: float

    def to_dict(self) -> dict:
        return {
            "tagId": self.tag_id,
            "tagName": self.tag_name,
            "tagColor": self.tag_color,
            "totalPnl": self.total_pnl,
            "tradeCount": self.trade_count,
            "winRate": self.win_rate,
            "profitFactor": None if math.isinf(self.profit_factor) else self.profit_factor,
        }


@dataclass(frozen=True, slots=True)
class SymbolStats:
    instrument: str
    total_pnl: float
    trade_count: int
    win_rate: float
    profit_factor: float

    def to_dict(self) -> dict:
        return {
            "instrument": self.instrument,
            "totalPnl": self.total_pnl,
            "tradeCount": self.trade_count,
            "winRate": self.win_rate,
            "profitFactor": None if math.isinf(self.profit_factor) else self.profit_factor,
        }


@dataclass(frozen=True, slots=True)
class EquityCurvePoint:
    date: date
    cumulative_pnl: float

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "cumulativePnl": self.cumulative_pnl}


@dataclass(frozen=True, slots=True)
class CalendarDay:
    date: date
    total_pnl: float
    trade_count: int
    win_rate: float
    wins: int
    losses: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "totalPnl": self.total_pnl,
            "tradeCount": self.trade_count,
            "winRate": self.win_rate,
            "wins": self.wins,
            "losses": self.losses,
        }


# =============================================================================
# Tags
# =============================================================================

@dataclass(frozen=True, slots=True)
class Tag:
    """A user-defined label attached to trades."""
    id: str
    user_id: str
    name: str
    slug: str = ""
    color: str = "#6b7280"
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("tag name cannot be empty")
        if not self.slug:
            object.__setattr__(self, "slug", generate_slug(self.name))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Tag:
        return cls(
            id=str(record["id"]),
            user_id=str(record["user_id"]),
            name=record["name"],
            slug=record.get("slug") or "",
            color=record.get("color") or "#6b7280",
            description=record.get("description"),
        )


def generate_slug(text: str) -> str:
    """Lowercase, hyphen-separated slug (e.g., "Opening Range" -> "opening-range")."""
    slug = re.sub(r"[^\w\s-]", "", text.lower().strip())
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")
