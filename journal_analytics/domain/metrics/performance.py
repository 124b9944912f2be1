"""Trade Performance: Aggregate statistics over closed trades.

Reduces a collection of trades to a flat MetricsResult:

    win_rate      = 100 × wins / n
    profit_factor = gross_profit / |gross_loss|
    expectancy    = P(win) × avg_win − P(loss) × |avg_loss|

Conventions:
- A win is pnl > 0, a loss is pnl < 0. Break-even trades (pnl == 0)
  count toward the total but toward neither wins nor losses.
- win_rate is on a 0-100 scale. expectancy uses 0-1 fractions.
- Every function is total: empty inputs yield 0.0, never an exception.
- Every aggregate is order-independent.
"""

import math
from typing import Iterable, Sequence

from journal_analytics.domain.models import MetricsResult, Trade

# Profit factor when there are gains and no losses
PROFIT_FACTOR_UNBOUNDED = math.inf


# =============================================================================
# Helpers
# =============================================================================

def _wins(trades: Iterable[Trade]) -> list[float]:
    return [t.pnl for t in trades if t.pnl > 0]


def _losses(trades: Iterable[Trade]) -> list[float]:
    return [t.pnl for t in trades if t.pnl < 0]


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


# =============================================================================
# Individual Metrics
# =============================================================================

def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of trades with pnl > 0 (0-100).

    Example:
        >>> win_rate([])
        0.0
    """
    if not trades:
        return 0.0
    return len(_wins(trades)) / len(trades) * 100


def profit_factor(trades: Sequence[Trade]) -> float:
    """Gross profit divided by gross loss magnitude.

    Returns:
        PROFIT_FACTOR_UNBOUNDED (math.inf) if there are gains but no losses,
        0.0 if there are neither.
    """
    return profit_factor_from_totals(
        math.fsum(_wins(trades)),
        math.fsum(_losses(trades)),
    )


def profit_factor_from_totals(gross_profit: float, gross_loss: float) -> float:
    """Profit factor from pre-aggregated totals (gross_loss sign ignored)."""
    gross_loss = abs(gross_loss)
    if gross_loss == 0:
        return PROFIT_FACTOR_UNBOUNDED if gross_profit > 0 else 0.0
    return gross_profit / gross_loss


def average_win(trades: Sequence[Trade]) -> float:
    """Mean pnl of winning trades, 0.0 if there are none."""
    return _mean(_wins(trades))


def average_loss(trades: Sequence[Trade]) -> float:
    """Mean pnl of losing trades as a positive magnitude, 0.0 if none."""
    return abs(_mean(_losses(trades)))


def largest_win(trades: Sequence[Trade]) -> float:
    """Largest winning pnl, 0.0 if there are no winners."""
    wins = _wins(trades)
    return max(wins) if wins else 0.0


def largest_loss(trades: Sequence[Trade]) -> float:
    """Most negative losing pnl (signed), 0.0 if there are no losers."""
    losses = _losses(trades)
    return min(losses) if losses else 0.0


def expectancy(trades: Sequence[Trade]) -> float:
    """Probability-weighted expected pnl per trade.

    Formula:
        E = (wins / n) × avg_win − (losses / n) × avg_loss

    Break-even trades dilute both probabilities.
    """
    n = len(trades)
    if n == 0:
        return 0.0

    wins = _wins(trades)
    losses = _losses(trades)

    win_fraction = len(wins) / n
    loss_fraction = len(losses) / n

    return win_fraction * _mean(wins) - loss_fraction * abs(_mean(losses))


def average_duration(trades: Sequence[Trade]) -> float:
    """Mean holding time in seconds over trades with a known duration.

    Trades whose duration cannot be determined are excluded from both
    the sum and the count. A zero-second trade is a known duration.
    """
    durations = [d for d in (t.duration for t in trades) if d is not None]
    return _mean(durations)


# =============================================================================
# Aggregate
# =============================================================================

def calculate_metrics(trades: Iterable[Trade]) -> MetricsResult:
    """Calculate every performance statistic for a trade set.

    Args:
        trades: Closed trades (any order, possibly empty)

    Returns:
        MetricsResult. Deterministic for identical input.

    Example:
        >>> result = calculate_metrics([])
        >>> result.total_trades, result.win_rate, result.profit_factor
        (0, 0.0, 0.0)
    """
    trades = list(trades)
    wins = _wins(trades)
    losses = _losses(trades)

    return MetricsResult(
        total_pnl=math.fsum(t.pnl for t in trades),
        total_trades=len(trades),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=win_rate(trades),
        profit_factor=profit_factor(trades),
        average_win=_mean(wins),
        average_loss=abs(_mean(losses)),
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        average_duration=average_duration(trades),
        expectancy=expectancy(trades),
    )
