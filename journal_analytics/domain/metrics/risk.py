"""Risk Metrics: Risk-adjusted return and position sizing.

Provides:
- Sharpe ratio: mean excess return per unit of volatility
- Max drawdown: largest decline from a running equity peak
- Kelly criterion: theoretical optimal fraction of capital to risk
- R-multiple: pnl in units of the amount initially risked

Scales:
- max_drawdown and kelly_criterion return percentages (0-100 scale)
- kelly_criterion takes its win rate as a 0-1 fraction

All functions are total. Degenerate inputs return 0.0.
"""

import math
from typing import Sequence


def sharpe_ratio(returns: Sequence[float], risk_free_rate: float = 0.0) -> float:
    """Calculate the Sharpe ratio using population standard deviation.

    Formula:
        S = (mean(r) − rf) / σ(r)

    Args:
        returns: Per-period returns
        risk_free_rate: Risk-free return per period (default 0)

    Returns:
        Sharpe ratio, or 0.0 if returns is empty or has zero variance

    Example:
        >>> sharpe_ratio([1, 1, 1])
        0.0
    """
    n = len(returns)
    if n == 0:
        return 0.0

    avg = math.fsum(returns) / n
    variance = math.fsum((r - avg) ** 2 for r in returns) / n
    std = math.sqrt(variance)

    if std == 0:
        return 0.0
    return (avg - risk_free_rate) / std


def max_drawdown(equity_curve: Sequence[float]) -> float:
    """Calculate maximum drawdown as a percentage of the running peak.

    Formula:
        DD[t] = 100 × (peak[t] − equity[t]) / peak[t]
        peak[t] = max(equity[0..t])

    A point whose running peak is not positive has no defined
    percentage drawdown and contributes 0.

    Example:
        >>> max_drawdown([100, 80, 120, 60])
        50.0
    """
    if not equity_curve:
        return 0.0

    worst = 0.0
    peak = equity_curve[0]

    for value in equity_curve:
        if value > peak:
            peak = value
        if peak <= 0:
            continue
        drawdown = (peak - value) / peak * 100
        if drawdown > worst:
            worst = drawdown

    return worst


def kelly_criterion(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """Calculate the Kelly fraction as a percentage.

    Formula:
        K = 100 × (p − (1 − p) / b),  b = avg_win / |avg_loss|

    Args:
        win_rate: Probability of a win as a 0-1 fraction
        avg_win: Average winning pnl
        avg_loss: Average losing pnl (sign ignored)

    Returns:
        Kelly percentage (negative means no edge), or 0.0 when
        avg_loss or avg_win is 0

    Example:
        >>> round(kelly_criterion(0.6, 200, 100), 10)
        40.0
    """
    if avg_loss == 0 or avg_win == 0:
        return 0.0
    win_loss_ratio = avg_win / abs(avg_loss)
    return (win_rate - (1 - win_rate) / win_loss_ratio) * 100


def r_multiple(pnl: float, risk_amount: float) -> float:
    """Express pnl as a multiple of the amount risked (0.0 if no risk)."""
    if risk_amount == 0:
        return 0.0
    return pnl / risk_amount


def equity_curve_from_pnl(pnls: Sequence[float], starting_equity: float = 0.0) -> list[float]:
    """Build an equity curve from sequential pnl values.

    The first point is the starting equity, followed by the running
    balance after each trade.
    """
    curve = [starting_equity]
    balance = starting_equity
    for pnl in pnls:
        balance += pnl
        curve.append(balance)
    return curve
