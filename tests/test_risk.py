"""Unit tests for domain/metrics/risk.py.

Tests verify:
1. Sharpe ratio matches numpy population statistics
2. Max drawdown follows the running peak
3. Kelly criterion and R-multiple formulas and zero guards
"""

import numpy as np
import pytest

from journal_analytics.domain.metrics import (
    equity_curve_from_pnl,
    kelly_criterion,
    max_drawdown,
    r_multiple,
    sharpe_ratio,
)


# =============================================================================
# Sharpe Ratio
# =============================================================================

class TestSharpeRatio:
    """Tests for sharpe_ratio function."""

    def test_empty(self):
        assert sharpe_ratio([], 0) == 0.0

    def test_zero_variance(self):
        """Constant returns give 0, not inf or NaN."""
        assert sharpe_ratio([1, 1, 1], 0) == 0.0

    def test_matches_numpy(self):
        """Should match numpy mean / population std."""
        np.random.seed(42)
        returns = np.random.randn(200).tolist()

        expected = np.mean(returns) / np.std(returns)
        assert sharpe_ratio(returns) == pytest.approx(expected, abs=1e-10)

    def test_risk_free_rate(self):
        returns = [1.0, 3.0]  # mean 2, population std 1
        assert sharpe_ratio(returns, 0.5) == pytest.approx(1.5)

    def test_single_return(self):
        """One return has zero variance."""
        assert sharpe_ratio([2.5]) == 0.0


# =============================================================================
# Max Drawdown
# =============================================================================

class TestMaxDrawdown:
    """Tests for max_drawdown function."""

    def test_reference_curve(self):
        """Peak 120 down to 60 is a 50% drawdown."""
        assert max_drawdown([100, 80, 120, 60]) == pytest.approx(50.0)

    def test_empty(self):
        assert max_drawdown([]) == 0.0

    def test_single_point(self):
        assert max_drawdown([100]) == 0.0

    def test_monotonic_increase(self):
        assert max_drawdown([100, 110, 120, 130]) == 0.0

    def test_earlier_drawdown_is_larger(self):
        """100 -> 50 (50%) beats 200 -> 180 (10%)."""
        assert max_drawdown([100, 50, 200, 180]) == pytest.approx(50.0)

    def test_non_positive_peak_is_skipped(self):
        """Points below a non-positive peak have no percentage drawdown."""
        assert max_drawdown([0, -10, -20]) == 0.0
        assert max_drawdown([-10, 100, 50]) == pytest.approx(50.0)


# =============================================================================
# Kelly Criterion
# =============================================================================

class TestKellyCriterion:
    """Tests for kelly_criterion function."""

    def test_reference(self):
        """0.6 win rate, 2:1 payoff gives 40%."""
        assert kelly_criterion(0.6, 200, 100) == pytest.approx(40.0)

    def test_loss_sign_ignored(self):
        assert kelly_criterion(0.6, 200, -100) == pytest.approx(40.0)

    def test_zero_avg_loss(self):
        assert kelly_criterion(0.6, 200, 0) == 0.0

    def test_zero_avg_win(self):
        assert kelly_criterion(0.6, 0, 100) == 0.0

    def test_negative_edge(self):
        """Losing system gives a negative fraction."""
        assert kelly_criterion(0.3, 100, 100) == pytest.approx(-40.0)


# =============================================================================
# R-Multiple and Equity Curve
# =============================================================================

class TestRMultiple:
    """Tests for r_multiple function."""

    def test_basic(self):
        assert r_multiple(300.0, 100.0) == pytest.approx(3.0)
        assert r_multiple(-50.0, 100.0) == pytest.approx(-0.5)

    def test_zero_risk(self):
        assert r_multiple(300.0, 0) == 0.0


class TestEquityCurveFromPnl:
    """Tests for equity_curve_from_pnl function."""

    def test_running_balance(self):
        assert equity_curve_from_pnl([10, -5, 20], 100) == [100, 110, 105, 125]

    def test_empty(self):
        assert equity_curve_from_pnl([], 50.0) == [50.0]

    def test_matches_numpy_cumsum(self):
        pnls = [1.5, -2.0, 3.25, 0.0, -1.0]
        curve = equity_curve_from_pnl(pnls)
        assert curve[1:] == pytest.approx(np.cumsum(pnls).tolist())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
