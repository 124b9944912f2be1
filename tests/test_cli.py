"""Unit tests for interfaces/cli.py.

Tests verify:
1. CLI commands execute without errors
2. Output format is correct
3. Error handling works properly
"""

import json

import pytest

from journal_analytics.interfaces.cli import format_duration, main


class TestCliBasic:
    """Basic CLI tests."""

    def test_version(self, capsys):
        """--version should show version."""
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0

    def test_help(self, capsys):
        """No command should show help."""
        result = main([])
        assert result == 0

    def test_invalid_command(self):
        """Invalid command should fail."""
        with pytest.raises(SystemExit):
            main(["invalid_command"])


class TestMetricsCommand:
    """Tests for metrics command."""

    def test_text_output(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "metrics", "user-1"])
        assert result == 0

        captured = capsys.readouterr()
        assert "Win rate" in captured.out
        assert "50.0%" in captured.out

    def test_json_output(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "metrics", "user-1", "--json"])
        assert result == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["metrics"]["totalTrades"] == 4
        assert payload["metrics"]["totalPnl"] == pytest.approx(800.0)

    def test_filters(self, data_paths, capsys):
        result = main([
            "--root", str(data_paths.root), "metrics", "user-1",
            "--symbol", "NQ", "--side", "long", "--json",
        ])
        assert result == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["metrics"]["totalTrades"] == 1
        assert payload["metrics"]["profitFactor"] is None

    def test_missing_data(self, tmp_path, capsys):
        """Missing trade file should fail with an error message."""
        result = main(["--root", str(tmp_path), "metrics", "user-1"])
        assert result == 1
        assert "not found" in capsys.readouterr().err

    def test_bad_date(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "metrics", "user-1", "--start", "03/01/2024"])
        assert result == 1
        assert "Error" in capsys.readouterr().err


class TestBreakdownCommand:
    """Tests for breakdown command."""

    @pytest.mark.parametrize("dimension", ["day", "hour", "tag", "symbol"])
    def test_runs(self, data_paths, capsys, dimension):
        result = main(["--root", str(data_paths.root), "breakdown", "user-1", dimension])
        assert result == 0
        assert "Trades" in capsys.readouterr().out

    def test_json_day(self, data_paths, capsys):
        main(["--root", str(data_paths.root), "breakdown", "user-1", "day", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert [row["day"] for row in payload] == ["Monday", "Tuesday"]

    def test_invalid_dimension(self, data_paths):
        with pytest.raises(SystemExit):
            main(["--root", str(data_paths.root), "breakdown", "user-1", "week"])


class TestEquityAndCalendarCommands:
    """Tests for equity and calendar commands."""

    def test_equity_json(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "equity", "user-1", "--json"])
        assert result == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload[-1]["cumulativePnl"] == pytest.approx(800.0)

    def test_calendar_json(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "calendar", "user-1", "2024", "3", "--json"])
        assert result == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["month"] == 3
        assert [d["date"] for d in payload["calendar"]] == ["2024-03-04", "2024-03-05"]

    def test_calendar_invalid_month(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "calendar", "user-1", "2024", "13"])
        assert result == 1
        assert "month" in capsys.readouterr().err


class TestVerifyCommand:
    """Tests for verify command."""

    def test_verify_ok(self, data_paths, capsys):
        result = main(["--root", str(data_paths.root), "verify"])
        assert result == 0
        assert "All checks passed" in capsys.readouterr().out

    def test_verify_missing(self, tmp_path, capsys):
        result = main(["--root", str(tmp_path), "verify"])
        assert result == 1
        assert "Missing" in capsys.readouterr().out


class TestFormatDuration:
    """Tests for format_duration helper."""

    def test_formats(self):
        assert format_duration(42) == "42s"
        assert format_duration(303) == "5m 3s"
        assert format_duration(3900) == "1h 5m"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
