"""Command Line Interface for journal analytics.

Provides CLI access to analytics functions:
- metrics: Overall and risk metrics for an owner
- breakdown: Performance by day, hour, tag or symbol
- equity: Daily equity curve
- calendar: Month calendar
- verify: Verify data integrity

Usage:
    python -m journal_analytics metrics USER [--json]
    python -m journal_analytics breakdown USER {day,hour,tag,symbol}
    python -m journal_analytics equity USER
    python -m journal_analytics calendar USER YEAR MONTH
    python -m journal_analytics verify
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from journal_analytics import __version__
from journal_analytics.application import AnalyticsService, CalendarService
from journal_analytics.domain.models import MetricsResult, RiskMetrics
from journal_analytics.infrastructure import (
    AnalysisConfig,
    DataPaths,
    RepositoryError,
    TagRepository,
    TradeFilters,
    TradeRepository,
    setup_logging,
)


def _paths(args: argparse.Namespace) -> DataPaths:
    if args.root:
        return DataPaths(root=Path(args.root))
    return DataPaths.from_env()


def _filters(args: argparse.Namespace) -> TradeFilters:
    return TradeFilters(
        start_date=date.fromisoformat(args.start) if args.start else None,
        end_date=date.fromisoformat(args.end) if args.end else None,
        instrument=args.symbol,
        side=args.side,
        tags=tuple(args.tag or ()),
    )


def _analytics(args: argparse.Namespace) -> AnalyticsService:
    paths = _paths(args)
    config = AnalysisConfig.from_env()
    return AnalyticsService(
        TradeRepository(paths, config),
        TagRepository(paths),
        config=config,
    )


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _format_pf(value: float) -> str:
    return "∞" if value == float("inf") else f"{value:.2f}"


def _print_metrics(metrics: MetricsResult, risk: RiskMetrics) -> None:
    print("[Performance]")
    print(f"  Total PNL:        {metrics.total_pnl:+,.2f}")
    print(f"  Trades:           {metrics.total_trades:,} "
          f"({metrics.winning_trades} W / {metrics.losing_trades} L / "
          f"{metrics.breakeven_trades} BE)")
    print(f"  Win rate:         {metrics.win_rate:.1f}%")
    print(f"  Profit factor:    {_format_pf(metrics.profit_factor)}")
    print(f"  Expectancy:       {metrics.expectancy:+,.2f}")
    print(f"  Average win:      {metrics.average_win:,.2f}")
    print(f"  Average loss:     {metrics.average_loss:,.2f}")
    print(f"  Largest win:      {metrics.largest_win:+,.2f}")
    print(f"  Largest loss:     {metrics.largest_loss:+,.2f}")
    print(f"  Average duration: {format_duration(metrics.average_duration)}")
    print()
    print("[Risk]")
    print(f"  Sharpe ratio:     {risk.sharpe_ratio:.2f}")
    print(f"  Max drawdown:     {risk.max_drawdown:.2f}%")
    print(f"  Kelly criterion:  {risk.kelly_criterion:.1f}%")
    print(f"  Average R:        {risk.average_r_multiple:+.2f}R")


def format_duration(seconds: float) -> str:
    """Render seconds as "1h 5m", "5m 3s" or "42s"."""
    total = int(round(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


# =============================================================================
# Commands
# =============================================================================

def cmd_metrics(args: argparse.Namespace) -> int:
    """Show overall and risk metrics."""
    report = _analytics(args).get_report(args.user, _filters(args))

    if args.json:
        _print_json(report.to_dict())
        return 0

    print(f"Journal Analytics v{__version__}")
    print("=" * 50)
    _print_metrics(report.metrics, report.risk)
    return 0


def cmd_breakdown(args: argparse.Namespace) -> int:
    """Show performance grouped by a dimension."""
    service = _analytics(args)
    filters = _filters(args)

    handlers = {
        "day": service.by_day_of_week,
        "hour": service.by_hour,
        "tag": service.by_tag,
        "symbol": service.by_symbol,
    }
    rows = handlers[args.dimension](args.user, filters)

    if args.json:
        _print_json([r.to_dict() for r in rows])
        return 0

    if not rows:
        print("No trades")
        return 0

    print(f"{'Group':<16} {'Trades':>7} {'PNL':>14} {'Win %':>7}")
    print("-" * 47)
    for r in rows:
        d = r.to_dict()
        label = str(d.get("day") or d.get("tagName") or d.get("instrument") or d.get("hour"))
        print(f"{label[:16]:<16} {d['tradeCount']:>7} {d['totalPnl']:>+14,.2f} "
              f"{d['winRate']:>6.1f}%")
    return 0


def cmd_equity(args: argparse.Namespace) -> int:
    """Show the daily equity curve."""
    points = _analytics(args).equity_curve(args.user, _filters(args))

    if args.json:
        _print_json([p.to_dict() for p in points])
        return 0

    for p in points:
        print(f"{p.date.isoformat()}  {p.cumulative_pnl:>+14,.2f}")
    return 0


def cmd_calendar(args: argparse.Namespace) -> int:
    """Show a month of daily results."""
    service = CalendarService(TradeRepository(_paths(args)))
    days = service.get_month(args.user, args.year, args.month)

    if args.json:
        _print_json({
            "year": args.year,
            "month": args.month,
            "calendar": [d.to_dict() for d in days],
        })
        return 0

    print(f"{args.year:04d}-{args.month:02d}")
    print("-" * 44)
    for d in days:
        print(f"{d.date.isoformat()}  {d.trade_count:>4} trades  "
              f"{d.total_pnl:>+12,.2f}  {d.win_rate:>5.1f}%")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Verify data integrity."""
    paths = _paths(args)
    errors = []

    print("[Data verification]")
    print("=" * 50)

    # 1. Check data files exist
    print("\n1. Checking data files...")
    missing = paths.validate()
    if missing:
        for m in missing:
            print(f"  ✗ Missing: {m}")
            errors.append(f"Missing file: {m}")
    else:
        print("  ✓ Data files present")

    # 2. Load trades
    print("\n2. Loading trades...")
    try:
        repo = TradeRepository(paths)
        df = repo.get_all()
        print(f"  Trades: {len(df):,}")
        print(f"  Owners: {len(repo.list_users())}")
        invalid = df.filter(~df["side"].is_in(["long", "short"]))
        if len(invalid) > 0:
            print(f"  ✗ {len(invalid)} rows with unknown side")
            errors.append("Unknown trade side")
        else:
            print("  ✓ Trade rows valid")
    except RepositoryError as e:
        print(f"  ✗ Error: {e}")
        errors.append(str(e))

    # 3. Load tags
    print("\n3. Loading tags...")
    try:
        tags = TagRepository(paths).get_all()
        print(f"  ✓ Tags: {len(tags)}")
    except RepositoryError as e:
        print(f"  ✗ Error: {e}")
        errors.append(str(e))

    print("\n" + "=" * 50)
    if errors:
        print(f"❌ {len(errors)} problem(s) found")
        return 1
    print("✅ All checks passed")
    return 0


# =============================================================================
# Entry Point
# =============================================================================

def _add_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--symbol", help="Only this instrument")
    parser.add_argument("--side", help="long/short (BUY/SELL accepted)")
    parser.add_argument("--start", help="First trade date (YYYY-MM-DD)")
    parser.add_argument("--end", help="Last trade date (YYYY-MM-DD)")
    parser.add_argument("--tag", action="append", help="Tag id (repeatable)")
    parser.add_argument("--json", action="store_true", help="Output JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="journal_analytics",
        description="Journal Analytics - Trading Performance Metrics",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--root", help="Directory containing data/ (default: $JOURNAL_DATA_ROOT or .)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Show performance metrics")
    metrics_parser.add_argument("user", help="Owner id")
    _add_filter_args(metrics_parser)

    # breakdown command
    breakdown_parser = subparsers.add_parser("breakdown", help="Performance by group")
    breakdown_parser.add_argument("user", help="Owner id")
    breakdown_parser.add_argument("dimension", choices=["day", "hour", "tag", "symbol"])
    _add_filter_args(breakdown_parser)

    # equity command
    equity_parser = subparsers.add_parser("equity", help="Daily equity curve")
    equity_parser.add_argument("user", help="Owner id")
    _add_filter_args(equity_parser)

    # calendar command
    calendar_parser = subparsers.add_parser("calendar", help="Month calendar")
    calendar_parser.add_argument("user", help="Owner id")
    calendar_parser.add_argument("year", type=int)
    calendar_parser.add_argument("month", type=int)
    calendar_parser.add_argument("--json", action="store_true", help="Output JSON")

    # verify command
    subparsers.add_parser("verify", help="Verify data integrity")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "metrics": cmd_metrics,
        "breakdown": cmd_breakdown,
        "equity": cmd_equity,
        "calendar": cmd_calendar,
        "verify": cmd_verify,
    }

    try:
        return commands[args.command](args)
    except (RepositoryError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
