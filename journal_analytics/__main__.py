"""Entry point for running journal_analytics as a module.

Usage:
    python -m journal_analytics [--root DIR] [command] [options]

Commands:
    metrics     Overall performance and risk metrics
    breakdown   Performance by day, hour, tag or symbol
    equity      Daily equity curve
    calendar    Month calendar
    verify      Verify data integrity

Examples:
    python -m journal_analytics metrics user-1 --json
    python -m journal_analytics breakdown user-1 day
    python -m journal_analytics calendar user-1 2024 3
    python -m journal_analytics verify
"""

import sys

from journal_analytics.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
