"""Configuration: Centralized paths and settings.

This module provides:
- DataPaths: File paths for all data sources
- AnalysisConfig: Parameters for analysis algorithms

Directory Structure:
    data/
    ├── trades.parquet      # Closed trades exported from the journal store
    ├── trades.json         # Same rows as a JSON array (fallback)
    └── tags.json           # User tag definitions

Environment overrides:
    JOURNAL_DATA_ROOT            Project root containing data/
    JOURNAL_RISK_FREE_RATE       Per-trade risk-free return (percent)
    JOURNAL_STARTING_EQUITY      Account balance before the first trade
    JOURNAL_DEFAULT_RISK_AMOUNT  Risk per trade used for R-multiples
    JOURNAL_MAX_QUERY_LIMIT      Largest page size a trade query may request
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {raw!r}") from None


def _env_positive_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got: {value}")
    return value


@dataclass(frozen=True)
class DataPaths:
    """File paths for data sources.

    Attributes:
        root: Project root directory
    """

    root: Path = Path(".")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "DataPaths":
        """Build paths from JOURNAL_DATA_ROOT (defaults to cwd)."""
        return cls(root=Path(environ.get("JOURNAL_DATA_ROOT", ".")))

    # --- Directories ---

    @property
    def data_dir(self) -> Path:
        """Main data directory."""
        return self.root / "data"

    # --- Files ---

    @property
    def trades_parquet(self) -> Path:
        """Closed trades (Parquet)."""
        return self.data_dir / "trades.parquet"

    @property
    def trades_json(self) -> Path:
        """Closed trades (JSON array of rows)."""
        return self.data_dir / "trades.json"

    @property
    def tags_json(self) -> Path:
        """Tag definitions (JSON array of rows)."""
        return self.data_dir / "tags.json"

    # --- Helper Methods ---

    @property
    def trades_file(self) -> Path | None:
        """First existing trades file, Parquet preferred."""
        for path in (self.trades_parquet, self.trades_json):
            if path.exists():
                return path
        return None

    def validate(self) -> list[str]:
        """Check which required paths are missing.

        Returns:
            List of missing paths (empty if all exist)
        """
        missing = []

        if not self.data_dir.exists():
            missing.append(str(self.data_dir))

        if self.trades_file is None:
            missing.append(f"{self.trades_parquet} or {self.trades_json}")

        return missing

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis algorithms.

    Attributes:
        risk_free_rate: Per-trade risk-free return for Sharpe (percent)
        starting_equity: Account balance the equity curve starts from
        default_risk_amount: Amount risked per trade for R-multiples
        max_query_limit: Largest limit TradeRepository.get_trades accepts
    """

    risk_free_rate: float = 0.0
    starting_equity: float = 10_000.0
    default_risk_amount: float = 100.0
    max_query_limit: int = 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "AnalysisConfig":
        """Build config from JOURNAL_* environment variables.

        Raises:
            ValueError: If a variable is set but not numeric, or the query
                limit is not a positive integer
        """
        defaults = cls()
        return cls(
            risk_free_rate=_env_float(
                environ, "JOURNAL_RISK_FREE_RATE", defaults.risk_free_rate
            ),
            starting_equity=_env_float(
                environ, "JOURNAL_STARTING_EQUITY", defaults.starting_equity
            ),
            default_risk_amount=_env_float(
                environ, "JOURNAL_DEFAULT_RISK_AMOUNT", defaults.default_risk_amount
            ),
            max_query_limit=_env_positive_int(
                environ, "JOURNAL_MAX_QUERY_LIMIT", defaults.max_query_limit
            ),
        )


# Default instances
DEFAULT_PATHS = DataPaths()
DEFAULT_CONFIG = AnalysisConfig()
