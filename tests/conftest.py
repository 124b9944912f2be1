"""Shared fixtures for journal analytics tests."""

import json
from datetime import datetime, timedelta

import polars as pl
import pytest

from journal_analytics.domain.models import Trade
from journal_analytics.infrastructure import DataPaths


def make_trade(
    pnl: float,
    trade_id: str = "t",
    user_id: str = "user-1",
    instrument: str = "ES",
    side: str = "long",
    entry_time: datetime | None = datetime(2024, 3, 4, 9, 30),
    duration: float | None = 600,
    tags: tuple[str, ...] = (),
    **kwargs,
) -> Trade:
    """Build a valid trade with the given pnl."""
    exit_time = None
    if entry_time is not None and duration is not None:
        exit_time = entry_time + timedelta(seconds=duration)
    return Trade(
        id=trade_id,
        user_id=user_id,
        instrument=instrument,
        side=side,
        quantity=kwargs.pop("quantity", 1),
        entry_price=kwargs.pop("entry_price", 100.0),
        exit_price=kwargs.pop("exit_price", 101.0),
        entry_time=entry_time,
        exit_time=exit_time,
        pnl=pnl,
        tags=tags,
        **kwargs,
    )


@pytest.fixture
def mixed_trades() -> list[Trade]:
    """Three wins, two losses, one break-even."""
    return [
        make_trade(200.0, "w1", duration=600),
        make_trade(100.0, "w2", duration=300),
        make_trade(300.0, "w3", duration=900),
        make_trade(-150.0, "l1", duration=1200),
        make_trade(-50.0, "l2", duration=0),
        make_trade(0.0, "b1", duration=None),
    ]


# Rows as exported from the journal store
TRADE_ROWS = [
    {
        "id": "t1", "user_id": "user-1", "instrument": "ES", "side": "BUY",
        "quantity": 1.0, "entry_price": 5000.0, "exit_price": 5010.0,
        "entry_time": datetime(2024, 3, 4, 9, 30), "exit_time": datetime(2024, 3, 4, 9, 45),
        "pnl": 500.0, "duration_seconds": 900.0, "commission": 4.5,
        "tags": ["tag-orb"],
    },
    {
        "id": "t2", "user_id": "user-1", "instrument": "ES", "side": "SELL",
        "quantity": 2.0, "entry_price": 5020.0, "exit_price": 5025.0,
        "entry_time": datetime(2024, 3, 4, 10, 15), "exit_time": datetime(2024, 3, 4, 10, 20),
        "pnl": -500.0, "duration_seconds": 300.0, "commission": 9.0,
        "tags": ["tag-orb", "tag-fomo"],
    },
    {
        "id": "t3", "user_id": "user-1", "instrument": "NQ", "side": "long",
        "quantity": 1.0, "entry_price": 18000.0, "exit_price": 18050.0,
        "entry_time": datetime(2024, 3, 5, 14, 0), "exit_time": datetime(2024, 3, 5, 15, 0),
        "pnl": 1000.0, "duration_seconds": None, "commission": None,
        "tags": [],
    },
    {
        "id": "t4", "user_id": "user-1", "instrument": "NQ", "side": "short",
        "quantity": 1.0, "entry_price": 18100.0, "exit_price": 18110.0,
        "entry_time": datetime(2024, 4, 1, 9, 45), "exit_time": datetime(2024, 4, 1, 9, 50),
        "pnl": -200.0, "duration_seconds": 300.0, "commission": 4.5,
        "tags": ["tag-fomo"],
    },
    {
        "id": "t5", "user_id": "user-2", "instrument": "CL", "side": "BUY",
        "quantity": 1.0, "entry_price": 80.0, "exit_price": 81.0,
        "entry_time": datetime(2024, 3, 4, 11, 0), "exit_time": datetime(2024, 3, 4, 11, 30),
        "pnl": 1000.0, "duration_seconds": 1800.0, "commission": 4.5,
        "tags": [],
    },
]

TAG_ROWS = [
    {"id": "tag-orb", "user_id": "user-1", "name": "Opening Range", "color": "#22c55e"},
    {"id": "tag-fomo", "user_id": "user-1", "name": "FOMO", "color": "#ef4444"},
]


@pytest.fixture
def data_paths(tmp_path) -> DataPaths:
    """Temporary data directory with trades.parquet and tags.json."""
    paths = DataPaths(root=tmp_path)
    paths.ensure_dirs()
    pl.DataFrame(TRADE_ROWS).write_parquet(paths.trades_parquet)
    with open(paths.tags_json, "w", encoding="utf-8") as f:
        json.dump(TAG_ROWS, f)
    return paths


@pytest.fixture
def json_data_paths(tmp_path) -> DataPaths:
    """Temporary data directory with trades.json only."""
    paths = DataPaths(root=tmp_path)
    paths.ensure_dirs()
    rows = [
        {
            **row,
            "entry_time": row["entry_time"].isoformat() + "Z",
            "exit_time": row["exit_time"].isoformat() + "Z",
        }
        for row in TRADE_ROWS
    ]
    with open(paths.trades_json, "w", encoding="utf-8") as f:
        json.dump(rows, f)
    return paths
