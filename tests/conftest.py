"""Synthetic candle frames shared by the tests."""

from datetime import datetime, timedelta, timezone
from typing import List

import pandas as pd
import pytest

from signal_bot.core.types import OHLCV_COLUMNS

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def zigzag_closes(n: int, start: float, odd_step: float, even_step: float) -> List[float]:
    """close[0] = start; odd bars move by odd_step, even bars by even_step."""
    closes = [start]
    for k in range(1, n):
        closes.append(round(closes[-1] + (odd_step if k % 2 else even_step), 8))
    return closes


def make_frame(
    closes: List[float],
    minutes: int = 15,
    start: datetime = START,
    wick: float = 0.05,
    volume: float = 1000.0,
) -> pd.DataFrame:
    """Each bar opens at the previous close; high/low extend the body by `wick`."""
    rows = []
    prev = closes[0]
    for k, close in enumerate(closes):
        open_ = prev
        rows.append((
            start + timedelta(minutes=minutes * k),
            open_,
            max(open_, close) + wick,
            min(open_, close) - wick,
            close,
            volume,
        ))
        prev = close
    return pd.DataFrame(rows, columns=OHLCV_COLUMNS)


def set_bar(df: pd.DataFrame, index: int, **values: float) -> pd.DataFrame:
    df = df.copy()
    for col, value in values.items():
        df.loc[index, col] = value
    return df


@pytest.fixture
def fixed_now():
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def uptrend_1h():
    return make_frame(zigzag_closes(150, 100.0, 0.3, -0.1), minutes=60)


@pytest.fixture
def downtrend_1h():
    return make_frame(zigzag_closes(150, 200.0, -0.3, 0.1), minutes=60)


@pytest.fixture
def long_setup_15m():
    """
    Rising zigzag (+0.3 / -0.1) ending on an up bar at 115.1 whose wick dips to 113.3,
    into EMA34 (~113.35): breakout held, retest, green close above EMA34, MACD > signal, RSI ~78 rising.
    """
    df = make_frame(zigzag_closes(150, 100.0, 0.3, -0.1))
    return set_bar(df, 149, low=113.3)


@pytest.fixture
def short_setup_15m():
    """
    Gentle falling zigzag (-0.12 / +0.08) ending on a down bar at 196.92, high wicks
    back within 0.3% of EMA34 (~197.30), MACD < signal, RSI ~36 falling. Not steep enough to be a dump.
    """
    return make_frame(zigzag_closes(150, 200.0, -0.12, 0.08), wick=0.03)


@pytest.fixture
def dump_15m():
    """
    Steep falling zigzag (-0.3 / +0.1): close ~0.9% under EMA34, RSI ~22.
    The last bar is green, has no retest and thin volume: only the dump override can short it.
    """
    df = make_frame(zigzag_closes(150, 200.0, -0.3, 0.1))
    close = df.loc[149, "close"]
    return set_bar(df, 149, open=close - 0.1, high=close + 0.05, low=close - 0.15, volume=10.0)
