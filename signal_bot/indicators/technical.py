"""
EMA, RSI and MACD over an OHLCV frame.
Every series is aligned with the input rows and uses no lookahead.
"""

from __future__ import annotations
from typing import NamedTuple

import numpy as np
import pandas as pd


class MacdResult(NamedTuple):
    macd: pd.Series
    signal: pd.Series
    histogram: pd.Series


def ema(df: pd.DataFrame, period: int) -> pd.Series:
    """
    EMA of close seeded with the first close: k = 2 / (period + 1).
    Empty frame gives an empty series.
    """
    close = df["close"].astype(float)
    return close.ewm(span=period, adjust=False).mean()


def rsi(df: pd.DataFrame, period: int) -> pd.Series:
    """
    Wilder RSI. Rows before `period` (or every row when len <= period) are 0,
    meaning "not computed".
    A zero average loss gives rs = 0 and therefore RSI 0, not 100.
    """
    close = df["close"].to_numpy(dtype=float)
    n = len(close)
    result = np.zeros(n)
    if n <= period:
        return pd.Series(result, index=df.index)

    gain = 0.0
    loss = 0.0
    for i in range(1, period + 1):
        change = close[i] - close[i - 1]
        if change > 0:
            gain += change
        else:
            loss -= change
    gain /= period
    loss /= period
    result[period] = _rsi_value(gain, loss)

    for i in range(period + 1, n):
        change = close[i] - close[i - 1]
        gain = (gain * (period - 1) + max(change, 0.0)) / period
        loss = (loss * (period - 1) + max(-change, 0.0)) / period
        result[i] = _rsi_value(gain, loss)

    return pd.Series(result, index=df.index)


def _rsi_value(gain: float, loss: float) -> float:
    rs = 0.0 if loss == 0 else gain / loss
    return 100.0 - 100.0 / (1.0 + rs)


def macd(df: pd.DataFrame, fast_period: int, slow_period: int, signal_period: int) -> MacdResult:
    """MACD line, its EMA signal line and the histogram."""
    line = ema(df, fast_period) - ema(df, slow_period)
    # Signal line is the same EMA run over a frame whose close is the MACD line
    macd_frame = pd.DataFrame({"time": df["time"], "close": line}, index=df.index)
    signal = ema(macd_frame, signal_period)
    return MacdResult(macd=line, signal=signal, histogram=line - signal)
