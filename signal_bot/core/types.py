"""
Core data types: candles, candle frames and trade signals.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

import pandas as pd

OHLCV_COLUMNS = ["time", "open", "high", "low", "close", "volume"]


class SignalType(str, Enum):
    NONE = "NONE"
    INFO = "INFO"
    LONG = "LONG"
    SHORT = "SHORT"


@dataclass(frozen=True)
class Candle:
    """OHLCV candle."""
    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class TradeSignal:
    """Decision for one evaluation. Price fields are set only for LONG/SHORT."""
    type: SignalType = SignalType.NONE
    entry_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    reason: str = ""
    time: Optional[datetime] = None
    symbol: str = ""

    @classmethod
    def neutral(cls, reason: str = "", time: Optional[datetime] = None, symbol: str = "") -> "TradeSignal":
        return cls(type=SignalType.NONE, reason=reason, time=time, symbol=symbol)

    @property
    def is_actionable(self) -> bool:
        return self.type in (SignalType.LONG, SignalType.SHORT)

    @property
    def risk(self) -> float:
        """Distance entry -> stop; what position sizing divides the dollar risk by."""
        if not self.is_actionable:
            return 0.0
        return abs(self.entry_price - self.stop_loss)

    @property
    def reward(self) -> float:
        if not self.is_actionable:
            return 0.0
        return abs(self.take_profit - self.entry_price)

    @property
    def risk_reward(self) -> float:
        risk = self.risk
        if risk <= 0:
            return 0.0
        return self.reward / risk


def candles_to_frame(candles: Iterable[Candle]) -> pd.DataFrame:
    """Build the canonical OHLCV frame (positional index, ascending time)."""
    rows = [(c.time, c.open, c.high, c.low, c.close, c.volume) for c in candles]
    df = pd.DataFrame(rows, columns=OHLCV_COLUMNS)
    df[["open", "high", "low", "close", "volume"]] = df[["open", "high", "low", "close", "volume"]].astype(float)
    return df


def frame_to_candles(df: pd.DataFrame) -> List[Candle]:
    return [
        Candle(
            time=row.time,
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
        )
        for row in df[OHLCV_COLUMNS].itertuples(index=False)
    ]


def has_ohlcv_columns(df: object) -> bool:
    return isinstance(df, pd.DataFrame) and all(col in df.columns for col in OHLCV_COLUMNS)
