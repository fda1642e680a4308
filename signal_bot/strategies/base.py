"""Abstract strategy: indicators + signal generation."""

from __future__ import annotations
from abc import ABC, abstractmethod

import pandas as pd

from signal_bot.core.types import TradeSignal


class BaseStrategy(ABC):
    """Strategy computes indicators and turns the latest bar into a TradeSignal."""

    @abstractmethod
    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        """Return a copy of the OHLCV frame with indicator columns added. No lookahead."""
        pass

    @abstractmethod
    def generate_signal(self, candles_main: pd.DataFrame, candles_trend: pd.DataFrame, symbol: str = "") -> TradeSignal:
        """
        Evaluate the last row of candles_main, using candles_trend as the higher timeframe.
        Always returns a TradeSignal; "no trade" is SignalType.NONE, never None.
        """
        pass
