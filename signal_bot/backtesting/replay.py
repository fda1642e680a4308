"""
Signal replay: walk historical candles bar by bar, ask the strategy for a signal
using only data available at each bar close, and score every signal in R.
No sizing, fees or slippage; one virtual position at a time.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

import pandas as pd

from signal_bot.analytics.metrics import PerformanceMetrics, compute_metrics
from signal_bot.core.logger import get_logger
from signal_bot.core.types import SignalType, TradeSignal
from signal_bot.strategies.base import BaseStrategy
from signal_bot.utils.timeframes import timeframe_delta

logger = get_logger("replay")


@dataclass
class ReplayTrade:
    """One replayed signal and how it ended."""
    symbol: str
    side: SignalType
    entry_time: datetime
    exit_time: datetime
    entry_price: float
    stop_loss: float
    take_profit: float
    exit_price: float
    exit_reason: str  # "stop_loss" | "take_profit" | "timeout" | "end_of_data"
    r_multiple: float
    bars_held: int
    reason: str = ""


@dataclass
class ReplayResult:
    trades: List[ReplayTrade] = field(default_factory=list)
    bars_evaluated: int = 0
    signals_seen: int = 0
    metrics: Optional[PerformanceMetrics] = None


@dataclass
class _OpenTrade:
    signal: TradeSignal
    entry_index: int
    entry_time: datetime


class SignalReplay:
    """
    Replays a strategy over a main (e.g. 15m) and trend (e.g. 1h) frame.
    At main bar i the strategy sees main rows 0..i and only the trend bars that
    closed at or before bar i's close. A bar touching both stop and target counts as a stop.
    """

    def __init__(
        self,
        strategy: BaseStrategy,
        main_timeframe: str = "15m",
        trend_timeframe: str = "1h",
        max_hold_bars: int = 96,
    ):
        self.strategy = strategy
        self.main_delta = timeframe_delta(main_timeframe)
        self.trend_delta = timeframe_delta(trend_timeframe)
        self.max_hold_bars = max_hold_bars

    def run(self, df_main: pd.DataFrame, df_trend: pd.DataFrame, symbol: str = "") -> ReplayResult:
        main = df_main.reset_index(drop=True)
        trend = df_trend.reset_index(drop=True)
        main_close = pd.DatetimeIndex(pd.to_datetime(main["time"])) + self.main_delta
        trend_close = pd.DatetimeIndex(pd.to_datetime(trend["time"])) + self.trend_delta

        result = ResultBuilder(symbol)
        open_trade: Optional[_OpenTrade] = None

        for i in range(len(main)):
            bar = main.iloc[i]
            if open_trade is not None:
                trade = self._check_exit(open_trade, bar, i, symbol)
                if trade is not None:
                    result.add_trade(trade)
                    open_trade = None
                # No new entry on the bar that held or closed a position
                continue

            closed_trend = int(trend_close.searchsorted(main_close[i], side="right"))
            signal = self.strategy.generate_signal(main.iloc[: i + 1], trend.iloc[:closed_trend], symbol)
            result.bars_evaluated += 1
            if signal.is_actionable:
                result.signals_seen += 1
                open_trade = _OpenTrade(signal=signal, entry_index=i, entry_time=bar["time"])

        if open_trade is not None and len(main) > 0:
            last = main.iloc[-1]
            result.add_trade(self._close(
                open_trade, float(last["close"]), last["time"], "end_of_data", len(main) - 1, symbol,
            ))

        return result.build()

    def _check_exit(self, open_trade: _OpenTrade, bar: pd.Series, index: int, symbol: str) -> Optional[ReplayTrade]:
        signal = open_trade.signal
        high, low, close = float(bar["high"]), float(bar["low"]), float(bar["close"])
        if signal.type == SignalType.LONG:
            if low <= signal.stop_loss:
                return self._close(open_trade, signal.stop_loss, bar["time"], "stop_loss", index, symbol)
            if high >= signal.take_profit:
                return self._close(open_trade, signal.take_profit, bar["time"], "take_profit", index, symbol)
        else:
            if high >= signal.stop_loss:
                return self._close(open_trade, signal.stop_loss, bar["time"], "stop_loss", index, symbol)
            if low <= signal.take_profit:
                return self._close(open_trade, signal.take_profit, bar["time"], "take_profit", index, symbol)
        if index - open_trade.entry_index >= self.max_hold_bars:
            return self._close(open_trade, close, bar["time"], "timeout", index, symbol)
        return None

    @staticmethod
    def _close(
        open_trade: _OpenTrade,
        exit_price: float,
        exit_time: datetime,
        exit_reason: str,
        index: int,
        symbol: str,
    ) -> ReplayTrade:
        signal = open_trade.signal
        move = exit_price - signal.entry_price
        if signal.type == SignalType.SHORT:
            move = -move
        risk = signal.risk
        return ReplayTrade(
            symbol=symbol,
            side=signal.type,
            entry_time=open_trade.entry_time,
            exit_time=exit_time,
            entry_price=signal.entry_price,
            stop_loss=signal.stop_loss,
            take_profit=signal.take_profit,
            exit_price=exit_price,
            exit_reason=exit_reason,
            r_multiple=move / risk if risk > 0 else 0.0,
            bars_held=index - open_trade.entry_index,
            reason=signal.reason,
        )


class ResultBuilder:
    """Collects replay output; metrics are computed once at the end."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        self.trades: List[ReplayTrade] = []
        self.bars_evaluated = 0
        self.signals_seen = 0

    def add_trade(self, trade: ReplayTrade) -> None:
        logger.info(
            "%s %s closed (%s) entry=%.4f exit=%.4f R=%.2f after %d bars",
            self.symbol or "-", trade.side.value, trade.exit_reason,
            trade.entry_price, trade.exit_price, trade.r_multiple, trade.bars_held,
        )
        self.trades.append(trade)

    def build(self) -> ReplayResult:
        return ReplayResult(
            trades=self.trades,
            bars_evaluated=self.bars_evaluated,
            signals_seen=self.signals_seen,
            metrics=compute_metrics([t.r_multiple for t in self.trades]),
        )
