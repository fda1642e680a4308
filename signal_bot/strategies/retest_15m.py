"""
15m EMA retest strategy with a 1h trend filter.

Pipeline per call (nothing is kept between calls):
  1. regime: up / down trend on 1h + 15m EMA34, or an extreme dump on 15m
  2. volume: current bar vs the average of the bars before it
  3. setups, evaluated in order until one returns a decision:
     long (breakout held, retest of EMA34/89, bullish rejection, momentum),
     short (mirror, plus the extreme-dump override)
Stops sit beyond the recent swing with a small buffer; target is risk_reward x risk.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import pandas as pd

from signal_bot.core.config import StrategySettings
from signal_bot.core.logger import get_logger
from signal_bot.core.types import SignalType, TradeSignal, has_ohlcv_columns
from signal_bot.indicators.price_action import average_volume, find_swing_high, find_swing_low
from signal_bot.indicators.technical import ema, macd, rsi
from signal_bot.strategies.base import BaseStrategy
from signal_bot.utils.prices import round_price

logger = get_logger("strategy")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BarContext:
    """Values of the last 15m bar (and the one before it) that the setups read."""
    index: int
    open: float
    high: float
    low: float
    close: float
    volume: float
    prev_close: float
    ema_fast: float
    ema_mid: float
    ema_slow: float
    prev_ema_fast: float
    rsi: float
    prev_rsi: float
    macd: float
    macd_signal: float
    trend_close: float
    trend_ema: float
    up_trend: bool
    down_trend: bool
    extreme_dump: bool


Evaluator = Callable[[pd.DataFrame, BarContext, datetime, str], Optional[TradeSignal]]


class RetestStrategy(BaseStrategy):
    """
    Long: 1h and 15m close above EMA34, previous bar held above EMA34, current bar
    dips into EMA34/EMA89 and closes green above EMA34, MACD > signal, RSI rising above 55.
    Short: the mirror, or any bar classified as an extreme dump.
    """

    def __init__(self, settings: Optional[StrategySettings] = None, clock: Optional[Callable[[], datetime]] = None):
        self.settings = settings or StrategySettings()
        self._clock = clock or _utc_now

    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        s = self.settings
        df = df.copy()
        df["ema_fast"] = ema(df, s.ema_fast)
        df["ema_mid"] = ema(df, s.ema_mid)
        df["ema_slow"] = ema(df, s.ema_slow)
        df["rsi"] = rsi(df, s.rsi_len)
        line, signal, hist = macd(df, s.macd_fast, s.macd_slow, s.macd_signal)
        df["macd"] = line
        df["macd_signal"] = signal
        df["macd_hist"] = hist
        return df

    def generate_signal(self, candles_main: pd.DataFrame, candles_trend: pd.DataFrame, symbol: str = "") -> TradeSignal:
        now = self._clock()
        s = self.settings
        if not has_ohlcv_columns(candles_main) or not has_ohlcv_columns(candles_trend):
            return self._finish(TradeSignal.neutral("malformed candle input", now, symbol))
        if len(candles_main) < s.min_candles or len(candles_trend) < s.min_candles:
            return self._finish(TradeSignal.neutral(
                f"insufficient history: {len(candles_main)} main / {len(candles_trend)} trend candles, "
                f"need {s.min_candles}",
                now, symbol,
            ))

        main = candles_main.reset_index(drop=True)
        trend = candles_trend.reset_index(drop=True)
        ctx = self._bar_context(self.compute_indicators(main), trend)

        if not (ctx.up_trend or ctx.down_trend or ctx.extreme_dump):
            return self._finish(TradeSignal.neutral("sideways market", now, symbol))

        avg_pullback_vol = average_volume(main, ctx.index - 1, s.volume_lookback)
        strong_volume = avg_pullback_vol > 0 and ctx.volume >= avg_pullback_vol * s.volume_ratio
        if not strong_volume and not ctx.extreme_dump:
            return self._finish(TradeSignal.neutral(
                f"weak volume: {ctx.volume:.4f} < {s.volume_ratio} x pullback avg {avg_pullback_vol:.4f}",
                now, symbol,
            ))

        evaluators: tuple[Evaluator, ...] = (self._long_setup, self._short_setup)
        for evaluator in evaluators:
            signal = evaluator(main, ctx, now, symbol)
            if signal is not None:
                return self._finish(signal)
        return self._finish(TradeSignal.neutral("no setup", now, symbol))

    def _bar_context(self, ind: pd.DataFrame, trend: pd.DataFrame) -> BarContext:
        s = self.settings
        i = len(ind) - 1
        last = ind.iloc[i]
        prev = ind.iloc[i - 1]
        trend_ema = ema(trend, s.trend_ema)
        trend_close = float(trend["close"].iloc[-1])
        trend_ema_last = float(trend_ema.iloc[-1])

        close = float(last["close"])
        ema_fast = float(last["ema_fast"])
        macd_line = float(last["macd"])
        macd_signal = float(last["macd_signal"])
        rsi_last = float(last["rsi"])
        return BarContext(
            index=i,
            open=float(last["open"]),
            high=float(last["high"]),
            low=float(last["low"]),
            close=close,
            volume=float(last["volume"]),
            prev_close=float(prev["close"]),
            ema_fast=ema_fast,
            ema_mid=float(last["ema_mid"]),
            ema_slow=float(last["ema_slow"]),
            prev_ema_fast=float(prev["ema_fast"]),
            rsi=rsi_last,
            prev_rsi=float(prev["rsi"]),
            macd=macd_line,
            macd_signal=macd_signal,
            trend_close=trend_close,
            trend_ema=trend_ema_last,
            up_trend=trend_close > trend_ema_last and close > ema_fast,
            down_trend=trend_close < trend_ema_last and close < ema_fast,
            extreme_dump=(
                close < ema_fast * s.dump_ema_ratio
                and macd_line < macd_signal
                and rsi_last < s.dump_rsi_max
            ),
        )

    def _long_setup(self, df: pd.DataFrame, ctx: BarContext, now: datetime, symbol: str) -> Optional[TradeSignal]:
        s = self.settings
        if not ctx.up_trend:
            return None
        # Previous bar must already be above EMA34; skip the first breakout bar
        if ctx.prev_close < ctx.prev_ema_fast * s.long_breakout_ratio:
            return None

        retest = ctx.low <= ctx.ema_fast * s.long_retest_ratio or ctx.low <= ctx.ema_mid * s.long_retest_ratio
        rejection = ctx.close > ctx.open and ctx.close > ctx.ema_fast
        momentum = ctx.macd > ctx.macd_signal and ctx.rsi > s.rsi_long_min and ctx.rsi > ctx.prev_rsi
        if not (retest and rejection and momentum):
            return None

        entry = ctx.close
        swing_low = find_swing_low(df, ctx.index, s.swing_lookback)
        stop = round_price(swing_low - entry * s.stop_buffer_pct, s.price_decimals)
        if stop <= 0 or stop >= entry:
            return TradeSignal.neutral(f"long rejected: stop {stop} invalid for entry {entry}", now, symbol)
        risk = entry - stop
        take_profit = round_price(entry + risk * s.risk_reward, s.price_decimals)
        if take_profit <= entry:
            return TradeSignal.neutral(f"long rejected: target {take_profit} not above entry {entry}", now, symbol)

        return TradeSignal(
            type=SignalType.LONG,
            entry_price=entry,
            stop_loss=stop,
            take_profit=take_profit,
            reason=(
                f"1h uptrend, EMA retest after breakout, strong volume, "
                f"MACD {ctx.macd:.4f} > signal {ctx.macd_signal:.4f}, RSI {ctx.rsi:.1f} rising"
            ),
            time=now,
            symbol=symbol,
        )

    def _short_setup(self, df: pd.DataFrame, ctx: BarContext, now: datetime, symbol: str) -> Optional[TradeSignal]:
        s = self.settings
        if not (ctx.down_trend or ctx.extreme_dump):
            return TradeSignal.neutral("no long setup, no short regime", now, symbol)
        # Previous bar must already be below EMA34, unless price is dumping
        if ctx.prev_close > ctx.prev_ema_fast * s.short_breakout_ratio and not ctx.extreme_dump:
            return TradeSignal.neutral("short breakout not confirmed by previous bar", now, symbol)

        retest = ctx.high >= ctx.ema_fast * s.short_retest_ratio or ctx.high >= ctx.ema_mid * s.short_retest_ratio
        rejection = ctx.close < ctx.open and ctx.close < ctx.ema_fast
        momentum = ctx.macd < ctx.macd_signal and ctx.rsi < s.rsi_short_max and ctx.rsi < ctx.prev_rsi
        if not ((retest and rejection and momentum) or ctx.extreme_dump):
            return TradeSignal.neutral("no short setup", now, symbol)

        entry = ctx.close
        swing_high = find_swing_high(df, ctx.index, s.swing_lookback)
        stop = round_price(swing_high + entry * s.stop_buffer_pct, s.price_decimals)
        if stop <= entry:
            return TradeSignal.neutral(f"short rejected: stop {stop} not above entry {entry}", now, symbol)
        risk = stop - entry
        take_profit = round_price(entry - risk * s.risk_reward, s.price_decimals)
        if take_profit >= entry:
            return TradeSignal.neutral(f"short rejected: target {take_profit} not below entry {entry}", now, symbol)

        if ctx.extreme_dump:
            reason = (
                f"extreme dump: close {ctx.close} < {s.dump_ema_ratio} x EMA34 {ctx.ema_fast:.4f}, "
                f"MACD below signal, RSI {ctx.rsi:.1f}"
            )
        else:
            reason = (
                f"1h downtrend, EMA retest after breakdown, strong volume, "
                f"MACD {ctx.macd:.4f} < signal {ctx.macd_signal:.4f}, RSI {ctx.rsi:.1f} falling"
            )
        return TradeSignal(
            type=SignalType.SHORT,
            entry_price=entry,
            stop_loss=stop,
            take_profit=take_profit,
            reason=reason,
            time=now,
            symbol=symbol,
        )

    def _finish(self, signal: TradeSignal) -> TradeSignal:
        if signal.is_actionable:
            logger.info(
                "%s %s entry=%.4f SL=%.3f TP=%.3f | %s",
                signal.symbol or "-", signal.type.value, signal.entry_price,
                signal.stop_loss, signal.take_profit, signal.reason,
            )
        else:
            logger.debug("%s no signal: %s", signal.symbol or "-", signal.reason)
        return signal
