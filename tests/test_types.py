"""Unit tests for core.types and utils.prices."""

from datetime import datetime, timezone

import pytest

from signal_bot.core.types import (
    Candle,
    SignalType,
    TradeSignal,
    candles_to_frame,
    frame_to_candles,
    has_ohlcv_columns,
)
from signal_bot.utils.prices import round_price


def test_neutral_signal_has_no_prices():
    s = TradeSignal.neutral("sideways market")
    assert s.type == SignalType.NONE
    assert s.entry_price is None and s.stop_loss is None and s.take_profit is None
    assert not s.is_actionable
    assert s.risk == 0.0
    assert s.risk_reward == 0.0


def test_default_signal_is_none():
    assert TradeSignal().type == SignalType.NONE


def test_long_risk_reward():
    s = TradeSignal(type=SignalType.LONG, entry_price=100.0, stop_loss=98.0, take_profit=103.0)
    assert s.is_actionable
    assert s.risk == pytest.approx(2.0)
    assert s.reward == pytest.approx(3.0)
    assert s.risk_reward == pytest.approx(1.5)


def test_signal_is_frozen():
    s = TradeSignal.neutral()
    with pytest.raises(Exception):
        s.reason = "changed"


def test_frame_round_trip():
    t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    candles = [
        Candle(time=t0, open=1.0, high=2.0, low=0.5, close=1.5, volume=10.0),
        Candle(time=t0.replace(hour=1), open=1.5, high=1.8, low=1.2, close=1.3, volume=7.0),
    ]
    df = candles_to_frame(candles)
    assert list(df.columns) == ["time", "open", "high", "low", "close", "volume"]
    assert has_ohlcv_columns(df)
    back = frame_to_candles(df)
    assert [c.close for c in back] == [1.5, 1.3]
    assert back[0].time == t0


def test_has_ohlcv_columns_rejects_other_objects():
    assert not has_ohlcv_columns(None)
    assert not has_ohlcv_columns([1, 2, 3])


def test_round_price_half_away_from_zero():
    assert round_price(2.0625, 3) == 2.063
    assert round(2.0625, 3) == 2.062  # builtin is banker's rounding
    assert round_price(-2.0625, 3) == -2.063
    assert round_price(1.0005, 3) == 1.001
    assert round_price(113.24245, 3) == 113.242


def test_round_price_zero_decimals():
    assert round_price(2.5, 0) == 3.0
    assert round_price(117.8869999999, 3) == 117.887
