"""Unit tests for indicators.technical."""

import numpy as np
import pandas as pd
import pytest

from signal_bot.indicators.technical import ema, rsi, macd

from conftest import make_frame, zigzag_closes


def _frame(closes):
    return make_frame(list(closes))


def test_ema_seed_and_recurrence():
    out = ema(_frame([1.0, 2.0, 3.0]), 3)  # k = 0.5
    assert out.tolist() == pytest.approx([1.0, 1.5, 2.25])


@pytest.mark.parametrize("period", [1, 2, 5, 34, 200])
def test_ema_length_and_first_value(period):
    df = _frame(zigzag_closes(60, 50.0, 0.7, -0.4))
    out = ema(df, period)
    assert len(out) == len(df)
    assert out.iloc[0] == df["close"].iloc[0]


def test_ema_period_one_tracks_close():
    df = _frame([3.0, 1.0, 4.0, 1.5])
    assert ema(df, 1).tolist() == pytest.approx(df["close"].tolist())


def test_ema_empty_frame():
    empty = make_frame([1.0]).iloc[0:0]
    assert len(ema(empty, 34)) == 0


def test_rsi_too_short_is_all_zero():
    df = _frame([1.0, 2.0, 3.0, 2.5, 4.0, 5.0])
    assert rsi(df, 6).tolist() == [0.0] * 6


def test_rsi_known_values():
    # deltas +1, -0.5, +1; seed gain 0.5 loss 0.25 -> rs 2; then gain 0.75 loss 0.125 -> rs 6
    out = rsi(_frame([10.0, 11.0, 10.5, 11.5]), 2)
    assert out.iloc[0] == 0.0
    assert out.iloc[1] == 0.0
    assert out.iloc[2] == pytest.approx(100 - 100 / 3)
    assert out.iloc[3] == pytest.approx(100 - 100 / 7)


def test_rsi_zero_loss_gives_zero():
    # Only gains: average loss stays 0, so rs is taken as 0 and RSI is 0 (not 100)
    out = rsi(_frame([float(x) for x in range(1, 21)]), 6)
    assert (out == 0.0).all()


def test_rsi_bounded():
    rng = np.random.RandomState(7)
    closes = 100 + np.cumsum(rng.normal(0, 1, 300))
    out = rsi(_frame(closes), 6)
    computed = out.iloc[6:]
    assert ((computed >= 0) & (computed <= 100)).all()


def test_rsi_prefix_not_affected_by_later_bars():
    closes = zigzag_closes(80, 100.0, 0.3, -0.2)
    full = rsi(_frame(closes), 6)
    head = rsi(_frame(closes[:40]), 6)
    assert full.iloc[:40].tolist() == head.tolist()


def test_macd_identity():
    df = _frame(zigzag_closes(120, 100.0, 0.5, -0.3))
    result = macd(df, 5, 13, 5)
    diff = ema(df, 5) - ema(df, 13)
    assert (result.macd == diff).all()
    assert (result.histogram == result.macd - result.signal).all()


def test_macd_signal_is_ema_of_line():
    df = _frame(zigzag_closes(50, 20.0, 0.2, -0.1))
    result = macd(df, 5, 13, 5)
    expected = ema(pd.DataFrame({"time": df["time"], "close": result.macd}), 5)
    assert result.signal.tolist() == expected.tolist()
    assert len(result.signal) == len(df)
