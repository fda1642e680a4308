#!/usr/bin/env python3
"""
Signal Bot CLI: signal | replay
Usage:
  python main.py signal --main candles_15m.csv --trend candles_1h.csv [--config config.yaml]
  python main.py replay --main candles_15m.csv --trend candles_1h.csv [--config config.yaml]
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Optional

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from signal_bot.backtesting.replay import SignalReplay
from signal_bot.core.config import Config, load_config
from signal_bot.core.logger import get_logger, setup_logging
from signal_bot.data.csv_source import load_candles_csv
from signal_bot.strategies.retest_15m import RetestStrategy

logger = get_logger("cli")


def _load_frames(main_csv: Path, trend_csv: Path):
    try:
        return load_candles_csv(main_csv), load_candles_csv(trend_csv)
    except (OSError, ValueError) as e:
        logger.error("Cannot load candles: %s", e)
        return None


def run_signal(config: Config, main_csv: Path, trend_csv: Path) -> int:
    """Evaluate the latest bar and print the decision."""
    frames = _load_frames(main_csv, trend_csv)
    if frames is None:
        return 1
    df_main, df_trend = frames
    strategy = RetestStrategy(config.strategy)
    signal = strategy.generate_signal(df_main, df_trend, symbol=config.symbol)
    print(f"\n--- Signal {config.symbol} ---")
    print(f"Type: {signal.type.value}")
    if signal.is_actionable:
        print(f"Entry: {signal.entry_price}")
        print(f"Stop loss: {signal.stop_loss}")
        print(f"Take profit: {signal.take_profit}")
        print(f"Risk/reward: {signal.risk_reward:.2f}")
    print(f"Reason: {signal.reason}")
    return 0


def run_replay(config: Config, main_csv: Path, trend_csv: Path) -> int:
    """Replay the strategy over both CSVs and print R-based metrics."""
    frames = _load_frames(main_csv, trend_csv)
    if frames is None:
        return 1
    df_main, df_trend = frames
    replay = SignalReplay(
        RetestStrategy(config.strategy),
        main_timeframe=config.main_timeframe,
        trend_timeframe=config.trend_timeframe,
        max_hold_bars=config.replay_max_hold_bars,
    )
    result = replay.run(df_main, df_trend, symbol=config.symbol)
    m = result.metrics
    print("\n--- Replay Results ---")
    print(f"Bars evaluated: {result.bars_evaluated}, signals: {result.signals_seen}")
    if m:
        print(f"Total trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})")
        print(f"Total: {m.total_r:.2f}R")
        print(f"Expectancy: {m.expectancy_r:.2f}R/trade")
        print(f"Win rate: {m.win_rate*100:.1f}%")
        print(f"Profit factor: {m.profit_factor:.2f}")
        print(f"Max drawdown: {m.max_drawdown_r:.2f}R")
        print(f"Sharpe (per trade): {m.sharpe_ratio:.2f}")
    return 0


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Signal Bot CLI")
    parser.add_argument("mode", choices=["signal", "replay"], help="Evaluate latest bar or replay history")
    parser.add_argument("--main", type=Path, required=True, help="CSV of main timeframe candles (15m)")
    parser.add_argument("--trend", type=Path, required=True, help="CSV of trend timeframe candles (1h)")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--symbol", default=None, help="Symbol label for output")
    args = parser.parse_args(argv)

    config = load_config(args.config, ROOT, symbol=args.symbol)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    if args.mode == "signal":
        return run_signal(config, args.main, args.trend)
    return run_replay(config, args.main, args.trend)


if __name__ == "__main__":
    sys.exit(main())
