"""
Load configuration from config.yaml and .env. Env vars override the file.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class StrategySettings:
    """Thresholds of the 15m retest strategy. Defaults are the tuned production values."""

    min_candles: int = 120
    # EMAs on the main (15m) frame and the trend (1h) frame
    ema_fast: int = 34
    ema_mid: int = 89
    ema_slow: int = 200
    trend_ema: int = 34
    rsi_len: int = 6
    macd_fast: int = 5
    macd_slow: int = 13
    macd_signal: int = 5
    # Extreme dump override
    dump_ema_ratio: float = 0.995
    dump_rsi_max: float = 30.0
    # Volume confirmation
    volume_lookback: int = 3
    volume_ratio: float = 0.7
    # Breakout / retest tolerances, as multiples of the EMA
    long_breakout_ratio: float = 1.002
    short_breakout_ratio: float = 1.0002
    long_retest_ratio: float = 1.003
    short_retest_ratio: float = 0.997
    rsi_long_min: float = 55.0
    rsi_short_max: float = 45.0
    # Stop / target placement
    swing_lookback: int = 5
    stop_buffer_pct: float = 0.0005
    risk_reward: float = 1.5
    price_decimals: int = 3

    def __post_init__(self) -> None:
        for name in (
            "ema_fast", "ema_mid", "ema_slow", "trend_ema", "rsi_len",
            "macd_fast", "macd_slow", "macd_signal", "volume_lookback", "swing_lookback",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.min_candles < 2:
            raise ValueError(f"min_candles must be >= 2, got {self.min_candles}")
        for name in (
            "dump_ema_ratio", "volume_ratio", "long_breakout_ratio", "short_breakout_ratio",
            "long_retest_ratio", "short_retest_ratio", "risk_reward",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.stop_buffer_pct < 0:
            raise ValueError(f"stop_buffer_pct must be >= 0, got {self.stop_buffer_pct}")
        if self.price_decimals < 0:
            raise ValueError(f"price_decimals must be >= 0, got {self.price_decimals}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "StrategySettings":
        """Build from a config section; unknown keys are ignored."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def env(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def env_int(key: str, default: int = 0) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def env_float(key: str, default: float = 0.0) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def _strategy_settings(section: Mapping[str, Any]) -> StrategySettings:
    values: dict[str, Any] = {}
    for f in fields(StrategySettings):
        default = section.get(f.name, f.default)
        key = f.name.upper()
        if isinstance(f.default, int):
            values[f.name] = env_int(key, int(default))
        else:
            values[f.name] = env_float(key, float(default))
    return StrategySettings(**values)


def load_config(
    config_path: Optional[Path] = None,
    project_root: Optional[Path] = None,
    symbol: Optional[str] = None,
) -> "Config":
    """Load config.yaml and overlay with env. An explicit symbol wins over both. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    market = data.get("market", {})
    logging_section = data.get("logging", {})
    replay = data.get("replay", {})

    return Config(
        symbol=(symbol or env("SYMBOL", market.get("symbol", "BTCUSDT"))).upper(),
        main_timeframe=env("MAIN_TIMEFRAME", market.get("main_timeframe", "15m")),
        trend_timeframe=env("TREND_TIMEFRAME", market.get("trend_timeframe", "1h")),
        strategy=_strategy_settings(data.get("strategy", {})),
        log_level=env("LOG_LEVEL", logging_section.get("level", "INFO")),
        log_dir=Path(logging_section.get("log_dir", "logs")),
        log_file=logging_section.get("log_file", "signal_bot.log"),
        replay_max_hold_bars=env_int("REPLAY_MAX_HOLD_BARS", int(replay.get("max_hold_bars", 96))),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "symbol", "main_timeframe", "trend_timeframe", "strategy",
        "log_level", "log_dir", "log_file",
        "replay_max_hold_bars",
    )

    def __init__(
        self,
        symbol: str = "BTCUSDT",
        main_timeframe: str = "15m",
        trend_timeframe: str = "1h",
        strategy: Optional[StrategySettings] = None,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "signal_bot.log",
        replay_max_hold_bars: int = 96,
    ):
        self.symbol = symbol
        self.main_timeframe = main_timeframe
        self.trend_timeframe = trend_timeframe
        self.strategy = strategy or StrategySettings()
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
        self.replay_max_hold_bars = replay_max_hold_bars
