"""
Performance metrics over per-trade R multiples (profit / initial risk).
No position sizing is involved, so everything is expressed in R.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

import numpy as np


@dataclass
class PerformanceMetrics:
    """Aggregate performance metrics in R units."""
    total_r: float
    sharpe_ratio: float
    sortino_ratio: float
    max_drawdown_r: float
    win_rate: float
    profit_factor: float
    expectancy_r: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    avg_win_r: float
    avg_loss_r: float


def sharpe_ratio(returns: List[float], risk_free_rate: float = 0.0, periods_per_year: float = 1.0) -> float:
    """Sharpe of per-trade returns, scaled by sqrt(periods_per_year)."""
    if not returns:
        return 0.0
    arr = np.array(returns, dtype=float)
    excess = arr - risk_free_rate / periods_per_year
    if excess.std() <= 1e-12:
        return 0.0
    return float(np.sqrt(periods_per_year) * excess.mean() / excess.std())


def sortino_ratio(returns: List[float], risk_free_rate: float = 0.0, periods_per_year: float = 1.0) -> float:
    """Sortino (downside deviation). Falls back to Sharpe without losing trades."""
    if not returns:
        return 0.0
    arr = np.array(returns, dtype=float)
    excess = arr - risk_free_rate / periods_per_year
    downside = arr[arr < 0]
    if len(downside) == 0 or downside.std() <= 1e-12:
        return sharpe_ratio(returns, risk_free_rate, periods_per_year)
    return float(np.sqrt(periods_per_year) * excess.mean() / downside.std())


def max_drawdown(r_multiples: List[float]) -> float:
    """Largest peak-to-trough drop of the cumulative R curve (starting at 0), as a positive number."""
    if not r_multiples:
        return 0.0
    curve = np.concatenate([[0.0], np.cumsum(np.array(r_multiples, dtype=float))])
    peak = np.maximum.accumulate(curve)
    return float(np.max(peak - curve))


def win_rate(pnls: List[float]) -> float:
    """Fraction of trades with positive result."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def profit_factor(pnls: List[float]) -> float:
    """Gross profit / gross loss. inf when there are wins and no losses."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return float("inf") if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: List[float]) -> float:
    """Average result per trade."""
    if not pnls:
        return 0.0
    return sum(pnls) / len(pnls)


def compute_metrics(r_multiples: List[float], periods_per_year: float = 1.0) -> PerformanceMetrics:
    """Compute full metrics from the list of per-trade R multiples."""
    total_trades = len(r_multiples)
    if total_trades == 0:
        return PerformanceMetrics(
            total_r=0.0, sharpe_ratio=0.0, sortino_ratio=0.0, max_drawdown_r=0.0,
            win_rate=0.0, profit_factor=0.0, expectancy_r=0.0,
            total_trades=0, winning_trades=0, losing_trades=0, avg_win_r=0.0, avg_loss_r=0.0,
        )
    wins = [r for r in r_multiples if r > 0]
    losses = [r for r in r_multiples if r < 0]
    return PerformanceMetrics(
        total_r=float(sum(r_multiples)),
        sharpe_ratio=sharpe_ratio(r_multiples, periods_per_year=periods_per_year),
        sortino_ratio=sortino_ratio(r_multiples, periods_per_year=periods_per_year),
        max_drawdown_r=max_drawdown(r_multiples),
        win_rate=win_rate(r_multiples),
        profit_factor=profit_factor(r_multiples),
        expectancy_r=expectancy(r_multiples),
        total_trades=total_trades,
        winning_trades=len(wins),
        losing_trades=len(losses),
        avg_win_r=sum(wins) / len(wins) if wins else 0.0,
        avg_loss_r=sum(losses) / len(losses) if losses else 0.0,
    )
