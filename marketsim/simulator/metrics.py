"""Metrics for evaluating how far shoppers got through their lists."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Sequence

import numpy as np

from .agents import Shopper

__all__ = [
    "DEFAULT_PERCENTILES",
    "RemainingSummary",
    "items_remaining",
    "summarize",
]

DEFAULT_PERCENTILES = (5.0, 25.0, 75.0, 95.0)


def items_remaining(shoppers: Sequence[Shopper]) -> float:
    """Mean number of unpurchased items per shopper."""
    if not shoppers:
        return 0.0
    return float(np.mean([s.remaining for s in shoppers]))


@dataclass
class RemainingSummary:
    """Per-tick statistics of the items-remaining metric across paths."""

    ticks: np.ndarray  # shape (n_ticks,)
    mean: np.ndarray  # shape (n_ticks,)
    median: np.ndarray  # shape (n_ticks,)
    percentiles: Dict[float, np.ndarray]
    n_paths: int

    def final(self) -> Dict[str, float]:
        """Statistics at the last tick, keyed for printing."""
        out = {"mean": float(self.mean[-1]), "median": float(self.median[-1])}
        for p, values in self.percentiles.items():
            out[f"p{p:g}"] = float(values[-1])
        return out


def summarize(
    remaining: np.ndarray, percentiles: Iterable[float] = DEFAULT_PERCENTILES
) -> RemainingSummary:
    """Reduce a ``[tick, path]`` matrix to per-tick mean, median & percentiles.

    Parameters
    ----------
    remaining
        Items-remaining metric, shape ``(n_ticks, n_paths)``. A 1-D series is
        treated as a single path.
    percentiles
        Percentiles in [0, 100] to compute across paths.
    """
    remaining = np.asarray(remaining, dtype=float)
    if remaining.ndim == 1:
        remaining = remaining[:, None]
    if remaining.ndim != 2 or remaining.size == 0:
        raise ValueError(f"Expected a non-empty (n_ticks, n_paths) matrix, got shape {remaining.shape}")

    percentiles = tuple(float(p) for p in percentiles)
    bad = [p for p in percentiles if not 0.0 <= p <= 100.0]
    if bad:
        raise ValueError(f"Percentiles must lie in [0, 100], got {bad}")

    return RemainingSummary(
        ticks=np.arange(remaining.shape[0]),
        mean=remaining.mean(axis=1),
        median=np.median(remaining, axis=1),
        percentiles={p: np.percentile(remaining, p, axis=1) for p in percentiles},
        n_paths=remaining.shape[1],
    )
