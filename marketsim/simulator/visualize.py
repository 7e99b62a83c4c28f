"""Visualisation helpers (Matplotlib)."""
from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from ..config import WorldConfig
from .metrics import RemainingSummary
from .scenario import Scenario

__all__ = [
    "plot_market_layout",
    "plot_remaining_bands",
]

DEFAULT_CMAP = plt.get_cmap("tab10")


def _finish(fig, save_path: Path | None) -> None:
    if save_path is not None:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path.with_suffix(".png"), dpi=300, bbox_inches="tight")
        fig.savefig(save_path.with_suffix(".svg"), bbox_inches="tight")
    else:
        plt.show()

    plt.close(fig)


def plot_market_layout(
    scenario: Scenario,
    cfg: WorldConfig,
    save_path: Path | None = None,
) -> None:
    """Stalls on y = 0 labelled with their stock, shoppers sized by list length."""

    stall_xy, shopper_xy = scenario.as_tuple()
    sizes = scenario.list_sizes() * 15 + 10  # arbitrary scale

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(shopper_xy[:, 0], shopper_xy[:, 1], s=sizes, color=DEFAULT_CMAP(0), alpha=0.5, label="shoppers")
    ax.scatter(stall_xy[:, 0], stall_xy[:, 1], marker="s", s=80, color=DEFAULT_CMAP(3), label="stalls")
    for stall in scenario.stalls:
        ax.annotate(
            "\n".join(sorted(stall.inventory)),
            xy=stall.xy,
            xytext=(0, -10),
            textcoords="offset points",
            ha="center",
            va="top",
            fontsize=6,
        )

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Market Layout at Tick 0")
    ax.set_xlim(-cfg.space_half_width_x - 1, cfg.space_half_width_x + 1)
    ax.set_ylim(-cfg.space_half_width_y - 1, cfg.space_half_width_y + 1)
    ax.legend()
    ax.grid(True, ls=":", lw=0.5)

    _finish(fig, save_path)


def plot_remaining_bands(summary: RemainingSummary, save_path: Path | None = None) -> None:
    """Mean & median items remaining per tick with shaded percentile bands."""

    fig, ax = plt.subplots(figsize=(7, 4))
    ps = sorted(summary.percentiles)
    # Pair outermost percentiles first: (5, 95), (25, 75), ...
    for k in range(len(ps) // 2):
        lo, hi = ps[k], ps[-1 - k]
        ax.fill_between(
            summary.ticks,
            summary.percentiles[lo],
            summary.percentiles[hi],
            color=DEFAULT_CMAP(0),
            alpha=0.15 + 0.1 * k,
            lw=0,
            label=f"p{lo:g}-p{hi:g}",
        )
    ax.plot(summary.ticks, summary.mean, color=DEFAULT_CMAP(1), label="mean")
    ax.plot(summary.ticks, summary.median, color=DEFAULT_CMAP(2), ls="--", label="median")

    ax.set_xlabel("Tick")
    ax.set_ylabel("Items remaining per shopper")
    ax.set_title(f"Items Remaining Across {summary.n_paths} Paths")
    ax.set_ylim(bottom=0)
    ax.grid(True, ls=":", lw=0.5)
    ax.legend()

    _finish(fig, save_path)
