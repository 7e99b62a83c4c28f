"""Scenario generation: random stall stock, shopper placement & stream helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from ..config import WorldConfig
from .agents import Shopper, Stall

__all__ = [
    "Scenario",
    "path_rng",
    "spawn_shoppers",
    "stock_stalls",
]


def path_rng(seed: int, path_index: int) -> np.random.Generator:
    """Independent random stream for one path.

    Equivalent to child ``path_index`` of ``np.random.SeedSequence(seed).spawn(n)``,
    so a single path can be replayed without generating the others.
    """
    return np.random.default_rng(np.random.SeedSequence(seed, spawn_key=(path_index,)))


def _draw_items(cfg: WorldConfig, rng: np.random.Generator, k: int) -> List[str]:
    picks = rng.choice(len(cfg.item_catalog), size=k, replace=False)
    return [cfg.item_catalog[i] for i in picks]


def stock_stalls(cfg: WorldConfig, rng: np.random.Generator) -> List[Stall]:
    """One stall per configured position, each with ``items_per_stall`` distinct goods."""
    return [
        Stall(index=k, x=x, inventory=frozenset(_draw_items(cfg, rng, cfg.items_per_stall)))
        for k, x in enumerate(cfg.stall_positions)
    ]


def spawn_shoppers(cfg: WorldConfig, rng: np.random.Generator) -> List[Shopper]:
    """Place shoppers uniformly in the market and hand each a shopping list."""
    shoppers = []
    for i in range(cfg.shopper_count):
        x = rng.uniform(-cfg.space_half_width_x, cfg.space_half_width_x)
        y = rng.uniform(-cfg.space_half_width_y, cfg.space_half_width_y)
        list_size = int(rng.integers(1, cfg.max_shopping_list_size + 1))
        shoppers.append(
            Shopper(index=i, xy=np.array([x, y]), shopping_list=_draw_items(cfg, rng, list_size))
        )
    return shoppers


@dataclass
class Scenario:
    """Concrete random realisation of a market at tick 0."""

    cfg: WorldConfig
    stalls: List[Stall]
    shoppers: List[Shopper]

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------
    @classmethod
    def random(cls, cfg: WorldConfig, rng: np.random.Generator | None = None) -> "Scenario":
        """Draw stalls first, then shoppers, from the same stream."""
        if rng is None:
            rng = path_rng(cfg.seed, 0)
        stalls = stock_stalls(cfg, rng)
        shoppers = spawn_shoppers(cfg, rng)
        return cls(cfg=cfg, stalls=stalls, shoppers=shoppers)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def copy(self) -> "Scenario":
        """Copy with independent shoppers (stalls are immutable and shared)."""
        return Scenario(
            cfg=self.cfg,
            stalls=list(self.stalls),
            shoppers=[s.snapshot() for s in self.shoppers],
        )

    def as_tuple(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (stall_xy, shopper_xy) for quick unpacking in visualisations."""
        stall_xy = np.array([s.xy for s in self.stalls], dtype=float).reshape(-1, 2)
        shopper_xy = np.array([s.xy for s in self.shoppers], dtype=float).reshape(-1, 2)
        return stall_xy, shopper_xy

    def list_sizes(self) -> np.ndarray:
        return np.array([s.remaining for s in self.shoppers], dtype=int)
