"""Execution engine that advances every shopper of a single path tick by tick."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..config import WorldConfig
from ..policies import ShopperAction, ShopperPolicy, get_policy
from .agents import Shopper, Stall
from .metrics import items_remaining
from .scenario import Scenario, path_rng

__all__ = ["PathState", "PathResult", "run_path"]

logger = logging.getLogger(__name__)


@dataclass
class PathState:
    """Mutable snapshot of one path: agents, clock and metric history."""

    stalls: List[Stall]
    shoppers: List[Shopper]
    tick: int = 0
    remaining: List[float] = field(default_factory=list)

    def record(self) -> float:
        value = items_remaining(self.shoppers)
        self.remaining.append(value)
        return value

    def advance(self, policy: ShopperPolicy) -> Counter:
        """Run one tick: every shopper in index order, then record the metric."""
        actions: Counter = Counter()
        for shopper in self.shoppers:
            actions[policy.step(shopper, self.stalls)] += 1
        self.tick += 1
        self.record()
        return actions


@dataclass
class PathResult:
    """Container returned by `run_path`."""

    config: WorldConfig
    path_index: int
    remaining: np.ndarray  # shape (max_time_steps + 1,)

    # Initial layout for plotting and the final agents for post-analysis
    initial: Scenario
    final: PathState

    def first_empty_tick(self) -> int | None:
        """First tick at which every shopping list is empty, if any."""
        hits = np.flatnonzero(self.remaining == 0)
        return int(hits[0]) if hits.size else None


# ------------------------------------------------------------------
# Engine entry-point
# ------------------------------------------------------------------

def run_path(
    cfg: WorldConfig,
    rng: np.random.Generator | None = None,
    scenario: Scenario | None = None,
    path_index: int = 0,
) -> PathResult:
    """Simulate one path for exactly ``cfg.max_time_steps`` ticks.

    When ``scenario`` is given it is copied and used as the starting layout;
    otherwise stalls and shoppers are drawn from ``rng`` (by default the
    stream of ``path_index`` under ``cfg.seed``).
    """
    policy = get_policy(cfg.policy)(cfg)
    if scenario is None:
        if rng is None:
            rng = path_rng(cfg.seed, path_index)
        scenario = Scenario.random(cfg, rng)

    initial = scenario.copy()
    working = scenario.copy()
    state = PathState(stalls=working.stalls, shoppers=working.shoppers)

    state.record()
    totals: Counter = Counter()
    for _ in range(cfg.max_time_steps):
        totals.update(state.advance(policy))

    logger.debug(
        "path %d: %.3f -> %.3f items remaining (%d moves, %d purchases)",
        path_index,
        state.remaining[0],
        state.remaining[-1],
        totals[ShopperAction.MOVE],
        totals[ShopperAction.PURCHASE],
    )

    return PathResult(
        config=cfg,
        path_index=path_index,
        remaining=np.asarray(state.remaining, dtype=float),
        initial=initial,
        final=state,
    )
