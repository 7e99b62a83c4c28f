"""Greedy nearest-stall shopping policy.

A shopper walks to the closest stall it has not yet visited, buys whatever on
its list that stall carries, and then picks the next closest unvisited stall.
Shoppers know nothing about a stall's stock before reaching it, so a trip can
turn out to be wasted.  Once every stall has been visited the shopper gives
up, even if items remain on its list.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from ..simulator.agents import Shopper, Stall
from ..simulator.geometry import distances_to_stalls
from . import ShopperAction, ShopperPolicy, register_policy

logger = logging.getLogger(__name__)


@register_policy
class NearestUnvisited(ShopperPolicy):
    """Per-tick state machine: Done, Undecided, then Purchase or Move."""

    def is_done(self, shopper: Shopper, stalls: Sequence[Stall]) -> bool:
        return shopper.finished_list or shopper.has_visited_all(len(stalls))

    def select_target(self, shopper: Shopper, stalls: Sequence[Stall]) -> Optional[Stall]:
        """Closest unvisited stall; ties go to the lowest stall index."""
        candidates = [stall for stall in stalls if stall.index not in shopper.visited]
        if not candidates:
            return None
        d = distances_to_stalls(shopper.xy, np.array([stall.x for stall in candidates]))
        # np.argmin returns the first minimum, candidates are in stall order
        return candidates[int(np.argmin(d))]

    def step(self, shopper: Shopper, stalls: Sequence[Stall], /) -> ShopperAction:
        if self.is_done(shopper, stalls):
            return ShopperAction.IDLE

        if shopper.target is None:
            shopper.target = self.select_target(shopper, stalls)
            if shopper.target is None:
                return ShopperAction.IDLE

        stall = shopper.target
        if shopper.distance_to(stall) <= self.cfg.arrival_radius:
            bought = shopper.purchase_from(stall)
            logger.debug(
                "shopper %d bought %s at stall %d (%d left)",
                shopper.index, bought, stall.index, shopper.remaining,
            )
            return ShopperAction.PURCHASE

        shopper.step_towards(stall, self.cfg.walking_speed)
        return ShopperAction.MOVE
