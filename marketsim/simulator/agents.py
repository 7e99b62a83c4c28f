"""Agent entities: stationary stalls and mobile shoppers."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .geometry import distance, heading

__all__ = ["Stall", "Shopper"]


@dataclass(frozen=True)
class Stall:
    """A trader standing at ``(x, 0)`` with a fixed, unlimited inventory."""

    index: int
    x: float
    inventory: FrozenSet[str]

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, 0.0)

    def stocks(self, item: str) -> bool:
        return item in self.inventory


@dataclass(eq=False)
class Shopper:
    """A walker with a shrinking shopping list and a memory of visited stalls."""

    index: int
    xy: np.ndarray  # shape (2,)
    shopping_list: List[str]
    target: Optional[Stall] = None
    visited: Set[int] = dataclasses.field(default_factory=set)

    def __post_init__(self) -> None:
        self.xy = np.array(self.xy, dtype=float)
        self.shopping_list = list(self.shopping_list)
        self.visited = set(self.visited)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    @property
    def remaining(self) -> int:
        """Number of items still to buy."""
        return len(self.shopping_list)

    @property
    def finished_list(self) -> bool:
        return not self.shopping_list

    def has_visited_all(self, n_stalls: int) -> bool:
        return len(self.visited) >= n_stalls

    def distance_to(self, stall: Stall) -> float:
        return distance(self.xy, stall.xy)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def purchase_from(self, stall: Stall) -> List[str]:
        """Buy every listed item the stall stocks and mark the stall visited.

        Items the stall does not carry stay on the list.  The target is
        cleared so the next tick selects a fresh stall.
        """
        bought = [item for item in self.shopping_list if stall.stocks(item)]
        self.shopping_list = [item for item in self.shopping_list if not stall.stocks(item)]
        self.visited.add(stall.index)
        self.target = None
        return bought

    def step_towards(self, stall: Stall, speed: float) -> None:
        """Advance ``speed`` units along the straight line to the stall."""
        angle = heading(self.xy, stall.xy)
        self.xy[0] += speed * np.cos(angle)
        self.xy[1] += speed * np.sin(angle)

    def snapshot(self) -> "Shopper":
        """Independent copy, e.g. to keep the initial layout for plotting."""
        return Shopper(
            index=self.index,
            xy=self.xy.copy(),
            shopping_list=list(self.shopping_list),
            target=self.target,
            visited=set(self.visited),
        )
