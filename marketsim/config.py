"""Global configuration definitions.

All world-wide tunables and the root random seed live here so that every
component of the simulator can access them in a single import.  Config objects
can be created either programmatically or loaded from YAML files to facilitate
batch experiments.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field, asdict
from typing import Tuple

import yaml

__all__ = [
    "ConfigError",
    "DEFAULT_ITEM_CATALOG",
    "WorldConfig",
]

DEFAULT_YAML_INDENT = 2

DEFAULT_ITEM_CATALOG: Tuple[str, ...] = (
    "apples",
    "bananas",
    "bread",
    "cheese",
    "eggs",
    "fish",
    "flour",
    "honey",
    "milk",
    "onions",
    "potatoes",
    "tomatoes",
)


_INT_FIELDS = (
    "items_per_stall",
    "shopper_count",
    "max_shopping_list_size",
    "max_time_steps",
    "path_count",
    "seed",
)
_FLOAT_FIELDS = (
    "walking_speed",
    "space_half_width_x",
    "space_half_width_y",
    "arrival_radius",
)


class ConfigError(ValueError):
    """Raised when a :class:`WorldConfig` violates a precondition."""


@dataclass(frozen=True)
class WorldConfig:
    """Container for all parameters of one simulation run.

    Attributes
    ----------
    item_catalog
        Distinct item identifiers shoppers may need and stalls may stock.
    stall_positions
        x-coordinate of each stall; stalls all sit on the line y = 0.
    items_per_stall
        Number of distinct catalog items every stall stocks.
    shopper_count
        Number of shoppers walking the market in each path.
    max_shopping_list_size
        Upper bound of a shopping list length (drawn uniformly from 1..max).
    walking_speed
        Distance a shopper covers in one tick.
    space_half_width_x, space_half_width_y
        Shoppers start uniformly inside [-hx, hx] x [-hy, hy].
    arrival_radius
        Distance at or below which a shopper counts as standing at its stall.
    max_time_steps
        Number of ticks simulated per path (series length is this plus one).
    path_count
        Number of independent paths run by the batch aggregator.
    seed
        Root seed; each path draws from its own child stream of it.
    policy
        Name of the registered shopper policy.
    """

    item_catalog: Tuple[str, ...] = DEFAULT_ITEM_CATALOG
    stall_positions: Tuple[float, ...] = (-10.0, -5.0, 0.0, 5.0, 10.0)
    items_per_stall: int = 4
    shopper_count: int = 20
    max_shopping_list_size: int = 8
    walking_speed: float = 0.5
    space_half_width_x: float = 12.0
    space_half_width_y: float = 8.0
    arrival_radius: float = 0.25
    max_time_steps: int = 100
    path_count: int = 100
    seed: int = 0
    policy: str = "NearestUnvisited"

    # Free-form field to store arbitrary user metadata (e.g., experiment name).
    tag: str = field(default="")

    def __post_init__(self) -> None:
        # YAML hands sequences over as lists and may hand numbers over as
        # strings; coerce to the declared types and keep the config hashable.
        for name in ("item_catalog", "stall_positions"):
            if isinstance(getattr(self, name), (str, bytes)):
                raise ConfigError(f"{name} must be a list, got {getattr(self, name)!r}")
        try:
            object.__setattr__(self, "item_catalog", tuple(str(item) for item in self.item_catalog))
            object.__setattr__(self, "stall_positions", tuple(float(x) for x in self.stall_positions))
            for name in _INT_FIELDS:
                object.__setattr__(self, name, int(getattr(self, name)))
            for name in _FLOAT_FIELDS:
                object.__setattr__(self, name, float(getattr(self, name)))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid value in configuration: {exc}") from exc
        self._validate()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _validate(self) -> None:
        n_items = len(self.item_catalog)
        if n_items == 0:
            raise ConfigError("item_catalog must not be empty")
        if len(set(self.item_catalog)) != n_items:
            raise ConfigError(f"item_catalog contains duplicate items: {list(self.item_catalog)}")
        if not self.stall_positions:
            raise ConfigError("stall_positions must contain at least one stall")
        if len(set(self.stall_positions)) != len(self.stall_positions):
            raise ConfigError(f"stall_positions must be distinct, got {list(self.stall_positions)}")

        if self.items_per_stall < 1:
            raise ConfigError(f"items_per_stall must be at least 1, got {self.items_per_stall}")
        if self.items_per_stall > n_items:
            raise ConfigError(
                f"items_per_stall ({self.items_per_stall}) exceeds catalog size ({n_items})"
            )
        if self.max_shopping_list_size < 1:
            raise ConfigError(
                f"max_shopping_list_size must be at least 1, got {self.max_shopping_list_size}"
            )
        if self.max_shopping_list_size > n_items:
            raise ConfigError(
                f"max_shopping_list_size ({self.max_shopping_list_size}) exceeds catalog size ({n_items})"
            )
        if self.shopper_count < 1:
            raise ConfigError(f"shopper_count must be at least 1, got {self.shopper_count}")

        if self.walking_speed <= 0:
            raise ConfigError(f"walking_speed must be positive, got {self.walking_speed}")
        if self.max_time_steps <= 0:
            raise ConfigError(f"max_time_steps must be positive, got {self.max_time_steps}")
        if self.path_count <= 0:
            raise ConfigError(f"path_count must be positive, got {self.path_count}")

        if self.arrival_radius < 0:
            raise ConfigError(f"arrival_radius must be non-negative, got {self.arrival_radius}")
        if self.space_half_width_x < 0 or self.space_half_width_y < 0:
            raise ConfigError(
                "space half widths must be non-negative, got "
                f"({self.space_half_width_x}, {self.space_half_width_y})"
            )
        if self.seed < 0:
            raise ConfigError(f"seed must be non-negative, got {self.seed}")

        # Deferred: the policies package imports this module
        from .policies import available_policies

        if self.policy not in available_policies():
            raise ConfigError(
                f"Unknown policy '{self.policy}'. Available: {available_policies()}"
            )

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_yaml(cls, path: os.PathLike | str) -> "WorldConfig":
        """Load a configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse YAML in {path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Top level of {path} must be a mapping of config keys, got {type(data).__name__}"
            )
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys in {path}: {unknown}")
        return cls(**data)

    def to_yaml(self, path: os.PathLike | str) -> None:
        """Save the config to YAML."""
        data = asdict(self)
        data["item_catalog"] = list(self.item_catalog)
        data["stall_positions"] = list(self.stall_positions)
        with open(path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(data, fh, indent=DEFAULT_YAML_INDENT, sort_keys=False)

    @property
    def stall_count(self) -> int:
        return len(self.stall_positions)

    # Convenience str representation for logging
    def __str__(self) -> str:  # noqa: DunderStr
        return (
            f"WorldConfig(stalls={self.stall_count}, shoppers={self.shopper_count}, "
            f"steps={self.max_time_steps}, paths={self.path_count}, seed={self.seed})"
        )
