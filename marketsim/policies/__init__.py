"""
Policy module: registry, abstract base class, and public API for shopper policies.

This module provides:
- An abstract base class (`ShopperPolicy`) for every per-tick shopper decision rule.
- A registry system for dynamic policy discovery and instantiation.
- The `ShopperAction` enum reporting what a shopper did during a tick.

Usage Example:
--------------

from marketsim.policies import ShopperAction, ShopperPolicy, get_policy, register_policy

@register_policy
class MyPolicy(ShopperPolicy):
    def step(self, shopper, stalls):
        # ... implement logic ...
        return ShopperAction.IDLE

policy_cls = get_policy("MyPolicy")
policy = policy_cls(cfg)
action = policy.step(shopper, stalls)

"""
from __future__ import annotations

import enum
import inspect
from abc import ABC, abstractmethod
from typing import Dict, Sequence, Type

from ..config import WorldConfig
from ..simulator.agents import Shopper, Stall

__all__ = [
    "ShopperAction",
    "ShopperPolicy",
    "register_policy",
    "get_policy",
    "available_policies",
    "nearest_unvisited",
]

# Policy registry: maps policy names to classes
_REGISTRY: Dict[str, Type["ShopperPolicy"]] = {}


class ShopperAction(enum.Enum):
    """Outcome of one shopper's tick. Exactly one per shopper per tick."""

    IDLE = "idle"
    PURCHASE = "purchase"
    MOVE = "move"


class ShopperPolicy(ABC):
    """
    Abstract interface every shopper policy must implement.
    All policies should inherit from this class and implement `step`.
    """
    def __init__(self, cfg: WorldConfig):
        self.cfg = cfg

    @abstractmethod
    def step(self, shopper: Shopper, stalls: Sequence[Stall], /) -> ShopperAction:
        """
        Advance one shopper by a single tick, mutating it in place.
        Returns the action taken.
        """

    @property
    def name(self) -> str:
        """
        Name used in logs (defaults to class name).
        """
        return self.__class__.__name__


# ------------------------------------------------------------------
# Registry helpers
# ------------------------------------------------------------------

def register_policy(cls: Type["ShopperPolicy"]) -> Type["ShopperPolicy"]:
    """
    Class decorator to auto-register policies in the global registry.
    Ensures only subclasses of ShopperPolicy are registered.
    Raises if duplicate or invalid registration is attempted.
    """
    if not inspect.isclass(cls):
        raise TypeError("@register_policy can only decorate classes")
    if not issubclass(cls, ShopperPolicy):
        raise TypeError("Registered class must inherit from ShopperPolicy")

    key = cls.__name__
    if key in _REGISTRY:
        raise KeyError(f"Policy '{key}' is already registered")
    _REGISTRY[key] = cls
    return cls


def get_policy(name: str) -> Type["ShopperPolicy"]:
    """
    Retrieve a policy class by name from the registry.
    Raises KeyError if not found.
    """
    try:
        return _REGISTRY[name]
    except KeyError as exc:
        raise KeyError(
            f"Policy '{name}' not found in registry. Available: {list(_REGISTRY)}"
        ) from exc


def available_policies() -> list:
    return sorted(_REGISTRY)


# Import to register the built-in policies
from . import nearest_unvisited  # noqa: E402
