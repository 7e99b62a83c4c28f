"""Random stall stock and shopper placement."""
import numpy as np
import pytest

from marketsim.config import WorldConfig
from marketsim.simulator.scenario import Scenario, path_rng, spawn_shoppers, stock_stalls


@pytest.mark.parametrize("seed", [0, 1, 42])
def test_stall_inventories(seed):
    cfg = WorldConfig(items_per_stall=5, seed=seed)
    stalls = stock_stalls(cfg, path_rng(cfg.seed, 0))
    assert [s.index for s in stalls] == list(range(cfg.stall_count))
    assert [s.x for s in stalls] == list(cfg.stall_positions)
    for stall in stalls:
        assert stall.xy[1] == 0.0
        assert len(stall.inventory) == cfg.items_per_stall
        assert stall.inventory <= set(cfg.item_catalog)


def test_full_catalog_per_stall():
    cfg = WorldConfig(items_per_stall=12)
    for stall in stock_stalls(cfg, path_rng(0, 0)):
        assert stall.inventory == set(cfg.item_catalog)


@pytest.mark.parametrize("seed", [0, 5, 99])
def test_shoppers_at_creation(seed):
    cfg = WorldConfig(shopper_count=200, seed=seed)
    shoppers = spawn_shoppers(cfg, path_rng(cfg.seed, 0))
    assert [s.index for s in shoppers] == list(range(cfg.shopper_count))
    sizes = set()
    for s in shoppers:
        assert 1 <= len(s.shopping_list) <= cfg.max_shopping_list_size
        assert len(set(s.shopping_list)) == len(s.shopping_list)
        assert set(s.shopping_list) <= set(cfg.item_catalog)
        assert abs(s.xy[0]) <= cfg.space_half_width_x
        assert abs(s.xy[1]) <= cfg.space_half_width_y
        assert s.target is None
        assert s.visited == set()
        sizes.add(len(s.shopping_list))
    # 200 draws from {1..8} cover both extremes
    assert {1, cfg.max_shopping_list_size} <= sizes


def test_scenario_reproducible():
    cfg = WorldConfig(seed=123)
    a = Scenario.random(cfg, path_rng(cfg.seed, 3))
    b = Scenario.random(cfg, path_rng(cfg.seed, 3))
    assert [s.inventory for s in a.stalls] == [s.inventory for s in b.stalls]
    assert [s.shopping_list for s in a.shoppers] == [s.shopping_list for s in b.shoppers]
    assert np.array_equal(a.as_tuple()[1], b.as_tuple()[1])


def test_path_rng_matches_spawned_children():
    children = np.random.SeedSequence(17).spawn(3)
    for i, child in enumerate(children):
        expected = np.random.default_rng(child).random(4)
        assert np.array_equal(path_rng(17, i).random(4), expected)


def test_copy_is_independent():
    cfg = WorldConfig(shopper_count=3)
    scenario = Scenario.random(cfg)
    clone = scenario.copy()
    clone.shoppers[0].shopping_list.clear()
    clone.shoppers[0].xy[0] += 1.0
    assert scenario.shoppers[0].shopping_list
    assert scenario.shoppers[0].xy[0] != clone.shoppers[0].xy[0]
    stall_xy, shopper_xy = scenario.as_tuple()
    assert stall_xy.shape == (cfg.stall_count, 2)
    assert shopper_xy.shape == (cfg.shopper_count, 2)
