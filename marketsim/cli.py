"""Command-line interface entry-point.

Usage examples
--------------
Run a single path:
    python -m marketsim.cli run --config cfgs/default.yaml

Batch (100 paths, percentile summary and plots):
    python -m marketsim.cli batch --config cfgs/default.yaml --paths 100 --plot figs/remaining

Write the default configuration:
    python -m marketsim.cli init-config --out cfgs/mine.yaml
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List

from .config import ConfigError, WorldConfig
from .batch import run_batch
from .simulator.engine import run_path
from .simulator.metrics import DEFAULT_PERCENTILES

SUBCOMMANDS = {"run", "batch", "init-config"}

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer, got {value}")
    return value


def _parse_args(argv: List[str] | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="marketsim", description="Marketplace shopper simulator")

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    # ------------------------------------------------------------------
    # run
    # ------------------------------------------------------------------
    p_run = subparsers.add_parser("run", parents=[common], help="Simulate a single path")
    p_run.add_argument("--config", required=True, type=Path, help="YAML config file")
    p_run.add_argument("--seed", type=_non_negative_int, default=None, help="Override the config seed")
    p_run.add_argument("--path-index", type=_non_negative_int, default=0, help="Which path stream of the seed to replay")
    p_run.add_argument("--plot", type=Path, default=None, help="Save the tick-0 market layout here (png + svg)")

    # ------------------------------------------------------------------
    # batch
    # ------------------------------------------------------------------
    p_batch = subparsers.add_parser("batch", parents=[common], help="Simulate many independent paths")
    p_batch.add_argument("--config", required=True, type=Path, help="YAML config file")
    p_batch.add_argument("--seed", type=_non_negative_int, default=None, help="Override the config seed")
    p_batch.add_argument("--paths", type=int, default=None, help="Override the config path_count")
    p_batch.add_argument(
        "--percentiles",
        type=float,
        nargs="+",
        default=list(DEFAULT_PERCENTILES),
        help="Percentiles to report across paths",
    )
    p_batch.add_argument("--every", type=int, default=10, help="Print the summary table every N ticks")
    p_batch.add_argument("--plot", type=Path, default=None, help="Save percentile bands + layout under this stem")

    # ------------------------------------------------------------------
    # init-config
    # ------------------------------------------------------------------
    p_init = subparsers.add_parser("init-config", parents=[common], help="Write the default config as YAML")
    p_init.add_argument("--out", required=True, type=Path, help="Destination YAML file")

    return parser


def _load_config(args) -> WorldConfig:
    cfg = WorldConfig.from_yaml(args.config)
    overrides = {}
    if getattr(args, "seed", None) is not None:
        overrides["seed"] = args.seed
    if getattr(args, "paths", None) is not None:
        overrides["path_count"] = args.paths
    return dataclasses.replace(cfg, **overrides) if overrides else cfg


def main(argv: List[str] | None = None) -> int:  # noqa: D401
    """Main entry point for the command-line interface."""
    parser = _parse_args(argv)
    args = parser.parse_args(argv)
    if args.cmd not in SUBCOMMANDS:
        print(f"Invalid subcommand '{args.cmd}'. Must be one of {SUBCOMMANDS}")
        parser.print_help()
        return 1

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if args.cmd == "init-config":
        args.out.parent.mkdir(parents=True, exist_ok=True)
        WorldConfig().to_yaml(args.out)
        print(f"[INFO] Default config written to {args.out}")
        return 0

    try:
        cfg = _load_config(args)
    except (ConfigError, OSError) as exc:
        print(f"[ERROR] Invalid configuration: {exc}", file=sys.stderr)
        return 2

    if args.cmd == "run":
        result = run_path(cfg, path_index=args.path_index)
        print(f"{cfg} path={args.path_index}")
        print(f"Items remaining: tick 0 = {result.remaining[0]:.3f}, "
              f"tick {cfg.max_time_steps} = {result.remaining[-1]:.3f}")
        empty_at = result.first_empty_tick()
        if empty_at is not None:
            print(f"All shopping lists empty at tick {empty_at}")
        else:
            unfinished = sum(1 for s in result.final.shoppers if s.remaining)
            print(f"{unfinished}/{cfg.shopper_count} shoppers still hold items")
        if args.plot is not None:
            from .simulator.visualize import plot_market_layout
            plot_market_layout(result.initial, cfg, save_path=args.plot)
            print(f"[INFO] Layout saved to {args.plot.with_suffix('.png')}")

    elif args.cmd == "batch":
        try:
            result = run_batch(cfg)
            summary = result.summary(args.percentiles)
        except ValueError as exc:
            print(f"[ERROR] {exc}", file=sys.stderr)
            return 2

        print(f"{cfg} paths={result.n_paths}")
        p_keys = sorted(summary.percentiles)
        header = f"{'tick':>6}{'mean':>10}{'median':>10}" + "".join(f"{'p%g' % p:>10}" for p in p_keys)
        print(header)
        every = max(1, args.every)
        for t in summary.ticks:
            if t % every and t != summary.ticks[-1]:
                continue
            row = f"{t:>6}{summary.mean[t]:>10.3f}{summary.median[t]:>10.3f}"
            row += "".join(f"{summary.percentiles[p][t]:>10.3f}" for p in p_keys)
            print(row)
        final = summary.final()
        print("Final tick: " + ", ".join(f"{k}={v:.3f}" for k, v in final.items()))

        if args.plot is not None:
            from .simulator.visualize import plot_market_layout, plot_remaining_bands
            plot_remaining_bands(summary, save_path=args.plot)
            layout_path = args.plot.with_name(args.plot.stem + "_layout")
            plot_market_layout(result.sample_path.initial, cfg, save_path=layout_path)
            print(f"[INFO] Figures saved to {args.plot.with_suffix('.png')} and {layout_path.with_suffix('.png')}")

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
