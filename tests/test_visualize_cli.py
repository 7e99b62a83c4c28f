"""Plot helpers and the command-line entry point."""
import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from marketsim.cli import main  # noqa: E402
from marketsim.config import WorldConfig  # noqa: E402
from marketsim.simulator.metrics import summarize  # noqa: E402
from marketsim.simulator.scenario import Scenario  # noqa: E402
from marketsim.simulator.visualize import plot_market_layout, plot_remaining_bands  # noqa: E402


@pytest.fixture
def small_yaml(tmp_path):
    cfg = WorldConfig(
        stall_positions=(-2.0, 2.0),
        shopper_count=3,
        space_half_width_x=3.0,
        space_half_width_y=2.0,
        max_time_steps=20,
        path_count=3,
        seed=4,
    )
    path = tmp_path / "small.yaml"
    cfg.to_yaml(path)
    return path


def test_plot_market_layout_writes_files(tmp_path):
    cfg = WorldConfig(shopper_count=5)
    plot_market_layout(Scenario.random(cfg), cfg, save_path=tmp_path / "figs" / "layout")
    assert (tmp_path / "figs" / "layout.png").exists()
    assert (tmp_path / "figs" / "layout.svg").exists()


def test_plot_remaining_bands_writes_files(tmp_path):
    remaining = np.array([[3.0, 4.0, 5.0], [2.0, 3.0, 5.0], [1.0, 1.0, 2.0]])
    plot_remaining_bands(summarize(remaining), save_path=tmp_path / "bands")
    assert (tmp_path / "bands.png").exists()
    assert (tmp_path / "bands.svg").exists()


def test_cli_init_config(tmp_path, capsys):
    out = tmp_path / "cfgs" / "mine.yaml"
    assert main(["init-config", "--out", str(out)]) == 0
    assert WorldConfig.from_yaml(out) == WorldConfig()
    assert "Default config written" in capsys.readouterr().out


def test_cli_run(small_yaml, tmp_path, capsys):
    assert main(["run", "--config", str(small_yaml), "--plot", str(tmp_path / "layout")]) == 0
    out = capsys.readouterr().out
    assert "Items remaining: tick 0" in out
    assert (tmp_path / "layout.png").exists()


def test_cli_batch(small_yaml, tmp_path, capsys):
    rc = main([
        "batch", "--config", str(small_yaml), "--paths", "2", "--seed", "9",
        "--every", "5", "--plot", str(tmp_path / "remaining"),
    ])
    assert rc == 0
    out = capsys.readouterr().out
    assert "paths=2" in out
    assert "seed=9" in out
    assert "Final tick: mean=" in out
    assert (tmp_path / "remaining.png").exists()
    assert (tmp_path / "remaining_layout.png").exists()


def test_cli_rejects_invalid_config(tmp_path, capsys):
    bad = tmp_path / "bad.yaml"
    bad.write_text("walking_speed: 0\n", encoding="utf-8")
    assert main(["run", "--config", str(bad)]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_cli_rejects_bad_percentile(small_yaml, capsys):
    assert main(["batch", "--config", str(small_yaml), "--percentiles", "120"]) == 2
    assert "Percentiles" in capsys.readouterr().err


@pytest.mark.parametrize("cmd", ["run", "batch"])
@pytest.mark.parametrize(
    "text",
    [
        "policy: Teleport\n",
        "walking_speed: fast\n",
        "walking_speed: [1,\n",
        "- 1\n- 2\n",
    ],
)
def test_cli_rejects_malformed_config(tmp_path, capsys, cmd, text):
    bad = tmp_path / "bad.yaml"
    bad.write_text(text, encoding="utf-8")
    assert main([cmd, "--config", str(bad)]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["run", "--path-index", "-1"],
        ["run", "--seed", "-3"],
        ["batch", "--seed", "-3"],
    ],
)
def test_cli_rejects_negative_indices(small_yaml, capsys, argv):
    with pytest.raises(SystemExit) as exc:
        main(argv[:1] + ["--config", str(small_yaml)] + argv[1:])
    assert exc.value.code == 2
    assert "non-negative" in capsys.readouterr().err
