"""
SkyDrop Harness — Headless Runner

Plays SkyDrop sessions with a scripted policy and reports per-episode results.
Optionally plots every projectile path of the last episode.

Usage:
    python -m sim_harness.run --episodes 20 --policy greedy
    python -m sim_harness.run --episodes 50 --policy random --seed 3
    python -m sim_harness.run --config sim_harness/configs/narrow.yaml --plot
"""

import argparse
import sys
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for saving plots
import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch
import yaml
from rich.console import Console
from rich.table import Table

from sim_harness.envs.skydrop_env import SkyDropEnv
from skydrop.config import load_config

console = Console()

# ---------- Paths ----------
CONFIGS_DIR = Path(__file__).resolve().parent / "configs"
PLOTS_DIR = Path(__file__).resolve().parent / "plots"

DEFAULT_RUNNER_CONFIG = {
    "max_ticks": 3600,
    "random_drop_prob": 0.02,
    "greedy_tolerance": 3.0,
}

POLICIES = ("random", "greedy")


def load_runner_config(config_path: Path = None) -> dict:
    """Runner section of a YAML config merged over the defaults."""
    if config_path is None:
        config_path = CONFIGS_DIR / "default.yaml"
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    return {**DEFAULT_RUNNER_CONFIG, **data.get("runner", {})}


# ---------- Policies ----------
def random_policy(env: SkyDropEnv, drop_prob: float) -> int:
    """Drop with a fixed probability every tick."""
    return int(env.np_random.random() < drop_prob)


def greedy_policy(env: SkyDropEnv, tolerance: float) -> int:
    """Drop when the flyer is right above an unstruck target and nothing is falling."""
    session = env.session
    if session.projectiles:
        return 0
    for target in session.targets:
        if not target.struck and abs(target.x - session.flyer.x) <= tolerance:
            return 1
    return 0


def choose_action(env: SkyDropEnv, policy: str, runner_cfg: dict) -> int:
    if policy == "random":
        return random_policy(env, runner_cfg["random_drop_prob"])
    return greedy_policy(env, runner_cfg["greedy_tolerance"])


# ---------- Episodes ----------
def run_episode(env: SkyDropEnv, policy: str, runner_cfg: dict, seed: int, record: bool = False) -> dict:
    """Play one episode. Returns summary stats (and projectile paths if `record`)."""
    env.reset(seed=seed)
    paths = {}
    total_reward = 0.0
    terminated = truncated = False
    info = {}

    while not (terminated or truncated):
        action = choose_action(env, policy, runner_cfg)
        _, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        if record:
            for p in env.session.projectiles:
                paths.setdefault(p.id, []).append((p.x, p.y))

    session = env.session
    return {
        "score": session.score,
        "targets": len(session.targets),
        "ticks": session.tick_count,
        "drops": info.get("drops", 0),
        "hit_rate": env.hit_rate,
        "reward": total_reward,
        "cleared": terminated,
        "paths": paths,
        "target_positions": [(t.slot_x, t.x, t.y, t.radius) for t in session.targets],
        "field": (session.field.width, session.field.height),
    }


def plot_paths(result: dict, save_dir: Path, title: str) -> str:
    """Plot projectile paths and target spots of one episode to a PNG."""
    if not result["paths"]:
        return None

    width, height = result["field"]
    fig, ax = plt.subplots(figsize=(10, 7.5))

    for path in result["paths"].values():
        xs, ys = zip(*path)
        ax.plot(xs, ys, color="saddlebrown", linewidth=1, alpha=0.6)

    for _, cx, cy, r in result["target_positions"]:
        ax.add_patch(CirclePatch((cx, cy), r, fill=False, color="black", linewidth=1.5))

    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # screen space, y down
    ax.set_aspect("equal")
    ax.set_xlabel("x [px]")
    ax.set_ylabel("y [px]")
    ax.set_title(f"{title}\nScore: {result['score']}/{result['targets']} | Drops: {result['drops']}")

    save_dir.mkdir(parents=True, exist_ok=True)
    path = save_dir / f"paths_{title}.png"
    plt.savefig(str(path), dpi=120, bbox_inches="tight")
    plt.close(fig)
    return str(path)


def run(
    config_path: str = None,
    n_episodes: int = 10,
    policy: str = "greedy",
    seed: int = 0,
    plot: bool = False,
) -> list:
    """Main runner: play `n_episodes` and print a results table."""
    console.print("\n[bold cyan]═══ SkyDrop Runner ═══[/bold cyan]")

    path = Path(config_path) if config_path else CONFIGS_DIR / "default.yaml"
    sim_cfg = load_config(path)
    runner_cfg = load_runner_config(path)

    console.print(f"  Config: {path}")
    console.print(f"  Field: {sim_cfg['field_width']:.0f}×{sim_cfg['field_height']:.0f}")
    console.print(f"  Policy: {policy}, episodes: {n_episodes}\n")

    env = SkyDropEnv(env_config={"max_ticks": runner_cfg["max_ticks"], "sim": sim_cfg})

    table = Table(title="Episode Results")
    table.add_column("Episode", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Drops", justify="right")
    table.add_column("Hit Rate", justify="right")
    table.add_column("Ticks", justify="right")
    table.add_column("Cleared", justify="center")

    results = []
    for i in range(n_episodes):
        record = plot and i == n_episodes - 1
        result = run_episode(env, policy, runner_cfg, seed=seed + i, record=record)
        results.append(result)
        table.add_row(
            str(i),
            f"{result['score']}/{result['targets']}",
            str(result["drops"]),
            f"{result['hit_rate']:.1%}",
            str(result["ticks"]),
            "[green]✓[/green]" if result["cleared"] else "[red]✗[/red]",
        )

    console.print(table)

    scores = np.array([r["score"] for r in results], dtype=np.float64)
    cleared = sum(1 for r in results if r["cleared"])
    console.print(f"\n  Mean score: {scores.mean():.2f}  |  Cleared: {cleared}/{n_episodes}")

    if plot and results:
        plot_path = plot_paths(results[-1], PLOTS_DIR, f"{policy}_ep{n_episodes - 1}")
        if plot_path:
            console.print(f"  📊 Plot saved: {plot_path}")
        else:
            console.print("  [yellow]⚠ No projectiles dropped — nothing to plot[/yellow]")

    env.close()
    return results


# ---------- CLI ----------
def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="SkyDrop headless runner")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config (default: sim_harness/configs/default.yaml)")
    parser.add_argument("--episodes", type=int, default=10,
                        help="Number of episodes")
    parser.add_argument("--policy", type=str, default="greedy", choices=POLICIES,
                        help="Scripted drop policy")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed of the first episode")
    parser.add_argument("--plot", action="store_true",
                        help="Plot projectile paths of the last episode")
    args = parser.parse_args(argv)

    try:
        run(
            config_path=args.config,
            n_episodes=args.episodes,
            policy=args.policy,
            seed=args.seed,
            plot=args.plot,
        )
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
