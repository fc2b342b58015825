"""
SkyDrop Engine — Simulation Clock

`SkyDropSession` owns all simulation state and advances it one tick per
external frame. Tick order is fixed:

    flush drops → flyer → projectiles → struck targets → cull → hits

Drops requested between ticks are buffered and join the live set at the
start of the next tick, so no collection changes while a pass iterates it.
"""

from typing import List, Optional

import numpy as np

from skydrop.config import merge_config
from skydrop.entities import Field, Flyer, Projectile, Target
from skydrop.lifecycle import (
    cull_projectiles,
    drop_projectile,
    initialize_targets,
    projectile_ids,
)
from skydrop.motion import integrate_flyer, integrate_projectiles, integrate_targets
from skydrop.scoring import HitEvent, ScoreListener, Scoreboard, resolve_hits


class SkyDropSession:
    """One play session: a flyer, a row of targets, live projectiles, a score."""

    def __init__(
        self,
        config: Optional[dict] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.config = merge_config(config)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.field = Field(self.config["field_width"], self.config["field_height"])
        self.scoreboard = Scoreboard()

        self.flyer: Flyer = None
        self.targets: List[Target] = []
        self.projectiles: List[Projectile] = []
        self._pending: List[Projectile] = []
        self._ids = projectile_ids()

        self.tick_count: int = 0
        self.last_hits: List[HitEvent] = []
        self.last_culled: List[Projectile] = []

        self._spawn()

    # ---------- Setup ----------
    def _spawn(self) -> None:
        cfg = self.config
        self.flyer = Flyer(
            id="flyer",
            position=[self.field.width / 2, cfg["flyer_baseline_y"]],
            velocity=[cfg["flyer_patrol_speed"], 0.0],
            radius=cfg["flyer_radius"],
            patrol_speed=cfg["flyer_patrol_speed"],
            baseline_y=cfg["flyer_baseline_y"],
        )
        self.targets = initialize_targets(
            self.field.width,
            self.field.height,
            count=cfg["target_count"],
            start_x=cfg["target_start_x"],
            spacing=cfg["target_spacing"],
            edge_margin=cfg["target_edge_margin"],
            ground_offset=cfg["target_ground_offset"],
            radius=cfg["target_radius"],
        )
        self.projectiles = []
        self._pending = []
        self.tick_count = 0
        self.last_hits = []
        self.last_culled = []

    def reset(self) -> None:
        """Start over on the current field. Score goes back to 0 and is pushed."""
        self._spawn()
        self.scoreboard.reset()

    # ---------- Platform inputs ----------
    def resize(self, width: float, height: float) -> None:
        """New field bounds. Existing targets stay where they are."""
        self.field.resize(width, height)

    def drop(self) -> Projectile:
        """Release a projectile under the flyer. It moves from the next tick on."""
        projectile = drop_projectile(
            self.flyer,
            rng=self.rng,
            speed_range=self.config["drop_speed_range"],
            projectile_id=next(self._ids),
        )
        self._pending.append(projectile)
        return projectile

    def subscribe_score(self, listener: ScoreListener) -> None:
        """Get the current score now and the new score after every hit."""
        self.scoreboard.subscribe(listener)

    # ---------- Tick ----------
    def tick(self, dt: Optional[float] = None) -> List[HitEvent]:
        """Advance exactly one frame. Returns the hits scored in it."""
        cfg = self.config
        dt = cfg["frame_dt"] if dt is None else dt

        if self._pending:
            self.projectiles.extend(self._pending)
            self._pending = []

        integrate_flyer(self.flyer, self.field, dt, gravity=cfg["gravity"])
        integrate_projectiles(self.projectiles, dt, gravity=cfg["gravity"])
        integrate_targets(
            self.targets,
            dt,
            float_acceleration=cfg["float_acceleration"],
            float_nudge=cfg["float_nudge"],
        )
        self.last_culled = cull_projectiles(
            self.projectiles, self.field.height, margin=cfg["cull_margin"]
        )
        self.last_hits = resolve_hits(
            self.projectiles,
            self.targets,
            self.scoreboard,
            tick=self.tick_count,
            bounce_x=cfg["bounce_x"],
            bounce_y=cfg["bounce_y"],
        )
        self.tick_count += 1
        return self.last_hits

    def run(self, n_ticks: int, dt: Optional[float] = None) -> List[HitEvent]:
        """Advance `n_ticks` frames and return every hit scored along the way."""
        hits = []
        for _ in range(n_ticks):
            hits.extend(self.tick(dt))
        return hits

    # ---------- Read access ----------
    @property
    def score(self) -> int:
        return self.scoreboard.value

    @property
    def struck_count(self) -> int:
        return sum(1 for t in self.targets if t.struck)

    @property
    def all_struck(self) -> bool:
        return bool(self.targets) and all(t.struck for t in self.targets)

    def snapshot(self) -> dict:
        """JSON-serializable view of the whole session for renderers."""
        return {
            "tick": self.tick_count,
            "score": self.score,
            "field": self.field.to_dict(),
            "flyer": self.flyer.to_dict(),
            "targets": [t.to_dict() for t in self.targets],
            "projectiles": [p.to_dict() for p in self.projectiles],
        }


# ---------- Smoke Test ----------
if __name__ == "__main__":
    from rich.console import Console

    console = Console()
    console.print("\n[bold cyan]═══ SkyDrop Session Smoke Test ═══[/bold cyan]\n")

    session = SkyDropSession(seed=7)
    session.subscribe_score(lambda s: console.print(f"  [yellow]score → {s}[/yellow]"))
    console.print(f"  Targets: {[t.slot_x for t in session.targets]}")

    # Drop whenever the flyer is above an unstruck target
    for _ in range(60 * 30):
        for target in session.targets:
            if not target.struck and abs(session.flyer.x - target.x) < 2.0:
                session.drop()
        session.tick()
        assert session.score == session.struck_count

    console.print(f"  Ticks: {session.tick_count}, score: {session.score}/{len(session.targets)}")
    console.print("\n[bold green]Session smoke test finished![/bold green]\n")
