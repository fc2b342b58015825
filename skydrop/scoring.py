"""
SkyDrop Engine — Collision & Scoring

Tests every live projectile against every unstruck target once per tick and
applies the hit transition:

  1. target Unstruck → Struck (once per target, ever)
  2. score += 1, new score pushed to listeners
  3. projectile bounce: vx *= 1.2, vy *= -0.3 (projectile survives)
"""

from dataclasses import dataclass
from typing import Callable, List, Sequence

from skydrop.entities import Projectile, Target
from skydrop.geometry import overlaps

# ---------- Constants ----------
BOUNCE_X = 1.2    # amplify
BOUNCE_Y = -0.3   # reverse and dampen

ScoreListener = Callable[[int], None]


@dataclass(frozen=True)
class HitEvent:
    """One scored hit."""
    tick: int
    projectile_id: str
    target_id: str
    score: int

    def to_dict(self) -> dict:
        return {
            "tick": self.tick,
            "projectile_id": self.projectile_id,
            "target_id": self.target_id,
            "score": self.score,
        }


class Scoreboard:
    """Session score. Only ever goes up; every change is pushed to listeners."""

    def __init__(self):
        self._value = 0
        self._listeners: List[ScoreListener] = []

    @property
    def value(self) -> int:
        return self._value

    def subscribe(self, listener: ScoreListener) -> None:
        """Register a listener and push the current score to it right away."""
        self._listeners.append(listener)
        listener(self._value)

    def increment(self) -> int:
        self._value += 1
        self._publish()
        return self._value

    def reset(self) -> None:
        """Start a new session at 0. Listeners are kept and told."""
        self._value = 0
        self._publish()

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self._value)


def bounce(projectile: Projectile, bounce_x: float = BOUNCE_X, bounce_y: float = BOUNCE_Y) -> None:
    """Apply the hit bounce to a projectile's velocity."""
    projectile.velocity[0] *= bounce_x
    projectile.velocity[1] *= bounce_y


def resolve_hits(
    projectiles: Sequence[Projectile],
    targets: Sequence[Target],
    scoreboard: Scoreboard,
    tick: int,
    bounce_x: float = BOUNCE_X,
    bounce_y: float = BOUNCE_Y,
) -> List[HitEvent]:
    """Run the collision pass for one tick and return the hits it scored.

    A target struck earlier in the same pass is skipped for every later
    projectile, so N projectiles on one target score once. One projectile
    may strike several targets in the same pass; each strike bounces it.
    """
    events = []
    for projectile in projectiles:
        for target in targets:
            if target.struck:
                continue
            if not overlaps(projectile.circle, target.circle):
                continue
            if not target.strike(tick):
                continue
            score = scoreboard.increment()
            bounce(projectile, bounce_x, bounce_y)
            events.append(HitEvent(tick, projectile.id, target.id, score))
    return events
