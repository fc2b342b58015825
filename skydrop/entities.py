"""
SkyDrop Engine — Entity Model

Plain data records for the three actor kinds (flyer, target, projectile),
the target hit state, and the playing field bounds.

Coordinate system: x to the right, y downward (screen space), pixels.
Velocities are px/s, accelerations px/s².
"""

from dataclasses import dataclass, field
from typing import Union

import numpy as np

from skydrop.geometry import Circle

# ---------- Constants ----------
FLYER_RADIUS = 22.0
FLYER_PATROL_SPEED = 120.0    # px/s, magnitude only
FLYER_BASELINE_Y = 100.0

TARGET_RADIUS = 20.0
TARGET_WIDTH = 40.0           # layout extent, the slot is this wide
TARGET_HEIGHT = 100.0

PROJECTILE_RADIUS = 8.0

TINT_NONE = 0xFFFFFF
TINT_STRUCK = 0xFFAAAA


# ---------- Target hit state ----------
@dataclass(frozen=True)
class Unstruck:
    """Target has not been hit yet and still takes part in hit detection."""

    def __str__(self) -> str:
        return "unstruck"


@dataclass(frozen=True)
class Struck:
    """Target was hit on `since_tick`. Terminal state."""
    since_tick: int

    def __str__(self) -> str:
        return f"struck@{self.since_tick}"


TargetState = Union[Unstruck, Struck]
UNSTRUCK = Unstruck()


# ---------- Bodies ----------
@dataclass(eq=False)
class Body:
    """Anything the motion integrator moves."""
    id: str
    position: np.ndarray                  # [x, y]
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    radius: float = PROJECTILE_RADIUS
    allow_gravity: bool = True

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def vx(self) -> float:
        return float(self.velocity[0])

    @property
    def vy(self) -> float:
        return float(self.velocity[1])

    @property
    def circle(self) -> Circle:
        return Circle(self.x, self.y, self.radius)

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "id": self.id,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "radius": self.radius,
        }


@dataclass(eq=False)
class Flyer(Body):
    """The single patrolling actor. Holds a fixed altitude."""
    radius: float = FLYER_RADIUS
    patrol_speed: float = FLYER_PATROL_SPEED
    baseline_y: float = FLYER_BASELINE_Y


@dataclass(eq=False)
class Projectile(Body):
    """A falling drop. Lives until it leaves the bottom of the field."""
    radius: float = PROJECTILE_RADIUS


@dataclass(eq=False)
class Target(Body):
    """A ground target that can be struck exactly once.

    `position` is the collision centre. `slot_x` is the left edge of the
    layout slot the target was spawned into.
    """
    radius: float = TARGET_RADIUS
    allow_gravity: bool = False
    acceleration_y: float = 0.0
    state: TargetState = UNSTRUCK
    slot_x: float = 0.0
    width: float = TARGET_WIDTH
    height: float = TARGET_HEIGHT

    @property
    def struck(self) -> bool:
        return isinstance(self.state, Struck)

    @property
    def tint(self) -> int:
        return TINT_STRUCK if self.struck else TINT_NONE

    def strike(self, tick: int) -> bool:
        """Move to Struck. Returns False (and changes nothing) if already struck."""
        if self.struck:
            return False
        self.state = Struck(since_tick=tick)
        return True

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            "state": str(self.state),
            "struck": self.struck,
            "tint": self.tint,
            "slot_x": self.slot_x,
        })
        return data


# ---------- Field ----------
@dataclass
class Field:
    """Playing field bounds. Mutated in place on resize."""
    width: float
    height: float

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}
