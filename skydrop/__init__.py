"""
SkyDrop Engine
Per-frame simulation core: motion, spawning, collision and scoring.
"""

from skydrop.geometry import (
    Circle,
    distance,
    overlaps,
)
from skydrop.entities import (
    Field,
    Flyer,
    Projectile,
    Struck,
    Target,
    Unstruck,
    UNSTRUCK,
)
from skydrop.motion import (
    GRAVITY,
    integrate_body,
    integrate_flyer,
    integrate_projectiles,
    integrate_targets,
)
from skydrop.lifecycle import (
    cull_projectiles,
    drop_projectile,
    initialize_targets,
    target_slots,
)
from skydrop.scoring import (
    HitEvent,
    Scoreboard,
    bounce,
    resolve_hits,
)
from skydrop.config import (
    DEFAULT_SIM_CONFIG,
    load_config,
    merge_config,
)
from skydrop.clock import SkyDropSession

__all__ = [
    "Circle",
    "distance",
    "overlaps",
    "Field",
    "Flyer",
    "Projectile",
    "Struck",
    "Target",
    "Unstruck",
    "UNSTRUCK",
    "GRAVITY",
    "integrate_body",
    "integrate_flyer",
    "integrate_projectiles",
    "integrate_targets",
    "cull_projectiles",
    "drop_projectile",
    "initialize_targets",
    "target_slots",
    "HitEvent",
    "Scoreboard",
    "bounce",
    "resolve_hits",
    "DEFAULT_SIM_CONFIG",
    "load_config",
    "merge_config",
    "SkyDropSession",
]
