"""
SkyDrop Engine — Spawn / Lifecycle

Creates the initial target row, creates projectiles on a drop command and
removes projectiles that have fallen out of the field.
"""

import itertools
from typing import Iterator, List, Optional

import numpy as np

from skydrop.entities import (
    Flyer,
    Projectile,
    Target,
    TARGET_HEIGHT,
    TARGET_RADIUS,
    TARGET_WIDTH,
)

# ---------- Constants ----------
TARGET_COUNT = 6
TARGET_START_X = 120.0
TARGET_SPACING = 180.0
TARGET_EDGE_MARGIN = 40.0     # no slot may start past width - margin
TARGET_GROUND_OFFSET = 80.0   # target centre sits this far above the bottom

DROP_SPEED_RANGE = 45.0       # vx ~ U[-range, range], px/s
CULL_MARGIN = 50.0            # px below the field before a projectile is removed


def target_slots(
    field_width: float,
    count: int = TARGET_COUNT,
    start_x: float = TARGET_START_X,
    spacing: float = TARGET_SPACING,
    edge_margin: float = TARGET_EDGE_MARGIN,
) -> List[float]:
    """Left edges of the target slots that fit in a field of this width.

    Layout stops at the first slot past `field_width - edge_margin`, so a
    narrow field yields fewer than `count` slots (possibly none).
    """
    slots = []
    for i in range(count):
        x = start_x + i * spacing
        if x > field_width - edge_margin:
            break
        slots.append(x)
    return slots


def initialize_targets(
    field_width: float,
    field_height: float,
    count: int = TARGET_COUNT,
    start_x: float = TARGET_START_X,
    spacing: float = TARGET_SPACING,
    edge_margin: float = TARGET_EDGE_MARGIN,
    ground_offset: float = TARGET_GROUND_OFFSET,
    radius: float = TARGET_RADIUS,
) -> List[Target]:
    """Lay out a single row of unstruck targets along the bottom of the field."""
    targets = []
    for i, slot_x in enumerate(target_slots(field_width, count, start_x, spacing, edge_margin)):
        targets.append(Target(
            id=f"target_{i}",
            position=[slot_x + TARGET_WIDTH / 2, field_height - ground_offset],
            radius=radius,
            slot_x=slot_x,
            width=TARGET_WIDTH,
            height=TARGET_HEIGHT,
        ))
    return targets


def drop_projectile(
    flyer: Flyer,
    rng: Optional[np.random.Generator] = None,
    speed_range: float = DROP_SPEED_RANGE,
    projectile_id: str = "projectile_0",
) -> Projectile:
    """Release one projectile just under the flyer.

    Spawns at the flyer's position pushed down by the flyer's radius, with a
    random horizontal velocity and no vertical velocity.
    """
    rng = rng if rng is not None else np.random.default_rng()
    vx = rng.uniform(-speed_range, speed_range)
    return Projectile(
        id=projectile_id,
        position=[flyer.x, flyer.y + flyer.radius],
        velocity=[vx, 0.0],
    )


def cull_projectiles(
    projectiles: List[Projectile],
    field_height: float,
    margin: float = CULL_MARGIN,
) -> List[Projectile]:
    """Remove projectiles below `field_height + margin`, in place.

    Two-phase: the pass only marks, the list is compacted after the pass.
    Returns the removed projectiles.
    """
    limit = field_height + margin
    expired = [p for p in projectiles if p.y > limit]
    if expired:
        projectiles[:] = [p for p in projectiles if p.y <= limit]
    return expired


def projectile_ids(prefix: str = "projectile") -> Iterator[str]:
    """Endless stream of unique projectile ids for one session."""
    for n in itertools.count():
        yield f"{prefix}_{n}"
