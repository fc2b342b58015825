"""
SkyDrop Engine — Motion Integrator

Advances every body by one tick. A single generic integrator applies the
ambient gravity to all bodies that allow it; kind-specific rules run around it:

  - Flyer:       generic step, then boundary bounce, then altitude override
  - Projectile:  generic step only (falls freely, no horizontal bounds)
  - Target:      static until struck, then floats upward without bound

Integration is semi-implicit Euler: velocity first, then position.
"""

from typing import Iterable

import numpy as np

from skydrop.entities import Body, Field, Flyer, Projectile, Target

# ---------- Constants ----------
GRAVITY = 800.0               # px/s², +y is down
FLOAT_ACCELERATION = -20.0    # px/s², applied to struck targets
FLOAT_NUDGE = -5.0            # px/s added to struck target vy every tick
FRAME_DT = 1.0 / 60.0         # s, default fixed step


def integrate_body(body: Body, dt: float, gravity: float = GRAVITY) -> None:
    """Generic step: gravity (if allowed) into velocity, velocity into position."""
    if body.allow_gravity:
        body.velocity = body.velocity + np.array([0.0, gravity * dt])
    body.position = body.position + body.velocity * dt


def integrate_flyer(
    flyer: Flyer,
    field: Field,
    dt: float,
    gravity: float = GRAVITY,
) -> None:
    """Move the flyer, reverse it at the side walls, pin its altitude.

    The bounce resets vx to the fixed patrol magnitude rather than reflecting
    whatever speed it came in with. y and vy are forced back to the baseline
    after every step, so gravity never accumulates on the flyer.
    """
    integrate_body(flyer, dt, gravity)

    # Walls are read from the field every tick (it may have been resized)
    if flyer.x <= flyer.radius and flyer.vx < 0:
        flyer.velocity[0] = flyer.patrol_speed
    elif flyer.x >= field.width - flyer.radius and flyer.vx > 0:
        flyer.velocity[0] = -flyer.patrol_speed

    flyer.position[1] = flyer.baseline_y
    flyer.velocity[1] = 0.0


def integrate_projectiles(
    projectiles: Iterable[Projectile],
    dt: float,
    gravity: float = GRAVITY,
) -> None:
    """Free fall for every live projectile."""
    for projectile in projectiles:
        integrate_body(projectile, dt, gravity)


def integrate_targets(
    targets: Iterable[Target],
    dt: float,
    float_acceleration: float = FLOAT_ACCELERATION,
    float_nudge: float = FLOAT_NUDGE,
) -> None:
    """Float struck targets upward. Unstruck targets are left untouched.

    vy gains `float_acceleration * dt + float_nudge` per tick; both are
    negative so vy strictly decreases with no lower bound.
    """
    for target in targets:
        if not target.struck:
            continue
        target.acceleration_y = float_acceleration
        target.velocity[1] += target.acceleration_y * dt + float_nudge
        integrate_body(target, dt)


# ---------- Smoke Test ----------
if __name__ == "__main__":
    from rich.console import Console

    console = Console()
    console.print("\n[bold cyan]═══ SkyDrop Motion Smoke Test ═══[/bold cyan]\n")

    field = Field(800.0, 600.0)

    console.print("[bold]Test 1:[/bold] Flyer holds altitude under gravity")
    flyer = Flyer(id="flyer", position=[400.0, 100.0], velocity=[120.0, 0.0])
    for _ in range(120):
        integrate_flyer(flyer, field, FRAME_DT)
    assert flyer.y == flyer.baseline_y and flyer.vy == 0.0
    console.print(f"  After 2s: x={flyer.x:.1f}, y={flyer.y:.1f}, vy={flyer.vy}")
    console.print("  ✅ Altitude pinned")

    console.print("\n[bold]Test 2:[/bold] Flyer bounces at the right wall")
    flyer = Flyer(id="flyer", position=[field.width - 10.0, 100.0], velocity=[120.0, 0.0])
    integrate_flyer(flyer, field, FRAME_DT)
    assert flyer.vx == -flyer.patrol_speed
    console.print(f"  vx after bounce: {flyer.vx}")
    console.print("  ✅ Bounce resets to patrol speed")

    console.print("\n[bold]Test 3:[/bold] Projectile falls")
    drop = Projectile(id="projectile_0", position=[400.0, 122.0])
    integrate_projectiles([drop], 0.5)
    console.print(f"  After 0.5s: y={drop.y:.1f}, vy={drop.vy:.1f}")
    assert drop.vy == GRAVITY * 0.5
    console.print("  ✅ Gravity applied")

    console.print("\n[bold green]All motion tests passed![/bold green]\n")
