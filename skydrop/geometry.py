"""
SkyDrop Engine — Geometry

Circle primitives and the overlap test used for every collision in the game.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Circle:
    """A collision circle in field coordinates (y grows downward)."""
    x: float
    y: float
    radius: float

    @property
    def center(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


def distance(a: Circle, b: Circle) -> float:
    """Euclidean distance between the two centres."""
    return float(np.linalg.norm(a.center - b.center))


def overlaps(a: Circle, b: Circle) -> bool:
    """True iff the centres are closer than the sum of the radii.

    Touching circles (distance == r1 + r2) do not overlap.
    """
    return distance(a, b) < a.radius + b.radius


# ---------- Smoke Test ----------
if __name__ == "__main__":
    from rich.console import Console

    console = Console()
    console.print("\n[bold cyan]═══ SkyDrop Geometry Smoke Test ═══[/bold cyan]\n")

    target = Circle(140.0, 520.0, 20.0)
    near = Circle(140.0, 495.0, 8.0)
    touching = Circle(140.0, 492.0, 8.0)

    assert overlaps(target, near), "Expected overlap at distance 25 < 28"
    assert not overlaps(target, touching), "Touching circles must not overlap"
    assert overlaps(near, target) == overlaps(target, near)
    console.print(f"  distance(target, near) = {distance(target, near):.1f}")
    console.print("  ✅ Overlap test is strict and symmetric")

    console.print("\n[bold green]All geometry tests passed![/bold green]\n")
