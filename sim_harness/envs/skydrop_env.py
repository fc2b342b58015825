"""
SkyDrop Harness — Gymnasium Environment

Wraps a SkyDropSession so an agent (or a scripted policy) plays the game
headless. One `step()` is one simulation tick.

Observation space (8 floats):
    flyer x (1) + flyer vx (1) + nearest unstruck target dx, dy (2) +
    unstruck fraction (1) + live projectile count (1) + field width, height (2)

Action space: Discrete(2)
    0 = wait, 1 = drop a projectile this tick
"""

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from skydrop.clock import SkyDropSession


DEFAULT_ENV_CONFIG = {
    "max_ticks": 60 * 60,   # one minute at 60 fps
    "sim": {},              # SkyDropSession overrides
}

OBS_DIM = 8


class SkyDropEnv(gym.Env):
    """Single-session SkyDrop environment.

    Reward is the score gained this tick. The episode terminates once every
    target has been struck and truncates after `max_ticks`.
    """

    metadata = {"render_modes": ["human"]}

    def __init__(
        self,
        env_config: dict = None,
        render_mode: str = None,
    ):
        super().__init__()

        self.config = {**DEFAULT_ENV_CONFIG, **(env_config or {})}
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-np.inf, high=np.inf, shape=(OBS_DIM,), dtype=np.float32
        )
        self.action_space = spaces.Discrete(2)

        self.session: SkyDropSession = None

        # Stats tracking
        self.episode_count: int = 0
        self.drop_count: int = 0
        self.total_hits: int = 0

    def _nearest_unstruck(self):
        """Unstruck target closest to the flyer horizontally, or None."""
        flyer = self.session.flyer
        candidates = [t for t in self.session.targets if not t.struck]
        if not candidates:
            return None
        return min(candidates, key=lambda t: abs(t.x - flyer.x))

    def _get_observation(self) -> np.ndarray:
        session = self.session
        flyer = session.flyer
        nearest = self._nearest_unstruck()
        if nearest is not None:
            dx, dy = nearest.x - flyer.x, nearest.y - flyer.y
        else:
            dx, dy = 0.0, 0.0
        n_targets = len(session.targets)
        unstruck = (n_targets - session.struck_count) / n_targets if n_targets else 0.0

        obs = np.array([
            flyer.x,
            flyer.vx,
            dx,
            dy,
            unstruck,
            len(session.projectiles),
            session.field.width,
            session.field.height,
        ], dtype=np.float32)
        return obs

    def _get_info(self) -> dict:
        return {
            "tick": self.session.tick_count,
            "score": self.session.score,
            "targets": len(self.session.targets),
            "live_projectiles": len(self.session.projectiles),
        }

    def reset(self, seed=None, options=None):
        """Start a new session. The session draws from the env's seeded RNG."""
        super().reset(seed=seed)
        self.session = SkyDropSession(config=self.config["sim"], rng=self.np_random)
        self.drop_count = 0
        return self._get_observation(), self._get_info()

    def step(self, action):
        """Apply the action, advance one tick."""
        if int(action) == 1:
            self.session.drop()
            self.drop_count += 1

        before = self.session.score
        hits = self.session.tick()
        reward = float(self.session.score - before)
        self.total_hits += len(hits)

        terminated = self.session.all_struck
        truncated = not terminated and self.session.tick_count >= self.config["max_ticks"]
        if terminated or truncated:
            self.episode_count += 1

        info = self._get_info()
        info["hits"] = [h.to_dict() for h in hits]
        info["drops"] = self.drop_count

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, truncated, info

    def render(self):
        """One-line text frame: flyer, targets (x = struck), score."""
        session = self.session
        marks = "".join("x" if t.struck else "o" for t in session.targets)
        print(
            f"tick={session.tick_count:5d} flyer=({session.flyer.x:6.1f},{session.flyer.y:5.1f}) "
            f"targets=[{marks}] drops={len(session.projectiles):2d} score={session.score}"
        )

    @property
    def hit_rate(self) -> float:
        """Hits per drop for the current episode."""
        if self.drop_count == 0:
            return 0.0
        return self.session.score / self.drop_count
