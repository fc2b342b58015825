"""
SkyDrop Engine — Tuning Configuration

All tuning constants live in one flat dict. Callers override any subset,
either directly or from a YAML file:

    config = load_config("sim_harness/configs/default.yaml")
    session = SkyDropSession(config=config)
"""

from pathlib import Path
from typing import Optional, Union

import yaml

from skydrop import entities, lifecycle, motion, scoring

DEFAULT_SIM_CONFIG = {
    # Field
    "field_width": 800.0,
    "field_height": 600.0,
    "frame_dt": motion.FRAME_DT,
    # World
    "gravity": motion.GRAVITY,
    # Flyer
    "flyer_radius": entities.FLYER_RADIUS,
    "flyer_patrol_speed": entities.FLYER_PATROL_SPEED,
    "flyer_baseline_y": entities.FLYER_BASELINE_Y,
    # Targets
    "target_count": lifecycle.TARGET_COUNT,
    "target_start_x": lifecycle.TARGET_START_X,
    "target_spacing": lifecycle.TARGET_SPACING,
    "target_edge_margin": lifecycle.TARGET_EDGE_MARGIN,
    "target_ground_offset": lifecycle.TARGET_GROUND_OFFSET,
    "target_radius": entities.TARGET_RADIUS,
    "float_acceleration": motion.FLOAT_ACCELERATION,
    "float_nudge": motion.FLOAT_NUDGE,
    # Projectiles
    "drop_speed_range": lifecycle.DROP_SPEED_RANGE,
    "cull_margin": lifecycle.CULL_MARGIN,
    "bounce_x": scoring.BOUNCE_X,
    "bounce_y": scoring.BOUNCE_Y,
}


def merge_config(overrides: Optional[dict] = None) -> dict:
    """Defaults with `overrides` applied. Unknown keys are rejected."""
    overrides = overrides or {}
    unknown = set(overrides) - set(DEFAULT_SIM_CONFIG)
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    return {**DEFAULT_SIM_CONFIG, **overrides}


def load_config(config_path: Union[str, Path]) -> dict:
    """Load overrides from YAML and merge them over the defaults.

    The file may hold the keys at the top level or under a `sim:` section.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
    return merge_config(data.get("sim", data))
