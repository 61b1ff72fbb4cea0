#!/usr/bin/env python3
"""
Simulation settings.

SimulationSettings gathers every tuning constant the integrator and the scene
need, so a scene can be built with a deterministic configuration (tests,
presets) instead of reading module-level globals.
"""
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from . import constants as C
from .utils import coerce_color, try_float

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class SimulationSettings:
    """
    Container for simulation tuning values.

    Fields:
    - radius_scale: capture radius per unit of attractor mass
    - gravity_scale: multiplies attractor mass into gravitational strength
    - deflection_scale: weight of the close-approach amplification term
    - light_speed: constant ray speed in px/s
    - spawn_interval: seconds between spawned rays
    - min_sample_distance: minimum spacing of stored path points in px
    - max_path_points: a ray stops recording its path once it holds this many points
    - view_width, view_height: visible region in px
    - bounds_margin: how far outside the visible region a ray may travel
    - spawn_x, lane_count, lane_top, lane_spacing: spawn placement
    - palette: ray colors, cycled by spawn counter
    - absorbed_grace_period: seconds an absorbed ray is kept; None keeps it forever
    """
    radius_scale: float = C.RADIUS_SCALE
    gravity_scale: float = C.GRAVITY_SCALE
    deflection_scale: float = C.DEFLECTION_SCALE
    light_speed: float = C.LIGHT_SPEED
    spawn_interval: float = C.SPAWN_INTERVAL
    min_sample_distance: float = C.MIN_SAMPLE_DISTANCE
    max_path_points: int = C.MAX_PATH_POINTS
    view_width: float = C.VIEW_WIDTH
    view_height: float = C.VIEW_HEIGHT
    bounds_margin: float = C.BOUNDS_MARGIN
    spawn_x: float = C.SPAWN_X
    lane_count: int = C.LANE_COUNT
    lane_top: float = C.LANE_TOP
    lane_spacing: float = C.LANE_SPACING
    palette: Tuple[Color, ...] = C.RAY_PALETTE
    absorbed_grace_period: Optional[float] = None

    def __post_init__(self):
        if self.light_speed <= 0:
            raise ValueError(f"light_speed must be positive, got {self.light_speed}")
        if self.spawn_interval <= 0:
            raise ValueError(f"spawn_interval must be positive, got {self.spawn_interval}")
        if self.lane_count < 1:
            raise ValueError(f"lane_count must be at least 1, got {self.lane_count}")
        if self.view_width <= 0 or self.view_height <= 0:
            raise ValueError(f"view size must be positive, got {self.view_width}x{self.view_height}")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        if self.radius_scale <= 0:
            raise ValueError(f"radius_scale must be positive, got {self.radius_scale}")
        if self.max_path_points < 2:
            raise ValueError(f"max_path_points must be at least 2, got {self.max_path_points}")

    def with_overrides(self, **changes: Any) -> "SimulationSettings":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: Optional["SimulationSettings"] = None) -> "SimulationSettings":
        """
        Build settings from a JSON mapping on top of base (defaults if None).

        Unknown keys and values that do not parse are logged and ignored.
        """
        base = base or cls()
        known = {f.name for f in fields(cls)}
        changes: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known:
                logger.warning("Ignoring unknown setting %r", key)
                continue
            if key == "palette":
                try:
                    colors = tuple(coerce_color(c) for c in raw)
                except TypeError:
                    logger.warning("Ignoring malformed palette %r", raw)
                    continue
                if colors:
                    changes[key] = colors
                continue
            if key == "absorbed_grace_period" and raw is None:
                changes[key] = None
                continue
            value = try_float(raw)
            if value is None:
                logger.warning("Ignoring non-numeric setting %s=%r", key, raw)
                continue
            changes[key] = int(value) if key in ("lane_count", "max_path_points") else value
        return base.with_overrides(**changes)
