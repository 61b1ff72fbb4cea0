#!/usr/bin/env python3
"""
Data models for the Lensing Simulator.

This module defines the Attractor and LightRay dataclasses shared between the
integrator, the scene and the renderer.

Units and usage
- positions are screen-space pixels, velocities px/s, times seconds.
- The attractor is frozen: it never moves or changes mass after creation.
- LightRay is mutated only by LensingPhysics.update_ray, driven by the scene.
  The renderer reads RayView snapshots and never touches the ray itself.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import HALO_SCALE
from .vector_utils import Vec2, vec_dist

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Attractor:
    """
    The central mass that bends light.

    Fields:
    - position: fixed (x, y) in px
    - mass: visual-scale mass (> 0)
    - capture_radius: rays closer than this are absorbed
    """
    position: Vec2
    mass: float
    capture_radius: float

    @classmethod
    def create(cls, position: Vec2, mass: float, radius_scale: float) -> "Attractor":
        """Build an attractor whose capture radius is mass * radius_scale."""
        if mass <= 0:
            raise ValueError(f"attractor mass must be positive, got {mass}")
        return cls(
            position=(float(position[0]), float(position[1])),
            mass=float(mass),
            capture_radius=float(mass) * radius_scale,
        )

    @property
    def halo_radius(self) -> float:
        return self.capture_radius * HALO_SCALE


@dataclass(frozen=True)
class RayView:
    """Read-only snapshot of a ray for drawing."""
    position: Vec2
    path: Tuple[Vec2, ...]
    color: Color
    absorbed: bool


@dataclass
class LightRay:
    """
    A single light ray travelling through the attractor's field.

    Fields:
    - position, velocity: current kinematic state
    - path: sampled past positions, append-only, starts with the spawn point, capped
    - color: RGB tuple used for rendering
    - impact_parameter: vertical offset from the attractor at spawn, fixed
    - absorbed: set once when the ray enters the capture radius
    - absorbed_age: seconds spent absorbed (for optional pruning)
    """
    position: Vec2
    velocity: Vec2
    color: Color
    impact_parameter: float
    path: List[Vec2] = field(default_factory=list)
    absorbed: bool = False
    absorbed_age: float = 0.0

    @classmethod
    def spawn(cls, start: Vec2, velocity: Vec2, color: Color, reference_y: float) -> "LightRay":
        """Create a travelling ray; the impact parameter is measured against reference_y."""
        start = (float(start[0]), float(start[1]))
        return cls(
            position=start,
            velocity=(float(velocity[0]), float(velocity[1])),
            color=color,
            impact_parameter=abs(start[1] - reference_y),
            path=[start],
        )

    @property
    def is_absorbed(self) -> bool:
        return self.absorbed

    def add_path_point(self, min_spacing: float, max_points: Optional[int] = None) -> bool:
        """
        Append the current position if it is farther than min_spacing from the last point.

        Once the path holds max_points points it is left as is.
        """
        if max_points is not None and len(self.path) >= max_points:
            return False
        if not self.path or vec_dist(self.position, self.path[-1]) > min_spacing:
            self.path.append(self.position)
            return True
        return False

    def view(self) -> RayView:
        return RayView(
            position=self.position,
            path=tuple(self.path),
            color=self.color,
            absorbed=self.absorbed,
        )
