#!/usr/bin/env python3
"""
Core Physics Engine for the Lensing Simulator

Responsibilities
- Advance a light ray one tick through the field of a single attractor.
- Decide absorption (ray inside the capture radius) and off-bounds retirement.
- Provide small helpers for inspecting a trajectory (deflection angle).

Units and conventions
- Positions are screen pixels [px], y grows downward.
- Velocities are pixels per second [px/s].
- Time steps are in seconds [s].
- Mass and every scale factor are visual tuning values, not SI quantities.

Numerical notes
- The update is an empirical rule tuned for visual plausibility, not a
  relativistic geodesic. Acceleration is inverse-square toward the attractor,
  amplified by a deflection factor that grows for rays passing close with a
  small impact parameter.
- Light speed is enforced every tick: the velocity keeps the direction that the
  acceleration produced but its length is reset to light_speed. The result is
  a pure direction integrator with semi-implicit Euler position updates.
- Absorption is tested before any acceleration; an absorbed ray keeps the
  position and velocity it had when it crossed the capture radius.
- Zero distances are harmless: vec_norm returns (0, 0) and the deflection
  denominator carries a +1 guard.
- Absorption is checked once per tick, so whether a dead-on ray lands inside
  the capture radius depends on dt. The application always advances with the
  fixed BASE_DT. A ray that steps over the capture radius oscillates across the
  attractor and its path stops growing at max_path_points.

Threading
- Pure compute. The attractor is read-only and each ray is independent, so
  rays may be updated in any order.
"""

import logging
import math

from .data_models import Attractor, LightRay
from .settings import SimulationSettings
from .vector_utils import vec_add, vec_len, vec_norm, vec_scale, vec_sub

logger = logging.getLogger(__name__)


class LensingPhysics:
    """
    Light-bending integrator for a single static attractor.

    For a ray at distance d from an attractor of mass M the acceleration is

        s = M * gravity_scale
        a = norm(r_to_attractor) * s / d^2 * (1 + s * deflection_scale / (d * b + 1))

    where b is the ray's impact parameter.
    """

    def __init__(self, settings: SimulationSettings):
        """
        Initialize the integrator.

        Args:
            settings: Tuning values (gravity, deflection, light speed, sampling, bounds)
        """
        self.settings = settings

    def gravitational_strength(self, attractor: Attractor) -> float:
        return attractor.mass * self.settings.gravity_scale

    def deflection_factor(self, strength: float, distance: float, impact_parameter: float) -> float:
        """Dimensionless amplifier for close, small-impact-parameter passes (>= 1)."""
        return 1.0 + (strength * self.settings.deflection_scale) / (distance * impact_parameter + 1.0)

    def update_ray(self, ray: LightRay, attractor: Attractor, dt: float) -> bool:
        """
        Advance one ray by one tick.

        Steps, in order:
        1) vector and distance to the attractor
        2) absorb and stop if inside the capture radius
        3) inverse-square base acceleration
        4) scale once by the deflection factor
        5) v += a * dt
        6) |v| reset to light_speed
        7) x += v * dt
        8) sample the path (up to max_path_points)

        Args:
            ray: Ray to update (modified in place). Absorbed rays are left alone.
            attractor: The static attractor.
            dt: Time step in seconds (> 0, validated by the caller).

        Returns:
            True if this call absorbed the ray.
        """
        if ray.absorbed:
            return False

        to_attractor = vec_sub(attractor.position, ray.position)
        distance = vec_len(to_attractor)

        if distance < attractor.capture_radius:
            ray.absorbed = True
            logger.debug("Ray absorbed at (%.1f, %.1f), b=%.1f",
                         ray.position[0], ray.position[1], ray.impact_parameter)
            return True

        strength = self.gravitational_strength(attractor)
        # distance is 0 only when the capture radius is 0
        magnitude = strength / (distance * distance) if distance > 0.0 else 0.0
        acceleration = vec_scale(vec_norm(to_attractor), magnitude)
        acceleration = vec_scale(
            acceleration, self.deflection_factor(strength, distance, ray.impact_parameter)
        )

        velocity = vec_add(ray.velocity, vec_scale(acceleration, dt))
        ray.velocity = vec_scale(vec_norm(velocity), self.settings.light_speed)

        ray.position = vec_add(ray.position, vec_scale(ray.velocity, dt))
        ray.add_path_point(self.settings.min_sample_distance, self.settings.max_path_points)
        return False

    def is_off_bounds(self, ray: LightRay) -> bool:
        """True if a travelling ray has left the visible region plus margin."""
        if ray.absorbed:
            return False
        s = self.settings
        m = s.bounds_margin
        x, y = ray.position
        return x < -m or x > s.view_width + m or y < -m or y > s.view_height + m


def deflection_angle(ray: LightRay) -> float:
    """
    Angle in radians between the ray's current heading and +x.

    Rays are spawned heading in +x, so this is the total bending so far.
    Returns 0.0 for a zero velocity.
    """
    vx, vy = ray.velocity
    if vx == 0.0 and vy == 0.0:
        return 0.0
    return abs(math.atan2(vy, vx))
