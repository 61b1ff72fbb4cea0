#!/usr/bin/env python3
"""
Scene manager for the Lensing Simulator.

LensingScene owns one attractor and the live light rays. Each advance() call
may spawn one ray, updates every ray with the same dt and attractor, then
drops rays that left the view. Nothing outside the scene mutates rays; the
renderer polls live_rays() for read-only views.

The scene is single-threaded. The application controller wraps it in a lock
when a UI thread and a render thread share it.
"""
import logging
from dataclasses import dataclass
from typing import List

from .data_models import Attractor, LightRay, RayView
from .physics import LensingPhysics
from .settings import SimulationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneStats:
    live: int
    absorbed: int
    spawned: int


class LensingScene:
    """A single static attractor and the rays passing it."""

    def __init__(self, attractor: Attractor, settings: SimulationSettings):
        self._attractor = attractor
        self.settings = settings
        self.physics = LensingPhysics(settings)
        self._rays: List[LightRay] = []
        self.spawn_timer = 0.0
        self.spawned_count = 0

    @classmethod
    def centered(cls, mass: float, settings: SimulationSettings) -> "LensingScene":
        """Scene with an attractor of the given mass in the middle of the view."""
        attractor = Attractor.create(
            (settings.view_width / 2.0, settings.view_height / 2.0),
            mass,
            settings.radius_scale,
        )
        return cls(attractor, settings)

    @property
    def attractor(self) -> Attractor:
        return self._attractor

    def spawn(self) -> RayView:
        """Spawn the next ray and return a view of it; lane and color cycle with the spawn counter."""
        s = self.settings
        lane = self.spawned_count % s.lane_count
        start = (s.spawn_x, s.lane_top + lane * s.lane_spacing)
        color = s.palette[self.spawned_count % len(s.palette)]
        ray = LightRay.spawn(start, (s.light_speed, 0.0), color, self._attractor.position[1])
        self._rays.append(ray)
        self.spawned_count += 1
        logger.debug("Spawned ray #%d in lane %d (b=%.1f)",
                     self.spawned_count, lane, ray.impact_parameter)
        return ray.view()

    def advance(self, dt: float) -> None:
        """
        Advance the scene by dt seconds.

        At most one ray is spawned per call, however large dt is. Rays that
        left the view are dropped; absorbed rays stay until their grace period
        (if any) runs out.
        """
        self.spawn_timer += dt
        if self.spawn_timer > self.settings.spawn_interval:
            self.spawn()
            self.spawn_timer = 0.0

        for ray in self._rays:
            if ray.absorbed:
                ray.absorbed_age += dt
            else:
                self.physics.update_ray(ray, self._attractor, dt)

        grace = self.settings.absorbed_grace_period
        self._rays = [
            ray for ray in self._rays
            if not self.physics.is_off_bounds(ray)
            and not (grace is not None and ray.absorbed and ray.absorbed_age > grace)
        ]

    def apply_settings(self, settings: SimulationSettings) -> None:
        """
        Switch to new settings without dropping rays.

        The attractor keeps the capture radius it was built with; changing
        radius_scale needs a new scene.
        """
        self.settings = settings
        self.physics = LensingPhysics(settings)
        logger.debug("Settings applied: light_speed=%.1f, spawn_interval=%.2f",
                     settings.light_speed, settings.spawn_interval)

    def reset(self) -> None:
        """Drop every ray and restart the spawn sequence; the attractor is kept."""
        self._rays.clear()
        self.spawned_count = 0
        self.spawn_timer = 0.0
        logger.debug("Scene reset")

    def live_rays(self) -> List[RayView]:
        return [ray.view() for ray in self._rays]

    def stats(self) -> SceneStats:
        absorbed = sum(1 for ray in self._rays if ray.absorbed)
        return SceneStats(live=len(self._rays), absorbed=absorbed, spawned=self.spawned_count)
