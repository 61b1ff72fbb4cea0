#!/usr/bin/env python3
"""
Shared simulation state for the Lensing Simulator application.

SimulationController owns the LensingScene and the playback settings. The
Pygame render thread and the Dear PyGui main thread both go through it, and
every method takes the re-entrant lock around the scene.

Time stepping
- Wall-clock frame times go into an accumulator. The scene is only ever
  advanced by whole BASE_DT steps, so rays follow the same trajectory whatever
  the frame rate.
- A frame contributes at most MAX_FRAME_DT of wall-clock time (scaled by the
  playback speed) and at most MAX_SUBSTEPS steps; time past that is dropped.
"""
import logging
import math
import threading
from typing import List, Optional, Tuple

from .constants import BASE_DT, MAX_FRAME_DT, MAX_SUBSTEPS
from .data_models import Attractor, RayView
from .presets_loader import ScenePreset
from .scene import LensingScene, SceneStats
from .settings import SimulationSettings

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Shared state between UI thread (DearPyGui) and rendering thread (Pygame).
    Includes thread-safe operations guarded by a lock.
    """

    def __init__(self, scene: LensingScene, base_dt: float = BASE_DT):
        self.lock = threading.RLock()
        self.scene = scene
        self.base_dt = base_dt
        self.running = True  # app running
        self.playing = True  # simulation running
        self.time_scale = 1.0  # x real-time
        self.preset_name = "Default"

        # Internal accumulator
        self._accumulator = 0.0

    def step(self, dt_real_seconds: float) -> int:
        """
        Feed one frame of wall-clock time and run the fixed steps it covers.

        Returns the number of scene advances performed.
        """
        if not math.isfinite(dt_real_seconds) or dt_real_seconds <= 0:
            return 0
        with self.lock:
            self._accumulator += min(dt_real_seconds, MAX_FRAME_DT) * max(self.time_scale, 0.0)
            steps = 0
            while self._accumulator >= self.base_dt and steps < MAX_SUBSTEPS:
                self.scene.advance(self.base_dt)
                self._accumulator -= self.base_dt
                steps += 1
            if steps == MAX_SUBSTEPS:
                self._accumulator = 0.0
            return steps

    def reset(self):
        with self.lock:
            self.scene.reset()
            self._accumulator = 0.0
        logger.info("Simulation reset")

    def set_time_scale(self, s: float):
        with self.lock:
            self.time_scale = max(0.0, float(s))

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def settings(self) -> SimulationSettings:
        with self.lock:
            return self.scene.settings

    def attractor(self) -> Attractor:
        with self.lock:
            return self.scene.attractor

    def world_size(self) -> Tuple[float, float]:
        """Visible region of the current scene, in px."""
        with self.lock:
            s = self.scene.settings
            return (s.view_width, s.view_height)

    def update_settings(self, **overrides) -> SimulationSettings:
        """Apply setting overrides to the running scene; live rays are kept."""
        with self.lock:
            settings = self.scene.settings.with_overrides(**overrides)
            self.scene.apply_settings(settings)
        logger.info("Settings updated: %s", ", ".join(f"{k}={v}" for k, v in sorted(overrides.items())))
        return settings

    def rebuild(self, mass: Optional[float] = None, **overrides) -> None:
        """
        Replace the scene with a new one.

        The attractor is immutable, so changing its mass or its radius scale
        means a fresh scene; the attractor keeps its position.
        """
        with self.lock:
            old = self.scene
            settings = old.settings.with_overrides(**overrides) if overrides else old.settings
            new_mass = old.attractor.mass if mass is None else mass
            attractor = Attractor.create(old.attractor.position, new_mass, settings.radius_scale)
            self.scene = LensingScene(attractor, settings)
            self._accumulator = 0.0
        logger.info("Scene rebuilt: mass=%.1f, light_speed=%.1f, spawn_interval=%.2f",
                    new_mass, settings.light_speed, settings.spawn_interval)

    def apply_preset(self, preset: ScenePreset) -> None:
        with self.lock:
            self.scene = LensingScene(preset.attractor, preset.settings)
            self.preset_name = preset.name
            self._accumulator = 0.0

    def snapshot(self) -> Tuple[Attractor, List[RayView], SceneStats, bool]:
        with self.lock:
            return (self.scene.attractor, self.scene.live_rays(),
                    self.scene.stats(), self.playing)
