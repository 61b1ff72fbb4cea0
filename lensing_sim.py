#!/usr/bin/env python3
"""
Lensing Simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared SimulationController that owns the LensingScene and the playback
  settings; all access is guarded by a re-entrant lock for thread-safety.
- Draws the attractor, the light ray paths and a HUD, and offers Dear PyGui controls for
  presets, attractor mass, ray speed and spawn rate.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  advancing the scene, and drawing. It locks the SimulationController around short critical
  sections to advance or snapshot the scene.
- The UI class runs in the main thread via Dear PyGui. It reads status on a periodic
  frame callback and invokes SimulationController methods as needed; these are lock-protected.
- The scene itself is single-threaded; only the controller knows about the lock.

Units and conventions
- Screen pixels and seconds throughout. The camera maps scene pixels to viewport pixels.
- Colors are RGB tuples in 0..255.

Running
1) Install: `pip install -e .`
2) Run: `lensing-sim` or `python lensing_sim.py`

Keys (viewport): Esc quits, R resets, Space toggles play, Home recenters. Wheel zooms, drag pans.
"""

import logging
import threading
import time
from typing import Tuple

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from lensing.camera import Camera2D
from lensing.constants import (
    ATTRACTOR_MASS,
    BACKGROUND_COLOR,
    GRID_COLOR,
    GRID_SPACING,
    HALO_COLOR,
    HUD_COLOR,
    PHOTON_RADIUS,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
)
from lensing.controller import SimulationController
from lensing.data_models import Attractor, RayView
from lensing.logging_config import setup_logging
from lensing.presets_loader import list_presets, load_preset
from lensing.scene import LensingScene
from lensing.settings import SimulationSettings
from lensing.utils import try_float

logger = logging.getLogger("lensing.app")

# ============================================================
# Pygame Renderer Thread
# ============================================================


class PygameRenderer(threading.Thread):
    """
    Pygame loop: draws grid, attractor, ray paths and photons, HUD.
    Handles camera panning and zoom, reset and pause keys.
    """

    def __init__(self, sim: SimulationController):
        super().__init__(daemon=True)
        self.sim = sim
        w, h = sim.world_size()
        self.camera = Camera2D(center=(w / 2, h / 2))
        self.surface = None
        self.clock = None
        self.dragging_background = False
        self.drag_start_screen = (0, 0)
        self.running = True

    def reset_camera(self):
        self.camera.reset(self.sim.world_size())

    def run(self):
        pygame.init()
        pygame.display.set_caption("2D Black Hole - Gravitational Lensing")
        w, h = (int(v) for v in self.sim.world_size())
        self.surface = pygame.display.set_mode((w, h), pygame.RESIZABLE)
        self.camera.set_viewport_size(w, h)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            self.handle_events()

            with self.sim.lock:
                playing = self.sim.playing
            if playing:
                self.sim.step(real_dt)

            self.draw()

            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.sim.running = False
                    self.running = False
                elif event.key == pygame.K_r:
                    self.sim.reset()
                elif event.key == pygame.K_SPACE:
                    self.sim.toggle_play()
                elif event.key == pygame.K_HOME:
                    self.reset_camera()

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor, pygame.mouse.get_pos())

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button in (1, 2, 3):
                    self.dragging_background = True
                    self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (1, 2, 3):
                    self.dragging_background = False

            elif event.type == pygame.MOUSEMOTION:
                if self.dragging_background:
                    mouse = pygame.mouse.get_pos()
                    dx = mouse[0] - self.drag_start_screen[0]
                    dy = mouse[1] - self.drag_start_screen[1]
                    self.camera.pan_pixels(dx, dy)
                    self.drag_start_screen = mouse

    def draw_grid(self, surf, world_size: Tuple[float, float]):
        w, h = world_size
        for x in range(0, int(w), GRID_SPACING):
            a = _safe_point(self.camera.world_to_screen((x, 0)))
            b = _safe_point(self.camera.world_to_screen((x, h)))
            if a and b:
                pygame.draw.line(surf, GRID_COLOR, a, b, 1)
        for y in range(0, int(h), GRID_SPACING):
            a = _safe_point(self.camera.world_to_screen((0, y)))
            b = _safe_point(self.camera.world_to_screen((w, y)))
            if a and b:
                pygame.draw.line(surf, GRID_COLOR, a, b, 1)

    def draw_attractor(self, surf, attractor: Attractor):
        center = _safe_point(self.camera.world_to_screen(attractor.position))
        if center is None:
            return
        halo_r = self.camera.world_length(attractor.halo_radius)
        core_r = self.camera.world_length(attractor.capture_radius)
        gfxdraw.aacircle(surf, center[0], center[1], halo_r, HALO_COLOR)
        gfxdraw.filled_circle(surf, center[0], center[1], core_r, (0, 0, 0))
        gfxdraw.aacircle(surf, center[0], center[1], core_r, HALO_COLOR)

    def draw_ray(self, surf, ray: RayView, world_width: float):
        pts = []
        for p in ray.path:
            sp = _safe_point(self.camera.world_to_screen(p))
            if sp:
                pts.append(sp)
        if len(pts) > 1:
            pygame.draw.aalines(surf, ray.color, False, pts)

        # Photon dot only while travelling inside the scene horizontally
        if not ray.absorbed and 0 <= ray.position[0] <= world_width:
            sp = _safe_point(self.camera.world_to_screen(ray.position))
            if sp:
                gfxdraw.filled_circle(surf, sp[0], sp[1], PHOTON_RADIUS, ray.color)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        world_size = self.sim.world_size()
        self.draw_grid(surf, world_size)

        attractor, rays, stats, playing = self.sim.snapshot()
        self.draw_attractor(surf, attractor)
        for ray in rays:
            self.draw_ray(surf, ray, world_size[0])

        draw_text(surf, f"Light Rays: {stats.live}", 10, 10, HUD_COLOR)
        draw_text(surf, f"Total Spawned: {stats.spawned}", 10, 30, HUD_COLOR)
        draw_text(surf, f"Absorbed: {stats.absorbed}  [{'Playing' if playing else 'Paused'}]", 10, 50, HUD_COLOR)
        draw_text(surf, "Esc: exit | R: reset | Space: pause | Wheel/drag: zoom/pan | Home: recenter",
                  10, 70, (160, 160, 160))

        pygame.display.flip()


_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("arial", 18)
        except (OSError, pygame.error):
            logger.warning("System font unavailable, using pygame default font")
            _cached_font = pygame.font.Font(None, 20)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    x, y = int(pt[0]), int(pt[1])
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui UI
# ============================================================


class UI:
    """
    Dear PyGui interface: presets, attractor mass, ray speed and spawn rate, playback.
    """

    def __init__(self, sim: SimulationController, renderer: PygameRenderer):
        self.sim = sim
        self.renderer = renderer

        self.status_msg_id = None
        self.mass_input_id = None
        self.stats_text_id = None
        self._preset_map = {}

        self._build_ui()
        self._schedule_sync()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Lensing Simulator - Controls', width=460, height=420)

        settings = self.sim.settings()
        for fn, display in list_presets():
            self._preset_map[display] = fn
        preset_items = list(self._preset_map.keys()) or ["No presets found (add JSONs to presets/)"]

        with dpg.window(label="Controls", width=440, height=400, pos=(10, 10), tag="main_window"):
            dpg.add_text("Preset")
            with dpg.group(horizontal=True):
                dpg.add_combo(preset_items, default_value=preset_items[0], width=260, tag="preset_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_preset(dpg.get_value("preset_combo")))

            dpg.add_separator()

            dpg.add_text("Attractor")
            with dpg.group(horizontal=True):
                self.mass_input_id = dpg.add_input_text(
                    label="Mass", default_value=f"{self.sim.attractor().mass:g}", width=120)
                dpg.add_button(label="Apply", callback=self._apply_mass)

            dpg.add_separator()

            dpg.add_text("Rays")
            dpg.add_slider_float(label="Light speed (px/s)", min_value=20.0, max_value=600.0,
                                 default_value=settings.light_speed, width=220, tag="light_speed_slider")
            dpg.add_slider_float(label="Spawn interval (s)", min_value=0.05, max_value=2.0,
                                 default_value=settings.spawn_interval, width=220, tag="spawn_interval_slider")

            dpg.add_separator()

            dpg.add_text("Simulation Controls")
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=self._toggle_play)
                dpg.add_button(label="Reset", callback=self._reset)
                dpg.add_button(label="Recenter View", callback=self.renderer.reset_camera)
            dpg.add_slider_float(label="Speed (x real-time)", min_value=0.0, max_value=5.0,
                                 default_value=1.0, width=220, tag="speed_slider",
                                 callback=lambda s, a, u: self.sim.set_time_scale(float(a) if a is not None else 1.0))

            dpg.add_separator()
            self.stats_text_id = dpg.add_text("")
            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

        # Sliders apply once released, not on every drag tick
        for name in ("light_speed", "spawn_interval"):
            with dpg.item_handler_registry(tag=f"{name}_handlers"):
                dpg.add_item_deactivated_after_edit_handler(
                    callback=lambda s, a, u: self._apply_setting(u, dpg.get_value(f"{u}_slider")),
                    user_data=name)
            dpg.bind_item_handler_registry(f"{name}_slider", f"{name}_handlers")

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def _toggle_play(self):
        state = "Playing" if self.sim.toggle_play() else "Paused"
        self._set_status(f"Simulation {state}.")

    def _reset(self):
        self.sim.reset()
        self._set_status("Reset: all rays cleared.")

    def _apply_mass(self):
        mass = try_float(dpg.get_value(self.mass_input_id))
        if mass is None or mass <= 0:
            self._set_error("Mass must be a positive number.")
            return
        self.sim.rebuild(mass=mass)
        self._set_status(f"Attractor mass set to {mass:g}.")

    def _apply_setting(self, name: str, value):
        val = try_float(value)
        if val is None or val <= 0:
            self._set_error(f"Invalid value for {name}.")
            return
        try:
            self.sim.update_settings(**{name: val})
        except ValueError as exc:
            self._set_error(str(exc))
            return
        self._set_status(f"{name.replace('_', ' ').capitalize()} set to {val:.2f}.")

    def load_preset(self, name: str):
        fn = self._preset_map.get(name.strip())
        if fn is None:
            self._set_error(f"Unknown preset: {name}")
            return
        preset = load_preset(fn)
        if preset is None:
            self._set_error(f"Could not load preset {fn} (see log).")
            return
        self.sim.apply_preset(preset)
        dpg.set_value(self.mass_input_id, f"{preset.attractor.mass:g}")
        dpg.set_value("light_speed_slider", preset.settings.light_speed)
        dpg.set_value("spawn_interval_slider", preset.settings.spawn_interval)
        self.renderer.reset_camera()
        self._set_status(f"Loaded preset: {preset.name}")

    def _sync_ui_with_sim(self):
        """Periodic UI update of the ray counters."""
        if not self.sim.running:
            # Viewport was closed
            dpg.stop_dearpygui()
            return
        _, _, stats, playing = self.sim.snapshot()
        dpg.set_value(self.stats_text_id,
                      f"Live rays: {stats.live}   Absorbed: {stats.absorbed}   "
                      f"Spawned: {stats.spawned}   {'Playing' if playing else 'Paused'}")
        self._schedule_sync()

# ============================================================
# Default Scene and Application Entry
# ============================================================


def build_default_scene() -> LensingScene:
    return LensingScene.centered(ATTRACTOR_MASS, SimulationSettings())


def main():
    setup_logging(logging.INFO)
    sim = SimulationController(build_default_scene())
    logger.info("Starting with attractor mass %.1f at %s",
                sim.scene.attractor.mass, sim.scene.attractor.position)

    renderer = PygameRenderer(sim)
    renderer.start()

    ui = UI(sim, renderer)

    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                ui._toggle_play()
        dpg.add_key_press_handler(callback=key_down)

    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()
        logger.info("Shut down")


if __name__ == "__main__":
    main()
