#!/usr/bin/env python3
"""
Camera utilities for 2D world-to-screen transforms.

World coordinates are the simulation's pixel space; the camera adds zoom and
pan on top so the viewport can be moved around without touching the scene.
"""
from typing import Optional, Tuple
from .constants import VIEW_WIDTH, VIEW_HEIGHT
from .vector_utils import clamp

MIN_ZOOM = 0.25
MAX_ZOOM = 8.0


class Camera2D:
    """
    Simple 2D camera mapping world pixels to screen pixels.

    center is the world point shown in the middle of the viewport; zoom is
    screen pixels per world pixel.
    """

    def __init__(self, center=(VIEW_WIDTH / 2, VIEW_HEIGHT / 2), zoom=1.0):
        self.center = [float(center[0]), float(center[1])]
        self.scale = float(zoom)
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def world_to_screen(self, pos: Tuple[float, float]) -> Tuple[int, int]:
        cx, cy = self.center
        px = (pos[0] - cx) * self.scale + self.viewport_size[0] / 2
        py = (pos[1] - cy) * self.scale + self.viewport_size[1] / 2
        return (int(px), int(py))

    def screen_to_world(self, screen: Tuple[int, int]) -> Tuple[float, float]:
        cx, cy = self.center
        wx = (screen[0] - self.viewport_size[0] / 2) / self.scale + cx
        wy = (screen[1] - self.viewport_size[1] / 2) / self.scale + cy
        return (wx, wy)

    def world_length(self, length: float) -> int:
        """Screen length in pixels of a world distance, at least 1."""
        return max(1, int(length * self.scale))

    def zoom(self, factor, pivot_screen: Optional[Tuple[int, int]] = None):
        factor = clamp(factor, 0.05, 20.0)
        before = None
        if pivot_screen is not None:
            before = self.screen_to_world(pivot_screen)
        self.scale = clamp(self.scale * factor, MIN_ZOOM, MAX_ZOOM)
        if pivot_screen is not None and before is not None:
            after = self.screen_to_world(pivot_screen)
            self.center[0] += (before[0] - after[0])
            self.center[1] += (before[1] - after[1])

    def pan_pixels(self, dx_pixels, dy_pixels):
        self.center[0] -= dx_pixels / self.scale
        self.center[1] -= dy_pixels / self.scale

    def reset(self, world_size: Tuple[float, float]) -> None:
        """Frame the whole world region at 1:1."""
        self.center = [world_size[0] / 2, world_size[1] / 2]
        self.scale = 1.0
