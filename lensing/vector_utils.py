#!/usr/bin/env python3
"""
Vector helper functions for 2D operations.

Vectors are plain (x, y) float tuples. These are small, fast functions used by
the ray integrator, the scene and the renderer.
"""
import math
from typing import Tuple

Vec2 = Tuple[float, float]

# Below this length a vector is treated as zero when normalizing
NORM_EPSILON = 1e-10


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def vec_sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def vec_scale(a: Vec2, s: float) -> Vec2:
    return (a[0] * s, a[1] * s)


def vec_len(a: Vec2) -> float:
    return math.hypot(a[0], a[1])


def vec_norm(a: Vec2) -> Vec2:
    """Unit vector along a, or (0, 0) if a is (nearly) zero."""
    l = vec_len(a)
    if l < NORM_EPSILON:
        return (0.0, 0.0)
    return (a[0] / l, a[1] / l)


def vec_dist(a: Vec2, b: Vec2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])
