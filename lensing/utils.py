#!/usr/bin/env python3
"""
General utilities for the Lensing Simulator.
"""
import math
from typing import Optional, Sequence, Tuple


def try_float(val) -> Optional[float]:
    """Parse val as a finite float, or return None."""
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f


def coerce_color(c: Sequence, default: Tuple[int, int, int] = (255, 255, 255)) -> Tuple[int, int, int]:
    """Turn a JSON-ish [r, g, b] into a clamped RGB tuple."""
    try:
        r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError):
        return default
    r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
    return (r, g, b)
