#!/usr/bin/env python3
"""
Shared constants for the Lensing Simulator (screen pixels and seconds).

These are the default tuning values. The simulation itself never reads them
directly: they seed SimulationSettings, which is passed to the scene.
"""

# Tuning (visual scale, not physically derived)
RADIUS_SCALE = 0.01  # capture radius per unit of attractor mass
GRAVITY_SCALE = 10000.0  # attractor mass -> gravitational strength
DEFLECTION_SCALE = 0.001  # strength of the close-approach amplification
LIGHT_SPEED = 200.0  # px/s; every ray travels at exactly this speed
MIN_SAMPLE_DISTANCE = 2.0  # px between stored path points
MAX_PATH_POINTS = 2000  # a ray stops recording its path past this many points

# Spawning
SPAWN_INTERVAL = 0.3  # seconds between new rays
SPAWN_X = -50.0  # rays start just left of the viewport
LANE_COUNT = 15
LANE_TOP = 50.0
LANE_SPACING = 50.0

# Default attractor
ATTRACTOR_MASS = 50.0
HALO_SCALE = 1.5  # outer ring drawn at this multiple of the capture radius

# Frame timing
MAX_FRAME_DT = 0.05  # clamp for wall-clock frame time, seconds
BASE_DT = 1.0 / 60.0  # fixed simulation step, seconds
MAX_SUBSTEPS = 20  # fixed steps per frame at most
TARGET_FPS = 60

# Rendering (viewport)
VIEW_WIDTH = 1200
VIEW_HEIGHT = 800
BOUNDS_MARGIN = 100.0  # rays are retired this far outside the viewport
GRID_SPACING = 50
BACKGROUND_COLOR = (0, 0, 0)
GRID_COLOR = (30, 30, 30)
HALO_COLOR = (100, 100, 100)
HUD_COLOR = (255, 255, 255)
PHOTON_RADIUS = 3

RAY_PALETTE = (
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
