#!/usr/bin/env python3
"""
Scene preset JSON loading utilities.

A preset picks the attractor and overrides any SimulationSettings field.

Schema
======
Preset JSON (presets/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "attractor": {
    "mass": 50.0,
    "position": [600.0, 400.0]      # optional, default: middle of the view
  },
  "settings": {                      # optional, any SimulationSettings field
    "light_speed": 200.0,
    "spawn_interval": 0.3,
    "palette": [[255, 0, 0], [0, 255, 0]]
  }
}

Users can add their own JSON files into the presets folder and they'll be
picked up by the loader.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .data_models import Attractor
from .settings import SimulationSettings
from .utils import try_float

logger = logging.getLogger(__name__)

PRESETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "presets")


@dataclass(frozen=True)
class ScenePreset:
  name: str
  description: str
  attractor: Attractor
  settings: SimulationSettings


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("Could not read preset %s: %s", path, exc)
    return None
  if not isinstance(data, dict):
    logger.warning("Preset %s is not a JSON object", path)
    return None
  return data


def list_presets(presets_dir: str = PRESETS_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available presets."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(presets_dir):
    return items
  for fn in sorted(os.listdir(presets_dir)):
    if not fn.lower().endswith(".json"):
      continue
    data = _read_json(os.path.join(presets_dir, fn)) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def parse_preset(data: dict, fallback_name: str = "Preset") -> Optional[ScenePreset]:
  """Build a ScenePreset from decoded JSON, or None if it is malformed."""
  try:
    settings = SimulationSettings.from_dict(data.get("settings") or {})
  except ValueError as exc:
    logger.warning("Invalid settings in preset %r: %s", fallback_name, exc)
    return None

  entry = data.get("attractor") or {}
  mass = try_float(entry.get("mass"))
  if mass is None or mass <= 0:
    logger.warning("Preset %r needs a positive attractor mass", fallback_name)
    return None
  pos = entry.get("position")
  if pos is None:
    position = (settings.view_width / 2.0, settings.view_height / 2.0)
  else:
    try:
      x, y = try_float(pos[0]), try_float(pos[1])
    except (TypeError, IndexError, KeyError):
      x = y = None
    if x is None or y is None:
      logger.warning("Preset %r has a malformed attractor position %r", fallback_name, pos)
      return None
    position = (x, y)

  return ScenePreset(
    name=str(data.get("name") or fallback_name),
    description=str(data.get("description") or ""),
    attractor=Attractor.create(position, mass, settings.radius_scale),
    settings=settings,
  )


def load_preset(file_name: str, presets_dir: str = PRESETS_DIR) -> Optional[ScenePreset]:
  """Load a preset JSON by file name."""
  path = os.path.join(presets_dir, file_name)
  data = _read_json(path)
  if data is None:
    return None
  preset = parse_preset(data, fallback_name=os.path.splitext(file_name)[0])
  if preset is not None:
    logger.info("Loaded preset %r from %s", preset.name, file_name)
  return preset
