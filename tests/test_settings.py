import dataclasses
import logging

import pytest

from lensing import constants as C
from lensing.settings import SimulationSettings


def test_defaults_match_constants():
    s = SimulationSettings()
    assert s.radius_scale == C.RADIUS_SCALE
    assert s.gravity_scale == C.GRAVITY_SCALE
    assert s.deflection_scale == C.DEFLECTION_SCALE
    assert s.light_speed == 200.0
    assert s.spawn_interval == 0.3
    assert s.min_sample_distance == 2.0
    assert s.max_path_points == C.MAX_PATH_POINTS
    assert (s.view_width, s.view_height) == (1200, 800)
    assert s.lane_count == 15
    assert len(s.palette) == 7
    assert s.absorbed_grace_period is None


def test_settings_are_frozen():
    s = SimulationSettings()
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.light_speed = 1.0


@pytest.mark.parametrize("overrides", [
    {"light_speed": 0.0},
    {"spawn_interval": -1.0},
    {"lane_count": 0},
    {"view_width": 0},
    {"palette": ()},
    {"radius_scale": 0.0},
    {"max_path_points": 1},
])
def test_invalid_settings_raise(overrides):
    with pytest.raises(ValueError):
        SimulationSettings(**overrides)


def test_with_overrides_keeps_other_fields():
    s = SimulationSettings().with_overrides(light_speed=300.0)
    assert s.light_speed == 300.0
    assert s.spawn_interval == 0.3


def test_from_dict_coerces_and_ignores_unknown(caplog):
    with caplog.at_level(logging.WARNING, logger="lensing"):
        s = SimulationSettings.from_dict({
            "light_speed": "150",
            "lane_count": 4.0,
            "max_path_points": "500",
            "palette": [[300, -5, 10]],
            "absorbed_grace_period": None,
            "bogus": 1,
            "spawn_interval": "soon",
        })
    assert s.light_speed == 150.0
    assert s.lane_count == 4
    assert isinstance(s.lane_count, int)
    assert s.max_path_points == 500
    assert isinstance(s.max_path_points, int)
    assert s.palette == ((255, 0, 10),)
    assert s.absorbed_grace_period is None
    assert s.spawn_interval == 0.3
    assert "bogus" in caplog.text
    assert "spawn_interval" in caplog.text


def test_from_dict_on_top_of_base():
    base = SimulationSettings(light_speed=100.0)
    s = SimulationSettings.from_dict({"spawn_interval": 1.0}, base=base)
    assert s.light_speed == 100.0
    assert s.spawn_interval == 1.0


def test_from_dict_propagates_invalid_values():
    with pytest.raises(ValueError):
        SimulationSettings.from_dict({"light_speed": -10})
