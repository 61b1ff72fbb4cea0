import dataclasses

import pytest

from lensing.data_models import Attractor, LightRay


def test_attractor_capture_radius_is_linear_in_mass():
    a = Attractor.create((600, 400), 50.0, 0.01)
    assert a.position == (600.0, 400.0)
    assert a.mass == 50.0
    assert a.capture_radius == pytest.approx(0.5)
    assert a.halo_radius == pytest.approx(0.75)
    b = Attractor.create((0, 0), 100.0, 0.01)
    assert b.capture_radius == pytest.approx(2 * a.capture_radius)


def test_attractor_is_immutable():
    a = Attractor.create((600, 400), 50.0, 0.01)
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.mass = 10.0


@pytest.mark.parametrize("mass", [0.0, -5.0])
def test_attractor_requires_positive_mass(mass):
    with pytest.raises(ValueError):
        Attractor.create((0, 0), mass, 0.01)


def test_spawned_ray_initial_state():
    ray = LightRay.spawn((-50, 150), (200, 0), (0, 255, 0), reference_y=400.0)
    assert ray.position == (-50.0, 150.0)
    assert ray.velocity == (200.0, 0.0)
    assert ray.path == [(-50.0, 150.0)]
    assert ray.impact_parameter == 250.0
    assert not ray.is_absorbed
    assert ray.absorbed_age == 0.0


def test_impact_parameter_is_absolute():
    below = LightRay.spawn((-50, 650), (200, 0), (0, 0, 0), reference_y=400.0)
    assert below.impact_parameter == 250.0


def test_add_path_point_respects_spacing():
    ray = LightRay.spawn((0, 0), (200, 0), (0, 0, 0), reference_y=0.0)
    ray.position = (1.5, 0.0)
    assert not ray.add_path_point(2.0)
    ray.position = (2.5, 0.0)
    assert ray.add_path_point(2.0)
    assert ray.path == [(0.0, 0.0), (2.5, 0.0)]


def test_add_path_point_on_empty_path():
    ray = LightRay(position=(3.0, 4.0), velocity=(1.0, 0.0), color=(0, 0, 0), impact_parameter=0.0)
    assert ray.add_path_point(2.0)
    assert ray.path == [(3.0, 4.0)]


def test_add_path_point_stops_at_max_points():
    ray = LightRay.spawn((0, 0), (200, 0), (0, 0, 0), reference_y=0.0)
    ray.position = (5.0, 0.0)
    assert ray.add_path_point(2.0, max_points=2)
    ray.position = (10.0, 0.0)
    assert not ray.add_path_point(2.0, max_points=2)
    assert ray.path == [(0.0, 0.0), (5.0, 0.0)]


def test_view_is_a_detached_snapshot():
    ray = LightRay.spawn((0, 0), (200, 0), (1, 2, 3), reference_y=0.0)
    view = ray.view()
    ray.position = (10.0, 0.0)
    ray.add_path_point(2.0)
    assert view.position == (0.0, 0.0)
    assert view.path == ((0.0, 0.0),)
    assert view.color == (1, 2, 3)
    assert view.absorbed is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.absorbed = True
