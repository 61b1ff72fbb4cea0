import pytest

from lensing.data_models import Attractor, LightRay
from lensing.physics import LensingPhysics
from lensing.scene import LensingScene
from lensing.settings import SimulationSettings


@pytest.fixture
def settings():
    return SimulationSettings()


@pytest.fixture
def attractor(settings):
    # Middle of a 1200x800 view, capture radius 0.5
    return Attractor.create((600.0, 400.0), 50.0, settings.radius_scale)


@pytest.fixture
def physics(settings):
    return LensingPhysics(settings)


@pytest.fixture
def scene(attractor, settings):
    return LensingScene(attractor, settings)


@pytest.fixture
def make_ray(settings, attractor):
    def _make(y, x=-50.0):
        return LightRay.spawn((x, y), (settings.light_speed, 0.0), (255, 0, 0), attractor.position[1])
    return _make

