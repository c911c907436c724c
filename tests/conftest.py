import pytest

from gargantua_physics.models import BlackHole, Ray
from gargantua_physics.integrators import initialize_velocity

@pytest.fixture
def black_hole():
    return BlackHole(400.0, 400.0, 6e28)

@pytest.fixture
def flat_hole():
    return BlackHole(400.0, 400.0, 0.0)

@pytest.fixture
def infalling_ray(black_hole):
    ray = Ray(50.0, 50.0)
    initialize_velocity(ray, black_hole, 10.0, 10.0)
    return ray
