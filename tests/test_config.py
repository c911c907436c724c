import pytest

from gargantua_physics.config import SimulationConfig
from gargantua_physics.constants import DT, REFERENCE_MASS
from gargantua_physics.exceptions import ConfigError, GargantuaError


def test_defaults():
    config = SimulationConfig()
    assert config.ray_count == 50
    assert config.mass == REFERENCE_MASS
    assert config.dt == DT
    assert config.scheme == "euler"


@pytest.mark.parametrize("kwargs", [{"ray_count": -1}, {"dt": 0.0}, {"scheme": "verlet"}])
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        SimulationConfig(**kwargs)


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
    assert issubclass(ConfigError, GargantuaError)


def test_from_env(monkeypatch):
    monkeypatch.setenv("GARGANTUA_RAY_COUNT", "12")
    monkeypatch.setenv("GARGANTUA_MASS", "0")
    monkeypatch.setenv("GARGANTUA_SCHEME", "rk4")
    config = SimulationConfig.from_env()
    assert config.ray_count == 12
    assert config.mass == 0.0
    assert config.scheme == "rk4"
    assert config.speed == 10.0


def test_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("GARGANTUA_DT", "fast")
    with pytest.raises(ConfigError):
        SimulationConfig.from_env()


def test_with_overrides_skips_none():
    config = SimulationConfig().with_overrides(ray_count=3, mass=None)
    assert config.ray_count == 3
    assert config.mass == REFERENCE_MASS
    with pytest.raises(ConfigError):
        config.with_overrides(scheme="nope")
