import os
from dataclasses import dataclass, replace

from .constants import (DEFAULT_RAY_COUNT, DT, FAN_OFFSET, FAN_ORIGIN, FAN_SPREAD,
                        LAUNCH_SPEED, REFERENCE_MASS)
from .exceptions import ConfigError
from .integrators import STEPPERS

@dataclass(frozen=True)
class SimulationConfig:
    ray_count: int = DEFAULT_RAY_COUNT
    mass: float = REFERENCE_MASS  # kg
    dt: float = DT
    speed: float = LAUNCH_SPEED
    origin_x: float = FAN_ORIGIN[0]
    origin_y: float = FAN_ORIGIN[1]
    offset_distance: float = FAN_OFFSET
    spread: float = FAN_SPREAD
    scheme: str = "euler"

    def __post_init__(self):
        if self.ray_count < 0:
            raise ConfigError(f"ray_count must be >= 0, got {self.ray_count}")
        if self.dt <= 0:
            raise ConfigError(f"dt must be positive, got {self.dt}")
        if self.scheme not in STEPPERS:
            raise ConfigError(f"unknown scheme {self.scheme!r}, expected one of {tuple(STEPPERS)}")

    @classmethod
    def from_env(cls, prefix: str = "GARGANTUA_") -> "SimulationConfig":
        def get(name, cast, default):
            raw = os.getenv(prefix + name)
            if raw is None:
                return default
            try:
                return cast(raw)
            except ValueError:
                raise ConfigError(f"{prefix}{name}={raw!r} is not a valid {cast.__name__}") from None

        return cls(
            ray_count=get("RAY_COUNT", int, DEFAULT_RAY_COUNT),
            mass=get("MASS", float, REFERENCE_MASS),
            dt=get("DT", float, DT),
            speed=get("SPEED", float, LAUNCH_SPEED),
            origin_x=get("ORIGIN_X", float, FAN_ORIGIN[0]),
            origin_y=get("ORIGIN_Y", float, FAN_ORIGIN[1]),
            offset_distance=get("OFFSET", float, FAN_OFFSET),
            spread=get("SPREAD", float, FAN_SPREAD),
            scheme=get("SCHEME", str, "euler"),
        )

    def with_overrides(self, **overrides) -> "SimulationConfig":
        """Copy with every non-None override applied (and re-validated)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
