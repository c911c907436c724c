from collections import deque
from dataclasses import dataclass, field
from typing import Deque, NamedTuple, Tuple

from .constants import TRAIL_CAP, schwarzschild_radius

Point = Tuple[float, float]

@dataclass
class BlackHole:
    x: float; y: float
    mass: float  # kg
    r_s: float = field(init=False)

    def __post_init__(self):
        self.r_s = schwarzschild_radius(self.mass)

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def set_mass(self, mass: float) -> None:
        # Sign is not checked; non-positive masses give a non-physical r_s.
        self.mass = mass
        self.r_s = schwarzschild_radius(mass)

    def metric_factor(self, r: float) -> float:
        """``1 - r_s/r``; singular at the horizon."""
        return 1.0 - self.r_s / r


class PolarState(NamedTuple):
    r: float
    phi: float
    dr: float
    dphi: float
    e: float


def _new_trail() -> Deque[Point]:
    return deque(maxlen=TRAIL_CAP)


@dataclass
class Ray:
    """One light ray.

    ``x``/``y`` are authoritative between steps; ``r``/``phi`` are re-read from
    them at the start of every step and then advanced by the integrator.
    ``e`` is fixed by ``initialize_velocity`` and never recomputed.
    """
    x: float; y: float
    r: float = 0.0; phi: float = 0.0
    dr: float = 0.0; dphi: float = 0.0
    e: float = 1.0
    disabled: bool = False
    trail: Deque[Point] = field(default_factory=_new_trail)

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def polar(self) -> PolarState:
        return PolarState(self.r, self.phi, self.dr, self.dphi, self.e)

    def push_back(self) -> None:
        self.trail.append((self.x, self.y))
