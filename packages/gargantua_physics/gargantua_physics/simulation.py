import logging
import math
import threading
from concurrent.futures import Executor
from typing import List, Optional

import numpy as np

from .config import SimulationConfig
from .constants import BH_MASS, VERSION, schwarzschild_radius
from .exceptions import ConfigError, DegenerateRayError
from .integrators import initialize_velocity, step
from .models import BlackHole, Ray

logger = logging.getLogger(__name__)

def spawn_ray(index: int, count: int, bh: BlackHole, config: SimulationConfig) -> Ray:
    """Ray ``index`` of a ``count``-ray fan, launched toward the hole.

    Rays sit on an arc of radius ``config.offset_distance`` around the fan
    origin, spread evenly over ``config.spread`` radians.
    """
    spread_angle = index / (count - 1) * config.spread if count > 1 else 0.0
    x = config.origin_x + math.cos(spread_angle) * config.offset_distance
    y = config.origin_y + math.sin(spread_angle) * config.offset_distance

    dx = bh.x - x
    dy = bh.y - y
    distance = math.hypot(dx, dy)
    if distance == 0.0:
        raise DegenerateRayError(f"fan ray {index} spawns on the black hole centre")

    ray = Ray(x, y)
    initialize_velocity(ray, bh, dx / distance * config.speed, dy / distance * config.speed)
    return ray


class Simulation:
    """One black hole and the rays it bends, advanced a frame at a time.

    ``update`` and every mutator hold the same lock, so a mass change or a
    resize always lands between frames.
    """

    def __init__(self, width: float, height: float, config: Optional[SimulationConfig] = None):
        self.width = width
        self.height = height
        self.config = config or SimulationConfig()
        self.black_hole = BlackHole(width / 2.0, height / 2.0, self.config.mass)
        self.rays: List[Ray] = self._fan(self.config.ray_count)
        self._lock = threading.RLock()
        logger.info("Initializing simulation with size %sx%s, %d rays, r_s=%.3f",
                    width, height, len(self.rays), self.black_hole.r_s)

    def _fan(self, count: int, start: int = 0) -> List[Ray]:
        return [spawn_ray(i, count, self.black_hole, self.config) for i in range(start, count)]

    def _step(self, ray: Ray) -> None:
        step(ray, self.black_hole, self.width, self.height, self.config.dt, self.config.scheme)

    def update(self, executor: Optional[Executor] = None) -> None:
        # Rays are stepped in place, so the executor must share memory (threads).
        with self._lock:
            if executor is None:
                for ray in self.rays:
                    self._step(ray)
            else:
                list(executor.map(self._step, self.rays))

    def reset(self) -> None:
        with self._lock:
            self.rays = self._fan(len(self.rays))
        logger.info("Resetting simulation (%d rays)", len(self.rays))

    def set_ray_count(self, count: int) -> None:
        if count < 0:
            raise ConfigError(f"ray count must be >= 0, got {count}")
        with self._lock:
            current = len(self.rays)
            if count > current:
                self.rays.extend(self._fan(count, start=current))
            else:
                del self.rays[count:]
        logger.info("Updating ray count from %d to %d", current, count)

    def set_black_hole_mass(self, mass: float) -> None:
        # Rays already in flight keep the e they were launched with.
        with self._lock:
            self.black_hole.set_mass(mass)
        logger.info("Updating black hole mass to %s kg (r_s=%.3f)", mass, self.black_hole.r_s)

    @property
    def ray_count(self) -> int:
        return len(self.rays)

    def ray_positions(self) -> np.ndarray:
        """Flat ``[x, y, live, ...]``; ``live`` is 1.0 for active rays, 0.0 for disabled ones."""
        with self._lock:
            values = [v for ray in self.rays for v in (ray.x, ray.y, 0.0 if ray.disabled else 1.0)]
        return np.array(values, dtype=np.float64)

    def black_hole_state(self) -> np.ndarray:
        with self._lock:
            bh = self.black_hole
            return np.array([bh.x, bh.y, bh.r_s], dtype=np.float64)

    def initial_ray_positions(self) -> np.ndarray:
        """Flat ``[x, y, dr, dphi, ...]``, for inspecting launch conditions."""
        with self._lock:
            values = [v for ray in self.rays for v in (ray.x, ray.y, ray.dr, ray.dphi)]
        return np.array(values, dtype=np.float64)

    def trail_data(self) -> List[np.ndarray]:
        with self._lock:
            return [np.asarray(ray.trail, dtype=np.float32).reshape(-1, 2) for ray in self.rays]

    def info(self) -> str:
        return (f"Gargantua Black Hole Simulation v{VERSION}\n"
                f"Schwarzschild Radius: {schwarzschild_radius(BH_MASS)} meters")

def init_simulation(width: float, height: float, config: Optional[SimulationConfig] = None) -> Simulation:
    return Simulation(width, height, config)
