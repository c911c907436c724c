import logging
import math
from typing import Callable, Dict, List

from .constants import DT
from .exceptions import ConfigError, DegenerateRayError
from .models import BlackHole, Point, PolarState, Ray

logger = logging.getLogger(__name__)

def to_polar(ray: Ray, bh: BlackHole) -> None:
    dx = ray.x - bh.x
    dy = ray.y - bh.y
    ray.r = math.hypot(dx, dy)
    ray.phi = math.atan2(dy, dx)

def initialize_velocity(ray: Ray, bh: BlackHole, vx: float, vy: float) -> None:
    """Project a Cartesian launch velocity onto the local radial/angular basis.

    Freezes ``ray.e`` at the metric factor of the launch radius.
    """
    to_polar(ray, bh)
    if ray.r == 0.0:
        raise DegenerateRayError(f"ray launched at the black hole centre {bh.position}")
    if ray.r == bh.r_s:
        raise DegenerateRayError(f"ray launched on the horizon r = r_s = {bh.r_s}")

    cos_phi = math.cos(ray.phi)
    sin_phi = math.sin(ray.phi)
    ray.dr = vx * cos_phi + vy * sin_phi
    ray.dphi = (-vx * sin_phi + vy * cos_phi) / ray.r
    ray.e = bh.metric_factor(ray.r)

def geodesic_rhs(state: PolarState, rs: float):
    # Undefined at r == rs; callers run the survival check first.
    r, dr, dphi, E = state.r, state.dr, state.dphi, state.e
    f = 1.0 - rs / r
    dt_dlam = E / f
    rhs0 = dr
    rhs1 = dphi
    rhs2 = -(rs / (2.0 * r * r)) * f * (dt_dlam * dt_dlam) + (rs / (2.0 * r * r * f)) * (dr * dr) + (r - rs) * (dphi * dphi)
    rhs3 = -2.0 * dr * dphi / r
    return rhs0, rhs1, rhs2, rhs3

def euler_step(state: PolarState, dlam: float, rs: float) -> PolarState:
    _, _, d2r, d2phi = geodesic_rhs(state, rs)
    dr = state.dr + d2r * dlam
    dphi = state.dphi + d2phi * dlam
    return PolarState(state.r + dr * dlam, state.phi + dphi * dlam, dr, dphi, state.e)

def rk4_step(state: PolarState, dlam: float, rs: float) -> PolarState:
    """Classic four-stage step.

    An intermediate stage that reaches ``r <= rs`` is returned as-is instead
    of being evaluated; the survival check in the next ``step`` sees it.
    """
    y0 = (state.r, state.phi, state.dr, state.dphi)

    def add(a, b, f): return PolarState(*(a[i] + f*b[i] for i in range(4)), state.e)
    k = [geodesic_rhs(state, rs)]
    for frac in (0.5, 0.5, 1.0):
        stage = add(y0, k[-1], dlam * frac)
        if stage.r <= rs:
            return stage
        k.append(geodesic_rhs(stage, rs))
    k1, k2, k3, k4 = k

    return PolarState(
        *(y0[i] + (dlam / 6.0) * (k1[i] + 2*k2[i] + 2*k3[i] + k4[i]) for i in range(4)),
        state.e,
    )

STEPPERS: Dict[str, Callable[[PolarState, float, float], PolarState]] = {
    "euler": euler_step,
    "rk4": rk4_step,
}

def get_stepper(scheme: str):
    try:
        return STEPPERS[scheme]
    except KeyError:
        raise ConfigError(f"unknown scheme {scheme!r}, expected one of {tuple(STEPPERS)}") from None

def in_bounds(ray: Ray, width: float, height: float) -> bool:
    return 0.0 <= ray.x <= width and 0.0 <= ray.y <= height

def step(ray: Ray, bh: BlackHole, width: float, height: float,
         dlam: float = DT, scheme: str = "euler") -> None:
    """Advance ``ray`` by one affine step, or disable it.

    Reads only ``bh``; touches no state other than ``ray``, so rays may be
    stepped concurrently against the same black hole.
    """
    if ray.disabled:
        return
    to_polar(ray, bh)

    captured = ray.r <= bh.r_s
    if captured or not in_bounds(ray, width, height):
        ray.disabled = True
        if ray.trail:
            ray.trail.pop()
        logger.debug("ray disabled at (%.3f, %.3f): %s", ray.x, ray.y,
                     "horizon" if captured else "out of bounds")
        return

    new = get_stepper(scheme)(ray.polar, dlam, bh.r_s)
    ray.r, ray.phi, ray.dr, ray.dphi = new.r, new.phi, new.dr, new.dphi
    ray.x = bh.x + ray.r * math.cos(ray.phi)
    ray.y = bh.y + ray.r * math.sin(ray.phi)
    ray.push_back()

def integrate_trajectory(bh: BlackHole, x: float, y: float, vx: float, vy: float,
                         width: float, height: float, steps: int = 1000,
                         dlam: float = DT, scheme: str = "euler"):
    """Run a single ray until it is disabled or ``steps`` steps have been taken.

    Unlike ``Ray.trail`` the returned path is not capped.
    """
    get_stepper(scheme)
    ray = Ray(x, y)
    initialize_velocity(ray, bh, vx, vy)

    path: List[Point] = [(x, y)]
    taken = 0
    for _ in range(steps):
        step(ray, bh, width, height, dlam, scheme)
        if ray.disabled:
            path.pop()
            break
        path.append(ray.position)
        taken += 1
    return {
        "trail": path,
        "hit_horizon": ray.disabled and ray.r <= bh.r_s,
        "disabled": ray.disabled,
        "rs": bh.r_s,
        "steps": taken,
    }
