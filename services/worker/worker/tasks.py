import logging
import os
from typing import Optional

from celery import Celery
from gargantua_physics.config import SimulationConfig
from gargantua_physics.constants import DT
from gargantua_physics.integrators import integrate_trajectory
from gargantua_physics.models import BlackHole
from gargantua_physics.simulation import init_simulation

CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/0")
CELERY_BACKEND_URL = os.getenv("CELERY_BACKEND_URL", "redis://redis:6379/1")

celery = Celery("gargantua", broker=CELERY_BROKER_URL, backend=CELERY_BACKEND_URL)
logger = logging.getLogger(__name__)

@celery.task
def integrate_task(mass, x, y, vx, vy, width=800.0, height=800.0, bh_x=400.0, bh_y=400.0,
                   steps=50000, dlam=DT, scheme="euler"):
    bh = BlackHole(bh_x, bh_y, mass)
    return integrate_trajectory(bh, x, y, vx, vy, width, height, steps, dlam, scheme)

@celery.task
def run_simulation_task(width, height, frames, mass: Optional[float] = None,
                        ray_count: Optional[int] = None, scheme: Optional[str] = None):
    """Run a fresh simulation for ``frames`` frames and return its final snapshots."""
    config = SimulationConfig.from_env().with_overrides(mass=mass, ray_count=ray_count, scheme=scheme)
    sim = init_simulation(width, height, config)
    for _ in range(frames):
        sim.update()
    logger.info("finished %d frames, %d of %d rays live", frames,
                sum(not ray.disabled for ray in sim.rays), sim.ray_count)
    return {
        "rays": sim.ray_positions().tolist(),
        "black_hole": sim.black_hole_state().tolist(),
        "trails": [trail.tolist() for trail in sim.trail_data()],
    }
