from .constants import VERSION, c, G, BH_MASS, REFERENCE_MASS, DT, TRAIL_CAP, schwarzschild_radius
from .config import SimulationConfig
from .exceptions import GargantuaError, ConfigError, DegenerateRayError
from .models import BlackHole, PolarState, Ray
from .integrators import geodesic_rhs, euler_step, rk4_step, initialize_velocity, step, integrate_trajectory
from .simulation import Simulation, init_simulation, spawn_ray
__version__ = VERSION
__all__ = ["c","G","BH_MASS","REFERENCE_MASS","DT","TRAIL_CAP","schwarzschild_radius",
           "SimulationConfig","GargantuaError","ConfigError","DegenerateRayError",
           "BlackHole","PolarState","Ray",
           "geodesic_rhs","euler_step","rk4_step","initialize_velocity","step","integrate_trajectory",
           "Simulation","init_simulation","spawn_ray"]
