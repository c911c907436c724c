import logging
import os
import threading
import uuid
from typing import Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from gargantua_physics.config import SimulationConfig
from gargantua_physics.exceptions import GargantuaError
from gargantua_physics.simulation import Simulation, init_simulation

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
MAX_RAYS = int(os.getenv("MAX_RAYS", "5000"))
MAX_FRAMES = int(os.getenv("MAX_FRAMES", "10000"))
MAX_SIMULATIONS = int(os.getenv("MAX_SIMULATIONS", "64"))

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


class StoreFullError(RuntimeError):
    pass


class SimulationStore:
    """Live simulations keyed by the handle returned to the client."""

    def __init__(self, max_size: int = MAX_SIMULATIONS):
        self.max_size = max_size
        self._sims: Dict[str, Simulation] = {}
        self._lock = threading.Lock()

    def add(self, sim: Simulation) -> str:
        sim_id = uuid.uuid4().hex
        with self._lock:
            if len(self._sims) >= self.max_size:
                raise StoreFullError(f"simulation limit of {self.max_size} reached")
            self._sims[sim_id] = sim
        return sim_id

    def get(self, sim_id: str) -> Simulation:
        with self._lock:
            return self._sims[sim_id]

    def remove(self, sim_id: str) -> None:
        with self._lock:
            del self._sims[sim_id]

    def __len__(self):
        return len(self._sims)

    @property
    def full(self) -> bool:
        return len(self._sims) >= self.max_size


store = SimulationStore()

def get_store() -> SimulationStore:
    return store

def get_simulation(sim_id: str, store: SimulationStore = Depends(get_store)) -> Simulation:
    try:
        return store.get(sim_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"simulation {sim_id} not found")


app = FastAPI(title="Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(GargantuaError)
async def gargantua_error(request, exc: GargantuaError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


class InitReq(BaseModel):
    width: int = Field(800, gt=0)
    height: int = Field(800, gt=0)
    ray_count: Optional[int] = Field(None, ge=0, le=MAX_RAYS)
    mass: Optional[float] = Field(None, ge=0)
    scheme: Optional[str] = None

class MassReq(BaseModel):
    mass: float = Field(..., ge=0)

class RayCountReq(BaseModel):
    count: int = Field(..., ge=0, le=MAX_RAYS)


@app.post("/simulations", status_code=201)
def create_simulation(req: InitReq, store: SimulationStore = Depends(get_store)):
    config = SimulationConfig.from_env().with_overrides(
        ray_count=req.ray_count, mass=req.mass, scheme=req.scheme)
    if store.full:
        raise HTTPException(status_code=429, detail=f"simulation limit of {store.max_size} reached")
    try:
        sim_id = store.add(init_simulation(req.width, req.height, config))
    except StoreFullError as exc:
        raise HTTPException(status_code=429, detail=str(exc))
    logger.info("created simulation %s", sim_id)
    return {"id": sim_id}

@app.delete("/simulations/{sim_id}", status_code=204)
def delete_simulation(sim_id: str, store: SimulationStore = Depends(get_store)):
    try:
        store.remove(sim_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"simulation {sim_id} not found")

@app.post("/simulations/{sim_id}/update")
def update(frames: int = Query(1, ge=1, le=MAX_FRAMES), sim: Simulation = Depends(get_simulation)):
    for _ in range(frames):
        sim.update()
    return {"frames": frames, "live": sum(not ray.disabled for ray in sim.rays)}

@app.get("/simulations/{sim_id}/rays")
def ray_positions(sim: Simulation = Depends(get_simulation)):
    return sim.ray_positions().tolist()

@app.get("/simulations/{sim_id}/black-hole")
def black_hole(sim: Simulation = Depends(get_simulation)):
    return sim.black_hole_state().tolist()

@app.get("/simulations/{sim_id}/count")
def ray_count(sim: Simulation = Depends(get_simulation)):
    return sim.ray_count

@app.get("/simulations/{sim_id}/info")
def info(sim: Simulation = Depends(get_simulation)):
    return sim.info()

@app.get("/simulations/{sim_id}/initial-positions")
def initial_positions(sim: Simulation = Depends(get_simulation)):
    return sim.initial_ray_positions().tolist()

@app.get("/simulations/{sim_id}/trails")
def trails(sim: Simulation = Depends(get_simulation)):
    return [trail.tolist() for trail in sim.trail_data()]

@app.put("/simulations/{sim_id}/mass")
def set_mass(req: MassReq, sim: Simulation = Depends(get_simulation)):
    sim.set_black_hole_mass(req.mass)
    return sim.black_hole_state().tolist()

@app.put("/simulations/{sim_id}/ray-count")
def set_ray_count(req: RayCountReq, sim: Simulation = Depends(get_simulation)):
    sim.set_ray_count(req.count)
    return sim.ray_count

@app.post("/simulations/{sim_id}/reset")
def reset(sim: Simulation = Depends(get_simulation)):
    sim.reset()
    return sim.ray_count
