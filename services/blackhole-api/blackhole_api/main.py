from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from gargantua_physics.constants import BH_MASS
from gargantua_physics.models import BlackHole

app = FastAPI(title="Black Hole API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

class BHReq(BaseModel):
    x: float = 400.0; y: float = 400.0
    mass: float = Field(..., ge=0)
    radii: List[float] = []

def describe(bh: BlackHole, radii: List[float] = ()):
    # No metric factor at or inside the horizon.
    factors: List[Optional[float]] = [bh.metric_factor(r) if r > bh.r_s else None for r in radii]
    return {
        "position": list(bh.position),
        "mass": bh.mass,
        "schwarzschild_radius": bh.r_s,
        "metric_factor": factors,
    }

@app.post("/derived")
def derived(req: BHReq):
    return describe(BlackHole(req.x, req.y, req.mass), req.radii)

@app.get("/reference")
def reference():
    return describe(BlackHole(0.0, 0.0, BH_MASS))
