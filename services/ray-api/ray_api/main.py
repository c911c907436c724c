from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from gargantua_physics.constants import DT
from gargantua_physics.exceptions import GargantuaError
from gargantua_physics.models import BlackHole
from gargantua_physics.integrators import integrate_trajectory

app = FastAPI(title="Ray API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(GargantuaError)
async def gargantua_error(request, exc: GargantuaError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})

class IntegrateReq(BaseModel):
    mass: float = Field(..., ge=0)
    bh_x: float = 400.0; bh_y: float = 400.0
    x: float; y: float
    vx: float; vy: float
    width: float = 800.0; height: float = 800.0
    steps: int = Field(1000, ge=0, le=100_000)
    dlam: float = Field(DT, gt=0)
    scheme: str = "euler"

@app.post("/integrate")
def integrate(req: IntegrateReq):
    bh = BlackHole(req.bh_x, req.bh_y, req.mass)
    return integrate_trajectory(bh, req.x, req.y, req.vx, req.vy, req.width, req.height,
                                req.steps, req.dlam, req.scheme)
