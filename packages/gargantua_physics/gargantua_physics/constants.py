VERSION = "0.1.0"

G = 6.6743e-11
c = 299_792_458.0

BH_MASS = 3e28  # kg
REFERENCE_MASS = 2.0 * BH_MASS

DT = 0.1
TRAIL_CAP = 200

DEFAULT_RAY_COUNT = 50
FAN_ORIGIN = (50.0, 50.0)
FAN_OFFSET = 120.0
FAN_SPREAD = 2.0  # radians
LAUNCH_SPEED = 10.0

def schwarzschild_radius(mass: float) -> float:
    return 2.0 * G * mass / (c * c)
