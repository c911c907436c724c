class GargantuaError(Exception):
    """Base class for errors raised by gargantua_physics."""


class ConfigError(GargantuaError, ValueError):
    pass


class DegenerateRayError(GargantuaError, ValueError):
    """A ray was launched at r = 0 or exactly on the horizon."""
