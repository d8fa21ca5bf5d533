from .calculations import LandingCalculations
from .constants import ReachabilityConstants
from .coordinates import GeometryKernel

__all__ = [
    "LandingCalculations",
    "ReachabilityConstants",
    "GeometryKernel"
]
