"""2D sphere tracing over a scene of signed-distance shapes."""
from spheretrace.backend import BackendName, get_array_module, to_numpy
from spheretrace.geometry import Circle, Rectangle
from spheretrace.raymarch import (
    MIN_RAY_DIST,
    MISS_DISTANCE,
    BatchMarcher,
    RayMarchConfig,
    RayMarcher,
    RayMarchResult,
    march,
)
from spheretrace.scene import MAX_RAY_DIST, Scene, SceneBounds

__version__ = "0.1.0"

__all__ = [
    "MAX_RAY_DIST",
    "MIN_RAY_DIST",
    "MISS_DISTANCE",
    "BackendName",
    "BatchMarcher",
    "Circle",
    "RayMarchConfig",
    "RayMarchResult",
    "RayMarcher",
    "Rectangle",
    "Scene",
    "SceneBounds",
    "get_array_module",
    "march",
    "to_numpy",
]
