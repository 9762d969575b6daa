from spheretrace.raymarch.config import (
    MIN_RAY_DIST,
    MISS_DISTANCE,
    BatchMarchResult,
    RayMarchConfig,
    RayMarchResult,
    Termination,
)
from spheretrace.raymarch.marcher import BatchMarcher, RayMarcher, StepObserver, march

__all__ = [
    "MIN_RAY_DIST",
    "MISS_DISTANCE",
    "BatchMarchResult",
    "BatchMarcher",
    "RayMarchConfig",
    "RayMarchResult",
    "RayMarcher",
    "StepObserver",
    "Termination",
    "march",
]
