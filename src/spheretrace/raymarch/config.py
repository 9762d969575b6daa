from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal

MIN_RAY_DIST: float = 1e-3

# Reported as the distance of every ray that does not hit anything.
MISS_DISTANCE: float = -1.0


@dataclass(frozen=True, slots=True)
class RayMarchConfig:
    """Marching tolerances.

    eps:
        Hit threshold (MIN_RAY_DIST). A step below it ends the march on a surface.
    max_steps:
        Hard iteration cap. ``None`` derives ``ceil(far_distance / eps) + 1``
        from the scene bounds.
    """

    eps: float = MIN_RAY_DIST
    max_steps: int | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.eps) or self.eps <= 0.0:
            msg = f"eps must be finite and positive, got {self.eps!r}"
            raise ValueError(msg)
        if self.max_steps is not None and self.max_steps < 1:
            msg = f"max_steps must be at least 1, got {self.max_steps!r}"
            raise ValueError(msg)

    def step_limit(self, far_distance: float) -> int:
        if self.max_steps is not None:
            return int(self.max_steps)
        return math.ceil(far_distance / self.eps) + 1


Termination = Literal["hit", "far", "max_steps", "invalid"]


@dataclass(frozen=True, slots=True)
class RayMarchResult:
    hit: bool
    distance: float
    termination: Termination
    steps: int
    points: Any

    def as_tuple(self) -> tuple[bool, float]:
        return self.hit, self.distance


@dataclass(frozen=True, slots=True)
class BatchMarchResult:
    """Per-ray outcome of a batch march, all arrays shaped (N,).

    distance holds MISS_DISTANCE for every ray that did not hit.
    """

    hit: Any
    distance: Any
    steps: Any
    invalid: Any
