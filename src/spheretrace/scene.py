from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from spheretrace.protocols import SDF

if TYPE_CHECKING:
    from spheretrace.backend import ArrayModule
    from spheretrace.protocols import Drawable2D

logger = logging.getLogger(__name__)

# Diagonal of a 1920x1080 display, i.e. sqrt(1920^2 + 1080^2).
MAX_RAY_DIST: float = 2203.0


@dataclass(frozen=True, slots=True)
class SceneBounds:
    """Global scene limits.

    far_distance:
        Travel budget of a ray. A march step larger than this means nothing
        lies ahead within the scene and the ray is a miss.
    """

    far_distance: float = MAX_RAY_DIST

    def __post_init__(self) -> None:
        far = float(self.far_distance)
        if not math.isfinite(far) or far <= 0.0:
            msg = f"far_distance must be finite and positive, got {self.far_distance!r}"
            raise ValueError(msg)
        object.__setattr__(self, "far_distance", far)

    @classmethod
    def from_extent(cls, width: float, height: float) -> SceneBounds:
        """Bounds whose travel budget is the diagonal of a width x height box."""
        return cls(far_distance=math.hypot(float(width), float(height)))


@dataclass(frozen=True, slots=True)
class Scene(SDF):
    """Distance field over an ordered, non-empty collection of shapes.

    The scene is immutable and may be shared read-only by any number of rays.
    """

    xp: ArrayModule
    shapes: tuple[SDF, ...]
    bounds: SceneBounds = field(default_factory=SceneBounds)

    def __post_init__(self) -> None:
        shapes = tuple(self.shapes)
        if not shapes:
            msg = "Scene requires at least one shape"
            raise ValueError(msg)
        for i, shape in enumerate(shapes):
            if not callable(getattr(shape, "sdf", None)):
                msg = f"shape {i} ({type(shape).__name__}) has no sdf method"
                raise ValueError(msg)
        object.__setattr__(self, "shapes", shapes)
        logger.debug(
            "scene built with %d shapes, far_distance=%.3f",
            len(shapes), self.bounds.far_distance,
        )

    @property
    def drawables(self) -> list[Drawable2D]:
        return [s for s in self.shapes if hasattr(s, "polyline")]

    def min_distance(self, point: Any) -> float:
        """Distance from point to the nearest shape surface."""
        return min(float(shape.sdf(point)) for shape in self.shapes)

    def distance(self, p: Any) -> float:
        return self.min_distance(p)

    def nearest(self, point: Any) -> tuple[int, float]:
        """Index of the closest shape and its distance; first shape wins ties."""
        best_index, best = 0, float(self.shapes[0].sdf(point))
        for i, shape in enumerate(self.shapes[1:], start=1):
            d = float(shape.sdf(point))
            if d < best:
                best_index, best = i, d
        return best_index, best

    def sdf(self, p: Any) -> Any:
        # For p shaped (..., 2) this returns shape (...)
        dists = self.xp.stack([shape.sdf(p) for shape in self.shapes], axis=0)
        return self.xp.min(dists, axis=0)
