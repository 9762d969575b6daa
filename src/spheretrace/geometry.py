"""Shape primitives.

Distances are exact Euclidean distances for points outside or on the shape
and 0 (rectangle) or negative (circle) inside. Marching only ever queries from
outside, so both are safe sphere-tracing steps.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from spheretrace.backend import ArrayModule, to_numpy
from spheretrace.math_utils import all_finite
from spheretrace.protocols import SDF, Drawable2D


def _as_point(xp: ArrayModule, value: Any, name: str) -> Any:
    p = xp.asarray(value, dtype=xp.float64)
    if p.shape != (2,):
        msg = f"{name} must be a 2D point, got shape {p.shape}"
        raise ValueError(msg)
    if not all_finite(xp, p):
        msg = f"{name} must be finite, got {to_numpy(xp, p).tolist()}"
        raise ValueError(msg)
    return p


@dataclass(frozen=True, slots=True)
class Circle(SDF, Drawable2D):
    """Circle given by center and radius."""

    xp: ArrayModule
    center: Any
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_point(self.xp, self.center, "center"))
        radius = float(self.radius)
        if not math.isfinite(radius) or radius < 0.0:
            msg = f"radius must be finite and non-negative, got {self.radius!r}"
            raise ValueError(msg)
        object.__setattr__(self, "radius", radius)

    def sdf(self, p: Any) -> Any:
        # For p shaped (..., 2) this returns shape (...)
        return self.xp.linalg.norm(p - self.center, axis=-1) - self.radius

    def polyline(self, num: int = 600) -> Any:
        center_np = to_numpy(self.xp, self.center)
        theta = np.linspace(0.0, 2.0 * np.pi, num, dtype=np.float64)
        poly = center_np[None, :] + np.stack(
            [np.cos(theta), np.sin(theta)], axis=-1,
        ) * self.radius
        return self.xp.asarray(poly, dtype=self.xp.float64)


@dataclass(frozen=True, slots=True)
class Rectangle(SDF, Drawable2D):
    """Axis-aligned rectangle spanning min_corner..max_corner.

    The distance is the length of the per-axis overflow
    ``max(max(min - p, p - max), 0)``, so it is 0 anywhere inside and the
    true distance to the nearest edge or corner outside.
    """

    xp: ArrayModule
    min_corner: Any
    max_corner: Any

    def __post_init__(self) -> None:
        lo = _as_point(self.xp, self.min_corner, "min_corner")
        hi = _as_point(self.xp, self.max_corner, "max_corner")
        if not bool(self.xp.all(lo <= hi)):
            msg = (
                f"min_corner must not exceed max_corner, got "
                f"{to_numpy(self.xp, lo).tolist()} > {to_numpy(self.xp, hi).tolist()}"
            )
            raise ValueError(msg)
        object.__setattr__(self, "min_corner", lo)
        object.__setattr__(self, "max_corner", hi)

    def sdf(self, p: Any) -> Any:
        xp = self.xp
        overflow = xp.maximum(xp.maximum(self.min_corner - p, p - self.max_corner), 0.0)
        return xp.linalg.norm(overflow, axis=-1)

    # noinspection PyUnusedLocal
    def polyline(self, num: int = 600) -> Any:
        (x0, y0), (x1, y1) = to_numpy(self.xp, self.min_corner), to_numpy(self.xp, self.max_corner)
        poly = np.array(
            [[x0, y0], [x1, y0], [x1, y1], [x0, y1], [x0, y0]],
            dtype=np.float64,
        )
        return self.xp.asarray(poly, dtype=self.xp.float64)
