from __future__ import annotations

import math
from typing import Any


def normalize(xp: Any, v: Any, eps: float = 1e-12) -> Any:
    """Normalize vector with division-by-zero guard."""
    n = xp.linalg.norm(v)
    if float(n) <= eps:
        return v
    return v / n


def normalize_batch(xp: Any, v: Any) -> Any:
    """Normalize vector with division-by-zero guard."""
    n = xp.linalg.norm(v, axis=-1, keepdims=True)
    n = xp.maximum(n, xp.asarray(1e-12, dtype=xp.float64))
    return v / n


def all_finite(xp: Any, v: Any) -> bool:
    """Return True if every component of v is finite."""
    return bool(xp.all(xp.isfinite(v)))


def direction_from_angle(xp: Any, angle: float) -> Any:
    """Unit vector at `angle` radians from the +x axis."""
    return xp.asarray([math.cos(angle), math.sin(angle)], dtype=xp.float64)


def direction_towards(xp: Any, origin: Any, target: Any) -> Any:
    """Unit direction from origin to an aim point, via atan2.

    An aim point equal to the origin yields (1, 0) since atan2(0, 0) == 0.
    """
    dif = xp.asarray(target, dtype=xp.float64) - xp.asarray(origin, dtype=xp.float64)
    return direction_from_angle(xp, math.atan2(float(dif[1]), float(dif[0])))
