from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from spheretrace.math_utils import all_finite, direction_towards, normalize, normalize_batch
from spheretrace.raymarch.config import (
    MISS_DISTANCE,
    BatchMarchResult,
    RayMarchConfig,
    RayMarchResult,
    Termination,
)

if TYPE_CHECKING:
    from spheretrace.backend import ArrayModule
    from spheretrace.scene import Scene

logger = logging.getLogger(__name__)

# Called once per step with (position, step, traveled) before the termination test.
StepObserver = Callable[[Any, float, float], None]


def _as_ray_vector(xp: ArrayModule, value: Any, name: str) -> Any:
    v = xp.asarray(value, dtype=xp.float64)
    if v.shape != (2,):
        msg = f"ray {name} must be a 2D vector, got shape {v.shape}"
        raise ValueError(msg)
    return v


class RayMarcher:
    """Sphere tracer for a single ray against a scene."""

    ZERO_DIRECTION_EPS: float = 1e-12

    def __init__(
            self,
            xp: ArrayModule,
            config: RayMarchConfig,
            scene: Scene,
            observer: StepObserver | None = None,
    ) -> None:
        """Initialise the marcher."""
        self.xp = xp
        self.cfg = config
        self.scene = scene
        self.observer = observer

    def _result(
            self,
            termination: Termination,
            traveled: float,
            steps: int,
            points: list[Any],
    ) -> RayMarchResult:
        hit = termination == "hit"
        distance = traveled if hit else MISS_DISTANCE
        logger.debug("march ended: %s after %d steps, distance=%.6f", termination, steps, distance)
        return RayMarchResult(
            hit=hit,
            distance=distance,
            termination=termination,
            steps=steps,
            points=self.xp.stack(points),
        )

    def trace(self, origin: Any, direction: Any) -> RayMarchResult:
        """Trace using the scene provided at construction time."""
        xp = self.xp
        scene = self.scene
        eps = self.cfg.eps
        far = scene.bounds.far_distance

        p = _as_ray_vector(xp, origin, "origin").copy()
        d = _as_ray_vector(xp, direction, "direction")

        if not (all_finite(xp, p) and all_finite(xp, d)):
            logger.debug("rejecting non-finite ray origin=%s direction=%s", p, d)
            return self._result("invalid", 0.0, 0, [p.copy()])
        if float(xp.linalg.norm(d)) <= self.ZERO_DIRECTION_EPS:
            logger.debug("rejecting zero-length ray direction")
            return self._result("invalid", 0.0, 0, [p.copy()])
        d = normalize(xp, d)

        points: list[Any] = [p.copy()]
        traveled = 0.0

        for i in range(self.cfg.step_limit(far)):
            step = scene.min_distance(p)
            if self.observer is not None:
                self.observer(p.copy(), step, traveled)

            if step < eps:
                return self._result("hit", traveled, i, points)
            if step > far:
                return self._result("far", traveled, i, points)

            p = p + d * step
            traveled += step
            points.append(p.copy())

        return self._result("max_steps", traveled, len(points) - 1, points)

    def march(self, origin: Any, direction: Any) -> tuple[bool, float]:
        """Return (hit, distance); distance is MISS_DISTANCE on a miss."""
        return self.trace(origin, direction).as_tuple()

    def trace_towards(self, origin: Any, target: Any) -> RayMarchResult:
        """Trace from origin in the direction of an aim point."""
        xp = self.xp
        o = _as_ray_vector(xp, origin, "origin")
        t = _as_ray_vector(xp, target, "target")
        if not (all_finite(xp, o) and all_finite(xp, t)):
            return self.trace(o, xp.full(2, xp.nan))
        return self.trace(o, direction_towards(xp, o, t))


def march(
        scene: Scene,
        origin: Any,
        direction: Any,
        config: RayMarchConfig | None = None,
) -> tuple[bool, float]:
    """March one ray through scene and return (hit, distance)."""
    marcher = RayMarcher(xp=scene.xp, config=config or RayMarchConfig(), scene=scene)
    return marcher.march(origin, direction)


class BatchMarcher:
    """Vectorized sphere tracer marching many rays in lock-step."""

    def __init__(self, xp: ArrayModule, config: RayMarchConfig, scene: Scene) -> None:
        """Initialise the marcher."""
        self.xp = xp
        self.config = config
        self.scene = scene

    def march(self, origins: Any, directions: Any) -> BatchMarchResult:
        """March.

        origins: (2,) shared by every ray, or (N,2)
        directions: (N,2), need not be normalized
        """
        xp = self.xp
        cfg = self.config
        far = float(self.scene.bounds.far_distance)

        rd = xp.asarray(directions, dtype=xp.float64)
        if rd.ndim != 2 or rd.shape[-1] != 2:
            msg = f"directions must be shaped (N, 2), got {rd.shape}"
            raise ValueError(msg)
        n = rd.shape[0]

        o = xp.asarray(origins, dtype=xp.float64)
        if o.shape not in ((2,), (n, 2)):
            msg = f"origins must be shaped (2,) or ({n}, 2), got {o.shape}"
            raise ValueError(msg)
        p = xp.broadcast_to(o, (n, 2)).copy()

        norms = xp.linalg.norm(rd, axis=-1)
        invalid = ~(
            xp.all(xp.isfinite(p), axis=-1)
            & xp.all(xp.isfinite(rd), axis=-1)
            & (norms > RayMarcher.ZERO_DIRECTION_EPS)
        )
        # keep invalid rows out of the arithmetic entirely
        p = xp.where(invalid[:, None], 0.0, p)
        rd = normalize_batch(xp, xp.where(invalid[:, None], 0.0, rd))

        hit = xp.zeros(n, dtype=bool)
        done = invalid.copy()
        traveled = xp.zeros(n, dtype=xp.float64)
        steps = xp.zeros(n, dtype=xp.int64)

        for _ in range(cfg.step_limit(far)):
            active = ~done
            if not bool(xp.any(active)):
                break

            d_obj = self.scene.sdf(p)  # (N,)
            hit = hit | (active & (d_obj < cfg.eps))
            done = done | hit | (active & (d_obj > far))

            active = ~done
            ds = xp.where(active, d_obj, 0.0)
            p = p + rd * ds[:, None]
            traveled = traveled + ds
            steps = steps + active.astype(xp.int64)

        distance = xp.where(hit, traveled, MISS_DISTANCE)
        logger.debug(
            "batch march of %d rays: %d hit, %d invalid",
            n, int(xp.sum(hit)), int(xp.sum(invalid)),
        )
        return BatchMarchResult(hit=hit, distance=distance, steps=steps, invalid=invalid)
