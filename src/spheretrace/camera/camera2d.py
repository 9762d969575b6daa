from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from spheretrace.math_utils import direction_from_angle, normalize

if TYPE_CHECKING:
    from spheretrace.backend import ArrayModule


@dataclass(frozen=True, slots=True)
class Camera2D:
    """Simple 2D pinhole camera that emits a fan of rays.

    Coordinate convention:
    - points are (x, y) in display units
    - angles are measured in radians from +x-axis toward +y axis (atan2)

    Parameters
    ----------
    position:
        Camera location (x, y).
    forward:
        Direction vector where the camera is looking (x, y).
        Does not need to be normalized.
    fov_deg:
        Full field of view in degrees, in (0, 360].
    num_rays:
        Number of rays across the FOV. A single ray points along forward.

    """

    position: Any
    forward: Any
    fov_deg: float
    num_rays: int

    def __post_init__(self) -> None:
        if not 0.0 < float(self.fov_deg) <= 360.0:
            msg = f"fov_deg must be in (0, 360], got {self.fov_deg!r}"
            raise ValueError(msg)
        if int(self.num_rays) < 1:
            msg = f"num_rays must be at least 1, got {self.num_rays!r}"
            raise ValueError(msg)

    def ray_directions(self, xp: ArrayModule) -> list[Any]:
        """Generate unit direction vectors spanning the camera FOV."""
        forward = normalize(xp, xp.asarray(self.forward, dtype=xp.float64))
        theta0 = float(xp.arctan2(forward[1], forward[0]))

        if self.num_rays == 1:
            return [direction_from_angle(xp, theta0)]

        half_fov = np.deg2rad(self.fov_deg) * 0.5
        offsets = np.linspace(-half_fov, half_fov, self.num_rays, dtype=np.float64)
        return [direction_from_angle(xp, theta0 + float(da)) for da in offsets]

    def ray_directions_array(self, xp: ArrayModule) -> Any:
        """Same directions stacked as (num_rays, 2) for the batch marcher."""
        return xp.stack(self.ray_directions(xp))

    @classmethod
    def from_look_at(
            cls,
            position: Any,
            look_at: Any,
            fov_deg: float,
            num_rays: int,
            xp: ArrayModule,
    ) -> Camera2D:
        """Define camera by a world-space target point."""
        pos = xp.asarray(position, dtype=xp.float64)
        target = xp.asarray(look_at, dtype=xp.float64)
        forward = target - pos
        return cls(position=pos, forward=forward, fov_deg=fov_deg, num_rays=num_rays)
