from __future__ import annotations

import logging

from spheretrace.backend import BackendName, get_array_module, to_numpy
from spheretrace.camera import Camera2D
from spheretrace.geometry import Circle, Rectangle
from spheretrace.raymarch.config import RayMarchConfig
from spheretrace.raymarch.marcher import BatchMarcher, RayMarcher
from spheretrace.scene import Scene, SceneBounds
from spheretrace.viz.plot2d import Plotter2D

logger = logging.getLogger(__name__)

# ============================================================
# TOP-LEVEL PARAMETERS (extract everything tweakable here)
# ============================================================

# Run
BACKEND: BackendName = "auto"

# Scene
WIDTH = 1920.0
HEIGHT = 1080.0

# Camera
CAMERA_POS = [960.0, 540.0]
CAMERA_LOOK_AT = [1000.0, 1000.0]
CAMERA_FOV_DEG = 360.0
CAMERA_NUM_RAYS = 72

# Plot
PLOT_XLIM = (0.0, WIDTH)
PLOT_YLIM = (0.0, HEIGHT)
SAVE_PATH: str | None = None


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    xp = get_array_module(BACKEND)

    scene = Scene(
        xp=xp,
        shapes=(
            Rectangle(xp=xp, min_corner=[20.0, 20.0], max_corner=[300.0, 300.0]),
            Rectangle(xp=xp, min_corner=[1400.0, 300.0], max_corner=[1700.0, 400.0]),
            Circle(xp=xp, center=[1000.0, 1000.0], radius=40.0),
        ),
        bounds=SceneBounds.from_extent(WIDTH, HEIGHT),
    )

    camera = Camera2D.from_look_at(
        CAMERA_POS, CAMERA_LOOK_AT, fov_deg=CAMERA_FOV_DEG, num_rays=CAMERA_NUM_RAYS, xp=xp,
    )
    config = RayMarchConfig()

    # Whole fan in one vectorized pass, for the summary.
    batch = BatchMarcher(xp=xp, config=config, scene=scene).march(camera.position, camera.ray_directions_array(xp))
    logger.info("%d of %d rays hit", int(xp.sum(batch.hit)), CAMERA_NUM_RAYS)

    # Per-ray traces for the paths.
    marcher = RayMarcher(xp=xp, config=config, scene=scene)
    plotter = Plotter2D()
    for drawable in scene.drawables:
        plotter.draw_drawable(xp, drawable)
    plotter.draw_point(to_numpy(xp, camera.position), label="camera")

    for d in camera.ray_directions(xp):
        plotter.draw_ray(xp, marcher.trace(camera.position, d))

    if SAVE_PATH:
        plotter.save(SAVE_PATH, xlim=PLOT_XLIM, ylim=PLOT_YLIM)
    else:
        plotter.show(xlim=PLOT_XLIM, ylim=PLOT_YLIM)


if __name__ == "__main__":
    main()
