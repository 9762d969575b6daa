from __future__ import annotations

import logging

import matplotlib.pyplot as plt

from spheretrace.backend import BackendName, get_array_module, to_numpy
from spheretrace.geometry import Circle, Rectangle
from spheretrace.raymarch.config import RayMarchConfig
from spheretrace.raymarch.marcher import RayMarcher
from spheretrace.scene import Scene, SceneBounds
from spheretrace.viz.plot2d import Plotter2D

logger = logging.getLogger(__name__)

# ============================================================
# TOP-LEVEL PARAMETERS (extract everything tweakable here)
# ============================================================

# Run
BACKEND: BackendName = "numpy"

# Display
SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080

# Scene
RECT_1 = ([20.0, 20.0], [300.0, 300.0])
RECT_2 = ([1400.0, 300.0], [1700.0, 400.0])
CIRCLE_CENTER = [1000.0, 1000.0]
CIRCLE_RADIUS = 40.0

# Ray
ORIGIN = [SCREEN_WIDTH / 2, SCREEN_HEIGHT / 2]
INITIAL_AIM = [1000.0, 1000.0]
MOVE_STEP = 10.0
MIN_RAY_DIST = 1e-3

# W/A/S/D move the ray origin
MOVES = {
    "w": (0.0, MOVE_STEP),
    "s": (0.0, -MOVE_STEP),
    "d": (MOVE_STEP, 0.0),
    "a": (-MOVE_STEP, 0.0),
}


class InteractiveDemo:
    """Mouse aims the ray, W/A/S/D move its origin, Escape quits."""

    def __init__(self, scene: Scene, config: RayMarchConfig, plotter: Plotter2D) -> None:
        self.scene = scene
        self.plotter = plotter
        self.xp = scene.xp
        self.marcher = RayMarcher(xp=self.xp, config=config, scene=scene, observer=self._record_probe)
        self.origin = self.xp.asarray(ORIGIN, dtype=self.xp.float64)
        self.aim = self.xp.asarray(INITIAL_AIM, dtype=self.xp.float64)
        self._probes: list[tuple[object, float]] = []

        # keep matplotlib's own shortcuts off the movement keys
        for key in ("keymap.save", "keymap.fullscreen", "keymap.quit"):
            plt.rcParams[key] = [k for k in plt.rcParams[key] if k not in MOVES]

        canvas = plotter.fig.canvas
        canvas.mpl_connect("motion_notify_event", self.on_mouse)
        canvas.mpl_connect("key_press_event", self.on_key)

    def _record_probe(self, position: object, step: float, traveled: float) -> None:  # noqa: ARG002
        self._probes.append((position, step))

    def redraw(self) -> None:
        xp = self.xp
        self._probes.clear()
        result = self.marcher.trace_towards(self.origin, self.aim)
        logger.info("%s", result.as_tuple())

        self.plotter.clear()
        for drawable in self.scene.drawables:
            self.plotter.draw_drawable(xp, drawable)
        for position, step in self._probes:
            self.plotter.draw_probe(to_numpy(xp, position), step)
        self.plotter.draw_ray(xp, result)
        self.plotter.draw_point(to_numpy(xp, self.origin), label="origin")
        self.plotter.ax.set_xlim(0, SCREEN_WIDTH)
        self.plotter.ax.set_ylim(0, SCREEN_HEIGHT)
        self.plotter.fig.canvas.draw_idle()

    def on_mouse(self, event) -> None:
        if event.inaxes is not self.plotter.ax or event.xdata is None:
            return
        self.aim = self.xp.asarray([event.xdata, event.ydata], dtype=self.xp.float64)
        self.redraw()

    def on_key(self, event) -> None:
        if event.key == "escape":
            plt.close(self.plotter.fig)
            return
        move = MOVES.get(event.key)
        if move is None:
            return
        self.origin = self.origin + self.xp.asarray(move, dtype=self.xp.float64)
        self.redraw()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    xp = get_array_module(BACKEND)

    scene = Scene(
        xp=xp,
        shapes=(
            Rectangle(xp=xp, min_corner=RECT_1[0], max_corner=RECT_1[1]),
            Rectangle(xp=xp, min_corner=RECT_2[0], max_corner=RECT_2[1]),
            Circle(xp=xp, center=CIRCLE_CENTER, radius=CIRCLE_RADIUS),
        ),
        bounds=SceneBounds.from_extent(SCREEN_WIDTH, SCREEN_HEIGHT),
    )
    demo = InteractiveDemo(scene, RayMarchConfig(eps=MIN_RAY_DIST), Plotter2D())
    demo.redraw()
    plt.show()


if __name__ == "__main__":
    main()
