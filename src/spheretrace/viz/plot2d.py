from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import matplotlib as mpl

# IMPORTANT: set backend before importing pyplot
# - SPHERETRACE_MPL_BACKEND wins when set.
# - Otherwise prefer a stable GUI backend if available; fallback to Agg.
_BACKEND = os.environ.get("SPHERETRACE_MPL_BACKEND", "").strip()
if _BACKEND:
    mpl.use(_BACKEND, force=True)
else:
    for candidate in ("TkAgg", "QtAgg", "Agg"):
        # noinspection PyBroadException
        try:
            mpl.use(candidate, force=True)
            break
        except Exception:  # pragma: no cover  # noqa: BLE001, S112
            continue

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.patches import Circle as CirclePatch  # noqa: E402

from spheretrace.backend import ArrayModule, to_numpy  # noqa: E402

if TYPE_CHECKING:
    from spheretrace.protocols import Drawable2D
    from spheretrace.raymarch.config import RayMarchResult

_END_MARKERS = {
    "hit": ("x", 70),
    "far": (".", 25),
    "max_steps": ("s", 25),
    "invalid": ("+", 40),
}


class Plotter2D:
    """Matplotlib plotter for 2D sphere tracing."""

    def __init__(self, title: str = "spheretrace - 2D Sphere Tracing") -> None:
        """Initialize the plotter."""
        fig, ax = plt.subplots(figsize=(8, 8))
        self.fig = fig
        self.ax = ax
        self.title = title
        self._setup_axes()

    def _setup_axes(self) -> None:
        self.ax.set_aspect("equal", "box")
        self.ax.set_xlabel("x")
        self.ax.set_ylabel("y")
        self.ax.set_title(self.title)

    def clear(self) -> None:
        self.ax.cla()
        self._setup_axes()

    def draw_drawable(self, xp: ArrayModule, drawable: Drawable2D, linewidth: float = 2.0) -> None:
        pts = to_numpy(xp, drawable.polyline())
        self.ax.plot(pts[:, 0], pts[:, 1], linewidth=linewidth)

    def draw_point(self, p: Any, label: str | None = None) -> None:
        self.ax.scatter([p[0]], [p[1]], s=80)
        if label:
            self.ax.text(float(p[0] + 0.1), float(p[1] + 0.1), label)

    def draw_probe(self, p: Any, radius: float) -> None:
        """Circle of the safe step radius around a ray position."""
        self.ax.add_patch(CirclePatch((float(p[0]), float(p[1])), max(radius, 0.0), fill=False, alpha=0.35))
        self.ax.scatter([p[0]], [p[1]], s=5)

    def draw_ray(self, xp: ArrayModule, result: RayMarchResult) -> None:
        pts = to_numpy(xp, result.points)
        self.ax.plot(pts[:, 0], pts[:, 1], linewidth=1)

        if pts.shape[0] == 0:
            return

        end = pts[-1]
        marker, size = _END_MARKERS.get(result.termination, (".", 20))
        self.ax.scatter([end[0]], [end[1]], marker=marker, s=size)

    def show(self, xlim: tuple[float, float], ylim: tuple[float, float]) -> None:
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)
        plt.tight_layout()
        plt.show()

    def save(self, path: str, xlim: tuple[float, float], ylim: tuple[float, float], dpi: int = 150) -> None:
        """Save figure to disk (useful if running headless with Agg)."""
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)
        self.fig.tight_layout()
        self.fig.savefig(path, dpi=dpi)

    def close(self) -> None:
        plt.close(self.fig)
