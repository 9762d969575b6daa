import os

# Headless plotting; must be set before spheretrace.viz is imported.
os.environ.setdefault("SPHERETRACE_MPL_BACKEND", "Agg")

import numpy as np
import pytest

from spheretrace.geometry import Circle, Rectangle
from spheretrace.scene import Scene


@pytest.fixture
def circle_scene() -> Scene:
    """Single circle of radius 40 at (1000, 1000)."""
    return Scene(xp=np, shapes=(Circle(xp=np, center=[1000.0, 1000.0], radius=40.0),))


@pytest.fixture
def screen_scene() -> Scene:
    """Two rectangles and a circle on a 1920x1080 screen."""
    return Scene(
        xp=np,
        shapes=(
            Rectangle(xp=np, min_corner=[20.0, 20.0], max_corner=[300.0, 300.0]),
            Rectangle(xp=np, min_corner=[1400.0, 300.0], max_corner=[1700.0, 400.0]),
            Circle(xp=np, center=[1000.0, 1000.0], radius=40.0),
        ),
    )
