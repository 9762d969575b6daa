from spheretrace.viz.plot2d import Plotter2D

__all__ = [
    "Plotter2D",
]
