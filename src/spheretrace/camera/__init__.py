from spheretrace.camera.camera2d import Camera2D

__all__ = [
    "Camera2D",
]
