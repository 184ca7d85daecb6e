"""Scene camera producing view and projection matrices."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

import numpy as np

from .transforms import look_at, normalize, orthographic, perspective


class ProjectionMode(enum.Enum):
    ORTHOGRAPHIC = 0
    PERSPECTIVE = 1


def _zeros() -> np.ndarray:
    return np.zeros(3)


@dataclass(eq=False)
class Camera:
    """A camera whose rotation is given in degrees as (yaw, pitch, roll)."""

    fov: float = 75.0
    near: float = 0.1
    far: float = 100.0
    position: np.ndarray = field(default_factory=_zeros)
    rotation: np.ndarray = field(default_factory=_zeros)
    forward: np.ndarray = field(default_factory=_zeros)
    right: np.ndarray = field(default_factory=_zeros)
    up: np.ndarray = field(default_factory=_zeros)
    view: np.ndarray = field(default_factory=lambda: np.identity(4))
    projection: np.ndarray = field(default_factory=lambda: np.identity(4))
    projection_mode: ProjectionMode = ProjectionMode.PERSPECTIVE

    def process(self, window) -> None:
        """Recompute projection, basis vectors and view for the window size."""
        aspect = window.width / window.height
        if self.projection_mode is ProjectionMode.ORTHOGRAPHIC:
            self.projection = orthographic(0.0, aspect, 0.0, 1.0, self.near, self.far)
        else:
            self.projection = perspective(math.radians(self.fov), aspect, self.near, self.far)

        rotation = np.radians(np.asarray(self.rotation, dtype=np.float64))
        yaw, pitch = rotation[0], rotation[1]
        self.forward = normalize([
            -math.sin(yaw) * math.cos(pitch),
            math.sin(pitch),
            -math.cos(yaw) * math.cos(pitch),
        ])
        self.right = normalize(np.cross(self.forward, [0.0, 1.0, 0.0]))
        self.up = normalize(np.cross(self.right, self.forward))

        position = np.asarray(self.position, dtype=np.float64)
        self.view = look_at(position, position + self.forward, self.up)