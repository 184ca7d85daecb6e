"""Objects placed in a scene and drawn through the rendering device."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from . import rendering_device
from .transforms import model_matrix


def _zeros() -> np.ndarray:
    return np.zeros(3)


def _ones() -> np.ndarray:
    return np.ones(3)


@dataclass(eq=False)
class SceneObject:
    """A transformable object with a mesh handle and a shader.

    ``device`` is the rendering device used for the object; when it is None
    the process-wide rendering device is used.
    """

    name: str = "Object"
    id: int = 0
    children: list[SceneObject] = field(default_factory=list)
    position: np.ndarray = field(default_factory=_zeros)
    rotation: np.ndarray = field(default_factory=_zeros)
    scale: np.ndarray = field(default_factory=_ones)
    forward: np.ndarray = field(default_factory=_zeros)
    right: np.ndarray = field(default_factory=_zeros)
    up: np.ndarray = field(default_factory=_zeros)
    render_object: object = None
    shader: object = None
    device: object = field(default=None, repr=False)

    def _renderer(self):
        device = self.device if self.device is not None else rendering_device.get_instance()
        if device is None:
            raise RuntimeError("no rendering device has been created")
        return device

    def initialize(self, mesh, shader) -> None:
        """Upload ``mesh`` to the rendering device and remember ``shader``."""
        self.render_object = self._renderer().create_object(mesh)
        self.shader = shader

    def model_matrix(self) -> np.ndarray:
        """The object's model matrix: translation, rotation, then scale."""
        return model_matrix(self.position, self.rotation, self.scale)

    def render(self, camera) -> None:
        """Set the transform uniforms and draw the object as seen by ``camera``."""
        renderer = self._renderer()
        renderer.set_shader_mat4(self.shader, "u_model", self.model_matrix())
        renderer.set_shader_mat4(self.shader, "u_view", camera.view)
        renderer.set_shader_mat4(self.shader, "u_projection", camera.projection)
        renderer.draw(self.render_object, self.shader)

    def shutdown(self) -> None:
        """Release the object's resources on the rendering device."""
        self._renderer().shutdown_object(self.render_object)