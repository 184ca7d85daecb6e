"""A scene: a camera and the objects it shows."""

from __future__ import annotations

from dataclasses import dataclass, field

from .camera import Camera
from .scene_object import SceneObject


@dataclass(eq=False)
class Scene:
    """Holds the objects and the camera used to render them.

    ``device`` is handed to every object the scene creates; None means the
    process-wide rendering device.
    """

    name: str = "Cool And Awesome Scene"
    objects: list[SceneObject] = field(default_factory=list)
    camera: Camera = field(default_factory=Camera)
    device: object = field(default=None, repr=False)

    _instance = None

    def create_object(self) -> SceneObject:
        """Add a new object whose id is its position in the scene, and return it."""
        obj = SceneObject(id=len(self.objects), device=self.device)
        self.objects.append(obj)
        return obj

    def render_objects(self) -> None:
        """Draw every object with the scene's camera."""
        for obj in self.objects:
            obj.render(self.camera)

    def shutdown(self) -> None:
        """Release every object and empty the scene."""
        for obj in self.objects:
            obj.shutdown()
        self.objects.clear()

    @classmethod
    def get_instance(cls) -> Scene:
        """Return the process-wide scene, creating it on first use."""
        if Scene._instance is None:
            Scene._instance = cls()
        return Scene._instance