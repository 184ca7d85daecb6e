"""Abstract rendering device and the process-wide device instance."""

from __future__ import annotations

import abc
import enum

from .log import print_error


class GraphicsApi(enum.IntEnum):
    """Graphics interfaces a rendering device can be built on."""

    OPENGL = 0
    VULKAN = 1


class UnsupportedApiError(RuntimeError):
    """Raised when a rendering device is requested for an API that has none."""


class RenderingDevice(abc.ABC):
    """Interface every rendering back end implements."""

    @abc.abstractmethod
    def initialize(self) -> None:
        """Prepare the device for drawing."""

    @abc.abstractmethod
    def begin_frame(self) -> None:
        """Clear the frame before drawing."""

    @abc.abstractmethod
    def draw(self, render_object, shader) -> None:
        """Draw a render object with a compiled shader."""

    @abc.abstractmethod
    def create_object(self, mesh):
        """Upload a mesh and return the device's handle for it."""

    @abc.abstractmethod
    def compile_shader(self, shader) -> None:
        """Compile the shader's sources and store the result in ``shader.internal``."""

    @abc.abstractmethod
    def set_shader_float(self, shader, name, value) -> None:
        """Set a float uniform."""

    @abc.abstractmethod
    def set_shader_int(self, shader, name, value) -> None:
        """Set an integer uniform."""

    @abc.abstractmethod
    def set_shader_vec2(self, shader, name, value) -> None:
        """Set a two-component vector uniform."""

    @abc.abstractmethod
    def set_shader_vec3(self, shader, name, value) -> None:
        """Set a three-component vector uniform."""

    @abc.abstractmethod
    def set_shader_vec4(self, shader, name, value) -> None:
        """Set a four-component vector uniform."""

    @abc.abstractmethod
    def set_shader_mat4(self, shader, name, value) -> None:
        """Set a 4x4 matrix uniform."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Release device-wide resources."""

    @abc.abstractmethod
    def shutdown_object(self, render_object) -> None:
        """Release the resources of one render object."""

    @abc.abstractmethod
    def shutdown_shader(self, shader) -> None:
        """Release a compiled shader."""


_instance: RenderingDevice | None = None


def create_rendering_device(api=GraphicsApi.OPENGL) -> RenderingDevice:
    """Create the process-wide rendering device for ``api`` and return it."""
    global _instance
    api = GraphicsApi(api)
    if api is GraphicsApi.VULKAN:
        message = "Vulkan is not implemented yet"
        print_error(message)
        raise UnsupportedApiError(message)

    from .gl_device import GLRenderingDevice

    _instance = GLRenderingDevice()
    return _instance


def get_instance() -> RenderingDevice | None:
    """Return the current rendering device, or None if none was created."""
    return _instance


def shutdown_instance() -> None:
    """Drop the current rendering device."""
    global _instance
    _instance = None