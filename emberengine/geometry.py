"""Plain geometry and shader records shared by the loader and renderer."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Vertex:
    """One mesh vertex: position, normal and texture coordinate."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)
    uv: tuple[float, float] = (0.0, 0.0)


@dataclass
class Mesh:
    """Vertices plus triangle indices into them."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


@dataclass
class Shader:
    """Shader sources and the handle the rendering device gives it."""

    vertex_shader: str = ""
    fragment_shader: str = ""
    name: str = ""
    internal: Any = None