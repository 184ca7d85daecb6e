"""A small 3D engine: glTF mesh loading, asset caching, cameras, scenes, an OpenGL renderer and an editor loop."""

__version__ = "0.1.0"