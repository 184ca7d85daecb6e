[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emberengine"
version = "0.1.0"
description = "A small 3D engine and editor loop: glTF mesh loading, asset caching, cameras, scenes and an OpenGL renderer"
requires-python = ">=3.10"
keywords = ["3d", "engine", "opengl", "gltf", "glb", "rendering", "scene", "camera"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
emberengine-editor = "emberengine.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["emberengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
