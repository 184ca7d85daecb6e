"""Editor entry point: shows a rotating mesh in a window."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from .asset_cache import AssetCache, LoadMode
from .rendering_device import create_rendering_device, shutdown_instance
from .scene import Scene
from .window import Window

WIDTH, HEIGHT, TITLE = 1280, 720, "Editor"


def _build_scene(scene: Scene, cache: AssetCache):
    """Load the default assets and place one object; returns the default shader."""
    scene.camera.position = np.array([0.0, 0.0, 5.0])
    cache.load_shader("assets/default.vs.glsl", "assets/default.fs.glsl", "core/default")
    cache.load_shader("assets/default.vs.glsl", "assets/different_default.fs.glsl",
                      "core/different_default")
    shader = cache.shaders["core/default"]
    mesh = cache.load_mesh("assets/sphere.glb")
    scene.create_object().initialize(mesh, shader)
    return shader


def _frame(window: Window, device, scene: Scene) -> None:
    device.begin_frame()
    scene.camera.process(window)
    t = window.time
    scene.objects[0].rotation = np.array([t * 15, t * 12, t * 20], dtype=np.float64)
    scene.render_objects()


def _run(window: Window, device, scene: Scene, cache: AssetCache) -> None:
    """Build the scene, run frames until the window closes, then release everything."""
    shader = _build_scene(scene, cache)
    while window.status():
        _frame(window, device, scene)
        window.present()
    scene.shutdown()
    device.shutdown_shader(shader)
    device.shutdown()
    window.shutdown()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="emberengine-editor",
                                     description="Open the scene editor.")
    parser.add_argument("--root", help="folder holding the assets directory "
                                       "(default: the working directory)")
    args = parser.parse_args(argv)

    window = Window()
    window.create(WIDTH, HEIGHT, TITLE)
    device = create_rendering_device()
    device.initialize()

    scene = Scene.get_instance()
    cache = AssetCache.get_instance()
    if args.root:
        cache.root = Path(args.root)
    if cache.mode is LoadMode.NONE:
        cache.mode = LoadMode.FOLDER

    _run(window, device, scene, cache)
    shutdown_instance()
    return 0