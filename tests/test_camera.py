import math
from types import SimpleNamespace

import numpy as np
import pytest

from emberengine.camera import Camera, ProjectionMode
from emberengine.transforms import orthographic, perspective

WINDOW = SimpleNamespace(width=1280, height=720)


def test_default_orientation_looks_down_negative_z():
    camera = Camera()
    camera.process(WINDOW)
    assert np.allclose(camera.forward, [0.0, 0.0, -1.0])
    assert np.allclose(camera.right, [1.0, 0.0, 0.0])
    assert np.allclose(camera.up, [0.0, 1.0, 0.0])
    assert np.allclose(camera.view, np.identity(4))


def test_perspective_projection_uses_fov_and_aspect():
    camera = Camera()
    camera.process(WINDOW)
    expected = perspective(math.radians(camera.fov), WINDOW.width / WINDOW.height,
                           camera.near, camera.far)
    assert np.allclose(camera.projection, expected)


def test_orthographic_projection():
    camera = Camera(projection_mode=ProjectionMode.ORTHOGRAPHIC)
    camera.process(WINDOW)
    expected = orthographic(0.0, WINDOW.width / WINDOW.height, 0.0, 1.0,
                            camera.near, camera.far)
    assert np.allclose(camera.projection, expected)


@pytest.mark.parametrize("rotation", [(90.0, 0.0, 0.0), (30.0, 45.0, 0.0), (-120.0, -60.0, 10.0)])
def test_basis_is_orthonormal(rotation):
    camera = Camera(rotation=np.array(rotation))
    camera.process(WINDOW)
    basis = np.stack([camera.forward, camera.right, camera.up])
    assert np.allclose(basis @ basis.T, np.identity(3))


def test_view_centres_camera_position_and_looks_forward():
    position = np.array([0.0, 0.0, 5.0])
    camera = Camera(position=position, rotation=np.array([25.0, 15.0, 0.0]))
    camera.process(WINDOW)
    origin = camera.view @ np.array([*position, 1.0])
    ahead = camera.view @ np.array([*(position + camera.forward), 1.0])
    assert np.allclose(origin[:3], 0.0)
    assert np.allclose(ahead[:2], 0.0)
    assert ahead[2] < 0


def test_zero_height_window_raises():
    camera = Camera()
    with pytest.raises(ZeroDivisionError):
        camera.process(SimpleNamespace(width=100, height=0))