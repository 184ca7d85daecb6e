"""4x4 transform helpers.

Matrices are numpy arrays in mathematical (row, column) order and act on
column vectors: ``matrix @ point``.
"""

import numpy as np


def _vec(values, size: int) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.shape != (size,):
        raise ValueError(f"expected a vector of {size} components, got shape {arr.shape}")
    return arr


def _mat(matrix) -> np.ndarray:
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
    return arr


def normalize(vector) -> np.ndarray:
    """Return the vector scaled to unit length."""
    v = np.asarray(vector, dtype=np.float64)
    length = np.linalg.norm(v)
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


def translate(matrix, offset) -> np.ndarray:
    """Return ``matrix`` followed by a translation by ``offset``."""
    t = np.identity(4)
    t[:3, 3] = _vec(offset, 3)
    return _mat(matrix) @ t


def _scale_matrix(factors) -> np.ndarray:
    return np.diag([*_vec(factors, 3), 1.0])


def scale(matrix, factors) -> np.ndarray:
    """Return ``matrix`` followed by a non-uniform scale."""
    return _mat(matrix) @ _scale_matrix(factors)


def euler_to_matrix(degrees) -> np.ndarray:
    """Rotation matrix for Euler angles (pitch, yaw, roll) given in degrees."""
    half = np.radians(_vec(degrees, 3)) * 0.5
    cx, cy, cz = np.cos(half)
    sx, sy, sz = np.sin(half)

    w = cx * cy * cz + sx * sy * sz
    x = sx * cy * cz - cx * sy * sz
    y = cx * sy * cz + sx * cy * sz
    z = cx * cy * sz - sx * sy * cz

    m = np.identity(4)
    m[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ]
    return m


def model_matrix(position, rotation, scale) -> np.ndarray:
    """Translation, then rotation (Euler degrees), then scale."""
    model = translate(np.identity(4), position)
    model = model @ euler_to_matrix(rotation)
    return model @ _scale_matrix(scale)


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection with depth mapped to [-1, 1]."""
    if aspect == 0.0:
        raise ValueError("aspect ratio must not be zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    f = 1.0 / np.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def orthographic(left: float, right: float, bottom: float, top: float,
                 near: float, far: float) -> np.ndarray:
    """Right-handed orthographic projection with depth mapped to [-1, 1]."""
    if left == right or bottom == top or near == far:
        raise ValueError("orthographic volume must have non-zero extent")
    m = np.identity(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _vec(eye, 3)
    f = normalize(_vec(center, 3) - eye)
    s = normalize(np.cross(f, _vec(up, 3)))
    u = np.cross(s, f)

    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m