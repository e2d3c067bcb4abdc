"""
Homogeneous point/vector helpers and 4x4 affine transforms on numpy
"""
import math

import numpy as np

IDENTITY = np.identity(4)


class DegenerateTransformError(ValueError):
    """Raised when a placement matrix cannot be inverted"""


def point(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z, 1.0])


def vector(x: float, y: float, z: float) -> np.ndarray:
    return np.array([x, y, z, 0.0])


def magnitude(v: np.ndarray) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit-length copy of v as a direction (w = 0)"""
    result = v / magnitude(v)
    result[3] = 0.0
    return result


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return vector(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def reflect(v: np.ndarray, normal: np.ndarray) -> np.ndarray:
    return v - normal * (2.0 * dot(v, normal))


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = (x, y, z)
    return m


def scaling(x: float, y: float, z: float) -> np.ndarray:
    return np.diag([x, y, z, 1.0])


def rotation_x(r: float) -> np.ndarray:
    c, s = math.cos(r), math.sin(r)
    return np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_y(r: float) -> np.ndarray:
    c, s = math.cos(r), math.sin(r)
    return np.array([
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def rotation_z(r: float) -> np.ndarray:
    c, s = math.cos(r), math.sin(r)
    return np.array([
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def shearing(x_y: float, x_z: float, y_x: float, y_z: float, z_x: float, z_y: float) -> np.ndarray:
    return np.array([
        [1.0, x_y, x_z, 0.0],
        [y_x, 1.0, y_z, 0.0],
        [z_x, z_y, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])


def inverse(matrix: np.ndarray) -> np.ndarray:
    """Invert a placement matrix, failing loudly on singular input"""
    if np.linalg.det(matrix) == 0.0:
        raise DegenerateTransformError(f"Transform is not invertible:\n{matrix}")
    try:
        return np.linalg.inv(matrix)
    except np.linalg.LinAlgError as e:
        raise DegenerateTransformError(f"Transform is not invertible:\n{matrix}") from e


def view_transform(origin: np.ndarray, to: np.ndarray, up: np.ndarray) -> np.ndarray:
    """World-to-camera matrix looking from `origin` towards `to`"""
    forward = normalize(to - origin)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)

    orientation = np.array([
        [left[0], left[1], left[2], 0.0],
        [true_up[0], true_up[1], true_up[2], 0.0],
        [-forward[0], -forward[1], -forward[2], 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return orientation @ translation(-origin[0], -origin[1], -origin[2])
