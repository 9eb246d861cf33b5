"""
Rigid coordinate transformations.

The notation follows Paul, R.P. (1981) "Robot Manipulators", MIT Press, except
that the matrices carry no perspective terms and are the transpose of Paul's.
A transform is stored as a 4x3 matrix::

     a  b  c
     d  e  f
     g  h  i
    tx ty tz

and maps a point given as a row vector: ``apply(T, p) = p @ M + t`` where
``M`` is the upper 3x3 block and ``t`` the last row.

``combine(A, B)`` applies A first and B second. Every call site depends on
that operand order.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .points import spherical_phi, spherical_theta


def _frozen(matrix: np.ndarray) -> np.ndarray:
    matrix.flags.writeable = False
    return matrix


@dataclass(frozen=True, eq=False)
class Transform:
    """Immutable affine transform held as a read-only (4, 3) float64 matrix."""

    matrix: np.ndarray

    def __post_init__(self):
        if self.matrix.shape != (4, 3):
            raise ValueError(f"Transform matrix must have shape (4, 3), got {self.matrix.shape}")

    @classmethod
    def from_components(cls, components: Sequence[float]) -> "Transform":
        """Build a transform from the 12 values ``a b c d e f g h i tx ty tz``."""
        if len(components) != 12:
            raise ValueError(f"Expected 12 transform components, got {len(components)}")
        return cls(_frozen(np.array(components, dtype=np.float64).reshape(4, 3)))

    @property
    def rotation(self) -> np.ndarray:
        return self.matrix[:3]

    @property
    def translation(self) -> np.ndarray:
        return self.matrix[3]

    def components(self) -> Tuple[float, ...]:
        return tuple(float(v) for v in self.matrix.ravel())

    def allclose(self, other: "Transform", atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, rtol=0.0, atol=atol))

    def __repr__(self):
        rows = ", ".join("[" + " ".join(f"{v:.4f}" for v in row) + "]" for row in self.matrix)
        return f"Transform({rows})"


IDENTITY = Transform.from_components(
    (1.0, 0.0, 0.0,
     0.0, 1.0, 0.0,
     0.0, 0.0, 1.0,
     0.0, 0.0, 0.0)
)


def apply(t: Transform, p: np.ndarray) -> np.ndarray:
    """Map point p from the transform's local frame into its reference frame."""
    m = t.matrix
    return p @ m[:3] + m[3]


def apply_many(t: Transform, points: np.ndarray) -> np.ndarray:
    """Map an (N, 3) block of points at once."""
    m = t.matrix
    return np.asarray(points, dtype=np.float64) @ m[:3] + m[3]


def combine(a: Transform, b: Transform) -> Transform:
    """Compose two transforms so that ``apply(combine(a, b), p) == apply(b, apply(a, p))``."""
    am, bm = a.matrix, b.matrix
    out = np.empty((4, 3), dtype=np.float64)
    out[:3] = am[:3] @ bm[:3]
    out[3] = am[3] @ bm[:3] + bm[3]
    return Transform(_frozen(out))


def inverse_ortho(t: Transform) -> Transform:
    """
    Inverse of a transform whose 3x3 block is orthonormal.

    Uses the transpose of the rotation, so the result is only meaningful for
    rotation + translation transforms (no scale, no shear).
    """
    m = t.matrix
    rot = m[:3]
    out = np.empty((4, 3), dtype=np.float64)
    out[:3] = rot.T
    out[3] = -(rot @ m[3])
    return Transform(_frozen(out))


def align(p1: np.ndarray, p2: np.ndarray, p3: np.ndarray) -> Transform:
    """
    Transform that maps p1 to the origin, p2 onto the +Y axis and p3 into
    the YZ plane.

    Two spherical angles of ``p2 - p1`` (phi, theta) and the azimuth rho of
    ``p3 - p1`` re-expressed in the partially rotated frame define three
    elemental rotations; the closed form of their product is built directly.
    Nearly collinear inputs give an ill-defined frame and are not detected.
    """
    x1, y1, z1 = float(p1[0]), float(p1[1]), float(p1[2])
    x31 = float(p3[0]) - x1
    y31 = float(p3[1]) - y1
    z31 = float(p3[2]) - z1

    rotpy = np.subtract(p2, p1)
    phi = spherical_phi(rotpy)
    theta = spherical_theta(rotpy)
    sinp, cosp = math.sin(phi), math.cos(phi)
    sint, cost = math.sin(theta), math.cos(theta)
    sinpsint = sinp * sint
    sinpcost = sinp * cost
    cospsint = cosp * sint
    cospcost = cosp * cost

    rotpz = (
        cost * x31 - sint * z31,
        sinpsint * x31 + cosp * y31 + sinpcost * z31,
        cospsint * x31 - sinp * y31 + cospcost * z31,
    )
    rho = spherical_theta(rotpz)
    cosr, sinr = math.cos(rho), math.sin(rho)

    x = -(x1 * cost) + z1 * sint
    y = -(x1 * sinpsint) - y1 * cosp - z1 * sinpcost
    z = -(x1 * cospsint) + y1 * sinp - z1 * cospcost

    return Transform.from_components(
        (
            cost * cosr - cospsint * sinr,
            sinpsint,
            cost * sinr + cospsint * cosr,
            sinp * sinr,
            cosp,
            -(sinp * cosr),
            -(sint * cosr) - cospcost * sinr,
            sinpcost,
            -(sint * sinr) + cospcost * cosr,
            x * cosr - z * sinr,
            y,
            x * sinr + z * cosr,
        )
    )
