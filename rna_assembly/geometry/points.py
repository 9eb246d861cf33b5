"""
Point helpers.

A point is a read-only float64 numpy vector of length 3. Nothing here keeps
state; every function returns a fresh value.
"""

import math

import numpy as np


def make_point(x: float, y: float, z: float) -> np.ndarray:
    """Build an immutable 3D point."""
    p = np.array((x, y, z), dtype=np.float64)
    p.flags.writeable = False
    return p


def subtract(p1: np.ndarray, p2: np.ndarray) -> np.ndarray:
    return np.subtract(p1, p2)


def distance(p1: np.ndarray, p2: np.ndarray) -> float:
    """Euclidean distance between two points."""
    dx = float(p1[0]) - float(p2[0])
    dy = float(p1[1]) - float(p2[1])
    dz = float(p1[2]) - float(p2[2])
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def spherical_theta(p: np.ndarray) -> float:
    """Azimuth of p around the Y axis, measured from +Z towards +X."""
    return math.atan2(float(p[0]), float(p[2]))


def spherical_phi(p: np.ndarray) -> float:
    """Polar angle of p measured from the +Y axis."""
    x, y, z = float(p[0]), float(p[1]), float(p[2])
    b = math.atan2(x, z)
    return math.atan2(math.cos(b) * z + math.sin(b) * x, y)
