"""Rigid-body geometry used to place nucleotide templates."""

from .points import distance, make_point, spherical_phi, spherical_theta, subtract
from .transforms import (
    IDENTITY,
    Transform,
    align,
    apply,
    apply_many,
    combine,
    inverse_ortho,
)

__all__ = [
    # Points
    "make_point",
    "subtract",
    "distance",
    "spherical_phi",
    "spherical_theta",
    # Transforms
    "Transform",
    "IDENTITY",
    "apply",
    "apply_many",
    "combine",
    "inverse_ortho",
    "align",
]
