import math

import numpy as np
import pytest

from rna_assembly.geometry import distance, make_point, spherical_phi, spherical_theta, subtract


def test_make_point_is_immutable():
    p = make_point(1.0, 2.0, 3.0)
    assert p.dtype == np.float64
    with pytest.raises(ValueError):
        p[0] = 0.0


def test_subtract():
    np.testing.assert_array_equal(
        subtract(make_point(1.0, 2.0, 3.0), make_point(0.5, -1.0, 3.0)), [0.5, 3.0, 0.0]
    )


def test_distance_is_euclidean():
    assert distance(make_point(0, 0, 0), make_point(1, 2, 2)) == pytest.approx(3.0)
    assert distance(make_point(1, 2, 2), make_point(0, 0, 0)) == pytest.approx(3.0)


@pytest.mark.parametrize(
    "p, theta",
    [
        ((0.0, 0.0, 1.0), 0.0),
        ((1.0, 0.0, 0.0), math.pi / 2),
        ((-1.0, 5.0, 0.0), -math.pi / 2),
    ],
)
def test_spherical_theta(p, theta):
    assert spherical_theta(make_point(*p)) == pytest.approx(theta)


@pytest.mark.parametrize(
    "p, phi",
    [
        ((0.0, 1.0, 0.0), 0.0),
        ((0.0, -1.0, 0.0), math.pi),
        ((0.0, 0.0, 3.0), math.pi / 2),
        ((1.0, 1.0, 0.0), math.pi / 4),
    ],
)
def test_spherical_phi_measures_from_y_axis(p, phi):
    assert spherical_phi(make_point(*p)) == pytest.approx(phi)
