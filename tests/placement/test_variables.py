import pickle

import numpy as np
import pytest

from rna_assembly.errors import UnknownIdentity
from rna_assembly.geometry import IDENTITY, Transform, apply
from rna_assembly.nucleotides import atom_p, rA, rC, rG, rU
from rna_assembly.placement import EMPTY, Assignment, Variable

SHIFT = Transform.from_components((1, 0, 0, 0, 1, 0, 0, 0, 1, 10.0, -2.0, 0.5))


@pytest.fixture
def chain():
    a = EMPTY.extend(Variable(0, IDENTITY, rA))
    return a.extend(Variable(1, SHIFT, rC))


def test_empty_assignment():
    assert len(EMPTY) == 0
    assert not EMPTY
    assert list(EMPTY) == []
    assert EMPTY.find(3) is None


def test_iteration_is_placement_order(chain):
    longer = chain.extend(Variable(7, IDENTITY, rG)).extend(Variable(2, IDENTITY, rU))
    assert longer.identities() == [0, 1, 7, 2]
    assert [v.template for v in longer] == [rA, rC, rG, rU]
    assert len(longer) == 4


def test_extend_shares_prefix_without_leaking(chain):
    left = chain.extend(Variable(2, IDENTITY, rG))
    right = chain.extend(Variable(2, SHIFT, rU))
    assert chain.identities() == [0, 1]
    assert left[2].template is rG
    assert right[2].template is rU
    assert 2 not in chain
    assert left.variables()[:2] == right.variables()[:2]


def test_get_unknown_identity(chain):
    with pytest.raises(UnknownIdentity) as excinfo:
        chain.get(5)
    assert excinfo.value.identity == 5
    assert excinfo.value.placed == (0, 1)
    with pytest.raises(LookupError):
        chain[9]


def test_contains(chain):
    assert 0 in chain
    assert 1 in chain
    assert 2 not in chain


def test_atom_position_by_name_or_accessor(chain):
    var = chain[1]
    by_name = var.atom_position("P")
    by_accessor = var.atom_position(atom_p)
    np.testing.assert_array_equal(by_name, by_accessor)
    np.testing.assert_allclose(by_name, rC.atom("P") + np.array([10.0, -2.0, 0.5]))
    np.testing.assert_allclose(chain.world_atom_position(1, "P"), by_name)


def test_atom_coords_match_per_atom_positions(chain):
    var = chain[1]
    coords = var.atom_coords()
    assert coords.shape == (len(rC.atom_names()), 3)
    for name, row in zip(rC.atom_names(), coords):
        np.testing.assert_allclose(row, apply(SHIFT, rC.atom(name)))


def test_pickle_round_trip(chain):
    clone = pickle.loads(pickle.dumps(chain))
    assert isinstance(clone, Assignment)
    assert clone.identities() == chain.identities()
    assert clone[1].template is rC
    assert clone[1].transform.allclose(SHIFT)


def test_pickle_long_assignment():
    a = EMPTY
    for i in range(5000):
        a = a.extend(Variable(i, IDENTITY, rU))
    clone = pickle.loads(pickle.dumps(a))
    assert len(clone) == 5000
    assert clone.identities()[-1] == 4999


def test_repr(chain):
    assert repr(chain) == "Assignment([0:rA, 1:rC])"
    assert repr(chain[0]) == "Variable(0, rA)"
