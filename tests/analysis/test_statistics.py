import numpy as np
import pandas as pd
import pytest

from rna_assembly.analysis import (
    most_distant_atom,
    solution_most_distant_atom,
    solutions_to_frame,
    summarize,
    variable_atom_coords,
    variable_most_distant_atom,
)
from rna_assembly.analysis.statistics import FRAME_COLUMNS
from rna_assembly.geometry import IDENTITY, Transform
from rna_assembly.nucleotides import rA, rU
from rna_assembly.placement import EMPTY, Variable

FAR = Transform.from_components((1, 0, 0, 0, 1, 0, 0, 0, 1, 100.0, 0.0, 0.0))


@pytest.fixture
def pair():
    return EMPTY.extend(Variable(1, IDENTITY, rA)).extend(Variable(2, FAR, rU))


def test_variable_most_distant_atom_at_identity():
    expected = max(np.linalg.norm(rA.atom(name)) for name in rA.atom_names())
    assert variable_most_distant_atom(Variable(1, IDENTITY, rA)) == pytest.approx(expected)


def test_variable_atom_coords(pair):
    coords = variable_atom_coords(pair[2])
    np.testing.assert_allclose(coords, rU.coords + [100.0, 0.0, 0.0])


def test_solution_takes_the_farthest_residue(pair):
    assert solution_most_distant_atom(pair) == pytest.approx(variable_most_distant_atom(pair[2]))
    assert solution_most_distant_atom(pair) > 90.0


def test_most_distant_atom_over_solutions(pair):
    near = EMPTY.extend(Variable(1, IDENTITY, rA))
    assert most_distant_atom([near, pair]) == solution_most_distant_atom(pair)
    assert most_distant_atom(iter([near])) == solution_most_distant_atom(near)


def test_most_distant_atom_needs_a_solution():
    with pytest.raises(ValueError):
        most_distant_atom([])


def test_summarize(pair):
    assert summarize([]) == {"solutions": 0}
    summary = summarize([pair, pair])
    assert summary["solutions"] == 2
    assert summary["residues"] == 2
    assert summary["most_distant_atom"] == pytest.approx(solution_most_distant_atom(pair))


def test_solutions_to_frame(pair):
    df = solutions_to_frame([pair, pair])
    n_atoms = len(rA.atom_names()) + len(rU.atom_names())
    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == 2 * n_atoms
    assert df["solution"].tolist() == [0] * n_atoms + [1] * n_atoms
    first_u = df[(df.solution == 0) & (df.identity == 2)].iloc[0]
    assert first_u.template == "rU"
    assert first_u.base == "U"
    assert first_u.atom == "P"
    assert first_u.x == pytest.approx(rU.atom("P")[0] + 100.0)


def test_solutions_to_frame_empty():
    df = solutions_to_frame([])
    assert isinstance(df, pd.DataFrame)
    assert df.empty
    assert list(df.columns) == FRAME_COLUMNS


def test_pseudoknot_frame_matches_statistic(pseudoknot_solutions):
    df = solutions_to_frame(pseudoknot_solutions[:5])
    radius = np.sqrt(df.x ** 2 + df.y ** 2 + df.z ** 2).max()
    assert radius == pytest.approx(most_distant_atom(pseudoknot_solutions[:5]))
