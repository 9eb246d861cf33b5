"""Tests for the problem model and the two built-in structures."""

import pickle
import re

import pytest
from omegaconf import OmegaConf

from rna_assembly.analysis import most_distant_atom
from rna_assembly.geometry import IDENTITY, distance
from rna_assembly.nucleotides import rC, rCs
from rna_assembly.placement import EMPTY, Variable
from rna_assembly.problems import (
    ANTICODON,
    PROBLEMS,
    PSEUDOKNOT,
    ConstraintSet,
    DistanceConstraint,
    DomainStep,
    get_problem,
    normalize_relation,
    problem_from_mapping,
)
from rna_assembly.search import count_solutions


class TestAnticodon:
    def test_shape(self):
        assert len(ANTICODON.steps) == 17
        assert sorted(ANTICODON.identities()) == list(range(27, 44))

    def test_solutions(self, anticodon_solutions):
        assert len(anticodon_solutions) == 179
        for solution in anticodon_solutions:
            assert len(solution) == 17
            assert solution.identities() == ANTICODON.identities()

    def test_every_solution_closes_the_loop(self, anticodon_solutions):
        for solution in anticodon_solutions:
            gap = distance(solution[34].atom_position("P"), solution[33].atom_position("O3'"))
            assert gap <= 3.0

    def test_most_distant_atom(self, anticodon_solutions):
        assert most_distant_atom(anticodon_solutions) == pytest.approx(32.8890, abs=2e-4)

    def test_loop_residues_come_from_their_families(self, anticodon_solutions):
        for solution in anticodon_solutions:
            assert solution[32].template.name.startswith("rC")
            assert solution[32].template in rCs
            assert solution[33].template.name.startswith("rU")

    def test_looser_constraint_never_loses_solutions(self, anticodon_solutions):
        looser = ConstraintSet((DistanceConstraint(target=33, partner=34, max_distance=3.5),))
        assert count_solutions(ANTICODON.domains(), looser) >= len(anticodon_solutions)


class TestPseudoknot:
    def test_shape(self):
        assert len(PSEUDOKNOT.steps) == 23
        assert sorted(PSEUDOKNOT.identities()) == list(range(1, 24))

    def test_most_distant_atom(self, pseudoknot_solutions):
        assert most_distant_atom(pseudoknot_solutions) == pytest.approx(33.7976, abs=2e-4)

    def test_solutions(self, pseudoknot_solutions):
        assert len(pseudoknot_solutions) == 50

    def test_both_constraints_hold(self, pseudoknot_solutions):
        for solution in pseudoknot_solutions:
            assert distance(solution[19].atom_position("P"), solution[18].atom_position("O3'")) <= 4.0
            assert distance(solution[7].atom_position("P"), solution[6].atom_position("O3'")) <= 4.5

    def test_primed_conformations_are_used(self, pseudoknot_solutions):
        first = pseudoknot_solutions[0]
        assert first[19].template.name == "rU_prime"
        assert first[15].template.name == "rG_prime"


def test_parallel_solve_matches_sequential(anticodon_solutions):
    parallel = ANTICODON.solve(max_workers=2)
    assert [s.identities() for s in parallel] == [s.identities() for s in anticodon_solutions]
    assert [[v.template.name for v in s] for s in parallel] == [
        [v.template.name for v in s] for s in anticodon_solutions
    ]


def test_solve_with_max_solutions(anticodon_solutions):
    first_three = ANTICODON.solve(max_solutions=3)
    assert len(first_three) == 3
    for mine, reference in zip(first_three, anticodon_solutions):
        assert mine[33].transform.allclose(reference[33].transform)


def test_iter_solutions_is_lazy(anticodon_solutions):
    first = next(ANTICODON.iter_solutions())
    assert first[32].template is anticodon_solutions[0][32].template


def test_get_problem():
    assert get_problem("anticodon") is ANTICODON
    assert get_problem("pseudoknot") is PSEUDOKNOT
    assert sorted(PROBLEMS) == ["anticodon", "pseudoknot"]
    with pytest.raises(ValueError):
        get_problem("hairpin")


def test_problem_domains_pickle():
    for gen in PSEUDOKNOT.domains():
        pickle.dumps(gen)
    clone = pickle.loads(pickle.dumps(PSEUDOKNOT.constraint()))
    assert clone == PSEUDOKNOT.constraint()


@pytest.mark.parametrize(
    "raw, expected",
    [("helix5'", "helix5"), ("p-o3'", "p_o3"), ("WC-Dumas", "wc_dumas"), (" stacked3 ", "stacked3")],
)
def test_normalize_relation(raw, expected):
    assert normalize_relation(raw) == expected


class TestDomainStep:
    def test_normalizes_fields(self):
        step = DomainStep("p-o3'", 5, ["rCs", "rU"], 4)
        assert step.relation == "p_o3"
        assert step.templates == ("rCs", "rU")
        assert len(step.build()(EMPTY.extend(Variable(4, IDENTITY, rC)))) == 33

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(relation="twist", target=1, templates="rA", reference=0),
            dict(relation="wc", target=1, templates="rA"),
            dict(relation="reference", target=1, templates="rA", reference=0),
            dict(relation="helix5", target=1, templates=("rA", "rC"), reference=0),
            dict(relation="p_o3", target=1, templates=(), reference=0),
        ],
    )
    def test_rejects_malformed_steps(self, kwargs):
        with pytest.raises(ValueError):
            DomainStep(**kwargs)

    def test_unknown_template_fails_on_build(self):
        with pytest.raises(ValueError):
            DomainStep("helix3", 2, "rT", 1).build()


class TestDistanceConstraint:
    def test_only_applies_to_target(self):
        c = DistanceConstraint(target=2, partner=1, max_distance=0.0)
        assert c(Variable(3, IDENTITY, rC), EMPTY)

    def test_compares_named_atoms(self):
        placed = EMPTY.extend(Variable(1, IDENTITY, rC))
        same_place = Variable(2, IDENTITY, rC)
        gap = distance(rC.atom("O3'"), rC.atom("P"))
        assert DistanceConstraint(2, 1, gap + 1e-6)(same_place, placed)
        assert not DistanceConstraint(2, 1, gap - 1e-3)(same_place, placed)
        assert DistanceConstraint(2, 1, 0.0, target_atom="C1'", partner_atom="C1'")(same_place, placed)


HAIRPIN = {
    "name": "stem",
    "description": "two stacked pairs",
    "steps": [
        {"relation": "reference", "target": 1, "template": "rG"},
        {"relation": "wc", "target": 8, "template": "rC", "reference": 1},
        {"relation": "helix5", "target": 2, "template": "rC", "reference": 1},
        {"relation": "wc", "target": 7, "template": "rG", "reference": 2},
        {"relation": "p_o3", "target": 3, "templates": ["rUs"], "reference": 2},
    ],
    "constraints": [{"target": 3, "partner": 1, "max_distance": 30.0, "partner_atom": "C1'"}],
}
REFERENCE_STEP = HAIRPIN["steps"][0]


def test_problem_from_dict():
    problem = problem_from_mapping(HAIRPIN)
    assert problem.name == "stem"
    assert problem.identities() == [1, 8, 2, 7, 3]
    assert problem.constraints[0].partner_atom == "C1'"
    solutions = problem.solve()
    assert 0 < len(solutions) <= 30
    assert all(s.identities() == [1, 8, 2, 7, 3] for s in solutions)


def test_problem_from_omegaconf_node():
    problem = problem_from_mapping(OmegaConf.create(HAIRPIN))
    assert problem == problem_from_mapping(HAIRPIN)


def test_problem_from_mapping_requires_steps():
    with pytest.raises(ValueError):
        problem_from_mapping({"name": "empty"})
    with pytest.raises(ValueError):
        problem_from_mapping({"steps": [{"relation": "wc", "target": 2, "reference": 1}]})


@pytest.mark.parametrize(
    "definition, message",
    [
        ({"steps": [{"target": 1, "template": "rC"}]}, "Step 0 is missing key 'relation'"),
        (
            {"steps": [REFERENCE_STEP, {"relation": "wc", "template": "rG", "reference": 1}]},
            "Step 1 is missing key 'target'",
        ),
        ({"steps": [{"relation": "reference", "target": "first", "template": "rC"}]}, "Step 0 is malformed"),
        (
            {"steps": [REFERENCE_STEP], "constraints": [{"target": 1, "max_distance": 3.0}]},
            "Constraint 0 is missing key 'partner'",
        ),
        (
            {"steps": [REFERENCE_STEP], "constraints": [{"target": 1, "partner": 1, "max_distance": "far"}]},
            "Constraint 0 is malformed",
        ),
    ],
)
def test_problem_from_mapping_reports_malformed_entries(definition, message):
    with pytest.raises(ValueError, match=re.escape(message)):
        problem_from_mapping(definition)
