"""
Tests for the backtracking search.

Synthetic domains use the template of each candidate as its label, so a
solution can be read back as a string such as ``"AGU"``.
"""

from functools import partial

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rna_assembly.errors import UnknownIdentity
from rna_assembly.geometry import IDENTITY
from rna_assembly.nucleotides import rA, rC, rCs, rG, rU
from rna_assembly.placement import EMPTY, Variable, p_o3, reference, stacked5, wc
from rna_assembly.problems import ConstraintSet, DistanceConstraint
from rna_assembly.search import always, count_solutions, expand_frontier, iter_solutions, search

BY_LETTER = {"A": rA, "C": rC, "G": rG, "U": rU}


def _choices(identity, letters, partial_inst):
    return [Variable(identity, IDENTITY, BY_LETTER[c]) for c in letters]


def choices(identity, letters):
    return partial(_choices, identity, letters)


def no_repeat(var, partial_inst):
    """Reject a base equal to the previously placed one."""
    placed = partial_inst.variables()
    return not placed or placed[-1].template is not var.template


def label(solution):
    return "".join(v.template.kind.value for v in solution)


def test_depth_first_order():
    domains = [choices(0, "AC"), choices(1, "GU"), choices(2, "AC")]
    assert [label(s) for s in search(domains)] == [
        "AGA", "AGC", "AUA", "AUC", "CGA", "CGC", "CUA", "CUC",
    ]


def test_constraint_prunes_whole_subtrees():
    domains = [choices(0, "AC"), choices(1, "AC"), choices(2, "AC")]
    assert [label(s) for s in search(domains, no_repeat)] == ["ACA", "CAC"]


def test_constraint_sees_prefix_without_candidate():
    seen = []

    def spy(var, partial_inst):
        seen.append((var.identity, partial_inst.identities()))
        return True

    list(iter_solutions([choices(0, "A"), choices(1, "G"), choices(2, "U")], spy))
    assert seen == [(0, []), (1, [0]), (2, [0, 1])]


def test_generator_sees_extended_prefix():
    seen = []

    def recording(identity):
        def gen(partial_inst):
            seen.append(partial_inst.identities())
            return [Variable(identity, IDENTITY, rA)]

        return gen

    list(iter_solutions([recording(5), recording(3), recording(9)]))
    assert seen == [[], [5], [5, 3]]


def test_empty_domain_list_yields_starting_assignment():
    assert search([]) == [EMPTY]
    start = EMPTY.extend(Variable(1, IDENTITY, rC))
    (only,) = list(iter_solutions([], always, start))
    assert only is start


def test_empty_generator_means_no_solutions():
    assert search([choices(0, "AC"), choices(1, ""), choices(2, "G")]) == []
    assert count_solutions([choices(0, "")]) == 0


def test_rejecting_everything_means_no_solutions():
    assert search([choices(0, "ACGU")], lambda v, p: False) == []


def test_solutions_share_structure():
    first, second = search([choices(0, "A"), choices(1, "CG")])
    assert first.variables()[0] is second.variables()[0]
    assert first.identities() == second.identities() == [0, 1]


def test_unknown_identity_aborts_search():
    domains = [choices(0, "G"), wc(rC, 1, 42)]
    with pytest.raises(UnknownIdentity) as excinfo:
        search(domains)
    assert excinfo.value.identity == 42


def test_constraint_error_propagates():
    def broken(var, partial_inst):
        if var.identity == 1:
            partial_inst.get(7)
        return True

    solutions = iter_solutions([choices(0, "AC"), choices(1, "G")], broken)
    with pytest.raises(UnknownIdentity):
        next(solutions)


def test_enumeration_is_lazy():
    calls = []

    def counting(partial_inst):
        calls.append(len(partial_inst))
        return _choices(len(partial_inst), "ACGU", partial_inst)

    stream = iter_solutions([counting, counting, counting])
    assert label(next(stream)) == "AAA"
    assert calls == [0, 1, 2]
    assert label(next(stream)) == "AAC"
    assert calls == [0, 1, 2]


def test_max_solutions():
    domains = [choices(0, "ACGU"), choices(1, "ACGU")]
    assert [label(s) for s in search(domains, max_solutions=3)] == ["AA", "AC", "AG"]
    assert len(search(domains, max_solutions=100)) == 16
    with pytest.raises(ValueError):
        search(domains, max_solutions=0)


def test_expand_frontier_keeps_search_order():
    domains = [choices(0, "AC"), choices(1, "GU"), choices(2, "A")]
    depth, prefixes = expand_frontier(domains, always, EMPTY, min_prefixes=3)
    assert depth == 2
    assert [label(p) for p in prefixes] == ["AG", "AU", "CG", "CU"]


def test_expand_frontier_stops_when_domains_run_out():
    depth, prefixes = expand_frontier([choices(0, "A")], always, EMPTY, min_prefixes=8)
    assert depth == 1
    assert [label(p) for p in prefixes] == ["A"]


def branching_domains():
    # 2 x 2 x 30 candidates, all built from importable library callables.
    return [reference(rG, 0), stacked5(rA, 1, 0), stacked5(rC, 2, 1), p_o3(rCs, 3, 2)]


CLOSE_LOOP = ConstraintSet((DistanceConstraint(target=3, partner=0, max_distance=15.0),))


def signature(solution):
    return [(v.identity, v.template.name, v.transform.components()) for v in solution]


@pytest.mark.parametrize("workers", [2, 3])
def test_parallel_search_matches_sequential(workers):
    sequential = search(branching_domains(), CLOSE_LOOP)
    parallel = search(branching_domains(), CLOSE_LOOP, max_workers=workers)
    assert 0 < len(sequential) < 120
    assert [signature(s) for s in parallel] == [signature(s) for s in sequential]


def test_parallel_search_fully_expanded_frontier():
    domains = [choices(0, "A"), choices(1, "C")]
    assert [label(s) for s in search(domains, max_workers=4)] == ["AC"]


def test_parallel_search_propagates_errors():
    domains = branching_domains()[:3] + [wc(rC, 3, 42)]
    with pytest.raises(UnknownIdentity):
        search(domains, max_workers=2)


letters = st.lists(st.text(alphabet="ACGU", min_size=0, max_size=3), min_size=0, max_size=4)


@settings(max_examples=60, deadline=None)
@given(sizes=letters)
def test_tightening_the_constraint_never_adds_solutions(sizes):
    domains = [choices(i, s) for i, s in enumerate(sizes)]
    loose = [label(s) for s in search(domains)]
    tight = [label(s) for s in search(domains, no_repeat)]
    assert len(tight) <= len(loose)
    # Surviving solutions keep their relative order.
    it = iter(loose)
    assert all(t in it for t in tight)


@settings(max_examples=60, deadline=None)
@given(sizes=letters)
def test_unconstrained_count_is_product_of_domain_sizes(sizes):
    domains = [choices(i, s) for i, s in enumerate(sizes)]
    expected = 1
    for s in sizes:
        expected *= len(s)
    assert count_solutions(domains) == expected
