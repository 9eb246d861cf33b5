"""
Sequential backtracking over an ordered list of domain generators.

The search threads a growing partial assignment through the generators. At
each step it asks the next generator for candidates, keeps the ones the
constraint accepts against the assignment built so far, and descends into
each in turn. Every complete assignment is reported; the enumeration is
exhaustive.

Solutions come out depth-first: all solutions under the first candidate of
a generator, in order, then all solutions under the second, and so on.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from itertools import islice
from typing import Iterator, List, Optional, Sequence, Tuple

from ..placement.combinators import ConstraintPredicate, DomainGenerator
from ..placement.variables import EMPTY, Assignment, Variable

logger = logging.getLogger(__name__)


def always(var: Variable, partial_inst: Assignment) -> bool:
    """Constraint that accepts every candidate."""
    return True


def iter_solutions(
    domains: Sequence[DomainGenerator],
    constraint: ConstraintPredicate = always,
    partial_inst: Assignment = EMPTY,
) -> Iterator[Assignment]:
    """
    Lazily enumerate complete assignments.

    Uses an explicit stack of (prefix, candidate iterator) pairs instead of
    recursion. Errors raised by a generator or by the constraint propagate
    immediately and abort the enumeration.

    Args:
        domains: Generators in placement order. A generator may only look up
            identities placed by earlier generators (or present in
            ``partial_inst``).
        constraint: Predicate over (candidate, partial assignment so far).
        partial_inst: Assignment to start from.

    Yields:
        Each complete assignment, in depth-first order.
    """
    domains = list(domains)
    n = len(domains)
    if n == 0:
        yield partial_inst
        return

    tried = pruned = found = 0
    stack: List[Tuple[Assignment, Iterator[Variable]]] = [
        (partial_inst, iter(domains[0](partial_inst)))
    ]
    while stack:
        prefix, candidates = stack[-1]
        descended = False
        for var in candidates:
            tried += 1
            if not constraint(var, prefix):
                pruned += 1
                continue
            extended = prefix.extend(var)
            depth = len(stack)
            if depth == n:
                found += 1
                yield extended
                continue
            stack.append((extended, iter(domains[depth](extended))))
            descended = True
            break
        if not descended:
            stack.pop()

    logger.debug(
        "search over %d domains finished: %d candidates tried, %d pruned, %d solutions",
        n, tried, pruned, found,
    )


def count_solutions(
    domains: Sequence[DomainGenerator], constraint: ConstraintPredicate = always
) -> int:
    return sum(1 for _ in iter_solutions(domains, constraint))


def expand_frontier(
    domains: Sequence[DomainGenerator],
    constraint: ConstraintPredicate,
    partial_inst: Assignment = EMPTY,
    min_prefixes: int = 2,
) -> Tuple[int, List[Assignment]]:
    """
    Expand the search tree level by level until at least ``min_prefixes``
    partial assignments exist (or the generators run out).

    Prefixes keep the order the depth-first search would visit them in.

    Returns:
        (number of generators consumed, surviving prefixes)
    """
    level = [partial_inst]
    depth = 0
    while depth < len(domains) and 0 < len(level) < min_prefixes:
        nxt = []
        for prefix in level:
            for var in domains[depth](prefix):
                if constraint(var, prefix):
                    nxt.append(prefix.extend(var))
        level = nxt
        depth += 1
    return depth, level


def _solve_subtree(
    domains: Sequence[DomainGenerator], constraint: ConstraintPredicate, prefix: Assignment
) -> List[Assignment]:
    return list(iter_solutions(domains, constraint, prefix))


def search(
    domains: Sequence[DomainGenerator],
    constraint: ConstraintPredicate = always,
    max_workers: int = 1,
    max_solutions: Optional[int] = None,
) -> List[Assignment]:
    """
    All complete assignments, as a list.

    With ``max_workers > 1`` the independent subtrees below a frontier of
    prefixes are solved in a process pool; generators and the constraint
    must then be picklable. The merged result has the same order as the
    sequential search.

    With ``max_solutions`` set, the search runs sequentially and stops after
    that many solutions.
    """
    domains = list(domains)
    if max_solutions is not None:
        if max_solutions < 1:
            raise ValueError(f"max_solutions must be >= 1, got {max_solutions}")
        return list(islice(iter_solutions(domains, constraint), max_solutions))
    if max_workers <= 1:
        return list(iter_solutions(domains, constraint))

    depth, frontier = expand_frontier(domains, constraint, EMPTY, max_workers)
    if depth == len(domains):
        return frontier
    if len(frontier) <= 1:
        # Nothing to fan out over.
        return [s for prefix in frontier for s in iter_solutions(domains[depth:], constraint, prefix)]

    logger.debug(
        "fanning out %d subtrees at depth %d over %d workers", len(frontier), depth, max_workers
    )
    solve = partial(_solve_subtree, domains[depth:], constraint)
    solutions: List[Assignment] = []
    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        for chunk in pool.map(solve, frontier):
            solutions.extend(chunk)
    return solutions
