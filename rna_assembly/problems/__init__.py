"""Problem model and the built-in problem instances."""

from typing import Dict

from .anticodon import ANTICODON
from .base import (
    ConstraintSet,
    DistanceConstraint,
    DomainStep,
    Problem,
    normalize_relation,
    problem_from_mapping,
)
from .pseudoknot import PSEUDOKNOT

PROBLEMS: Dict[str, Problem] = {
    ANTICODON.name: ANTICODON,
    PSEUDOKNOT.name: PSEUDOKNOT,
}


def get_problem(name: str) -> Problem:
    try:
        return PROBLEMS[name]
    except KeyError:
        raise ValueError(f"Unknown problem {name!r}; available: {sorted(PROBLEMS)}") from None


__all__ = [
    "Problem",
    "DomainStep",
    "DistanceConstraint",
    "ConstraintSet",
    "normalize_relation",
    "problem_from_mapping",
    "ANTICODON",
    "PSEUDOKNOT",
    "PROBLEMS",
    "get_problem",
]
