"""
Declarative problem definitions.

A problem is an ordered list of ``DomainStep`` descriptions plus the
distance constraints that close the rings of the structure. Steps refer to
templates by library name so a problem can also be written in YAML and
loaded through the configuration.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from omegaconf import OmegaConf

from ..geometry.points import distance
from ..nucleotides.database import get_template, get_templates
from ..placement import combinators
from ..placement.combinators import ConstraintPredicate, DomainGenerator
from ..placement.variables import Assignment, Variable
from ..search.backtracking import iter_solutions, search

logger = logging.getLogger(__name__)

# Relations that place one template relative to one reference nucleotide.
PAIRWISE_RELATIONS = {
    "wc": combinators.wc,
    "wc_dumas": combinators.wc_dumas,
    "helix5": combinators.helix5,
    "helix3": combinators.helix3,
    "stacked5": combinators.stacked5,
    "stacked3": combinators.stacked3,
}
RELATIONS = ("reference", "p_o3") + tuple(PAIRWISE_RELATIONS)


def normalize_relation(name: str) -> str:
    """Accept the usual spellings: ``helix5'``, ``p-o3'``, ``wc-dumas``..."""
    return name.strip().replace("'", "").replace("-", "_").lower()


@dataclass(frozen=True)
class DomainStep:
    """One generator of a problem: place ``target`` using ``relation``."""

    relation: str
    target: int
    templates: Union[str, Tuple[str, ...]]
    reference: Optional[int] = None

    def __post_init__(self):
        relation = normalize_relation(self.relation)
        if relation not in RELATIONS:
            raise ValueError(f"Unknown relation {self.relation!r}; expected one of {RELATIONS}")
        templates = (self.templates,) if isinstance(self.templates, str) else tuple(self.templates)
        if not templates:
            raise ValueError(f"Step for {self.target} names no template")
        if relation == "reference":
            if self.reference is not None:
                raise ValueError(f"reference step for {self.target} cannot have a reference nucleotide")
        elif self.reference is None:
            raise ValueError(f"{relation} step for {self.target} needs a reference nucleotide")
        if relation != "p_o3" and len(templates) != 1:
            raise ValueError(f"{relation} step for {self.target} takes exactly one template, got {templates}")
        object.__setattr__(self, "relation", relation)
        object.__setattr__(self, "templates", templates)

    def build(self) -> DomainGenerator:
        if self.relation == "reference":
            return combinators.reference(get_template(self.templates[0]), self.target)
        if self.relation == "p_o3":
            nucls = [t for name in self.templates for t in get_templates(name)]
            return combinators.p_o3(nucls, self.target, self.reference)
        builder = PAIRWISE_RELATIONS[self.relation]
        return builder(get_template(self.templates[0]), self.target, self.reference)


@dataclass(frozen=True)
class DistanceConstraint:
    """
    When ``target`` is placed, the distance from its ``target_atom`` to the
    ``partner_atom`` of the already placed ``partner`` must not exceed
    ``max_distance`` (Angstroms).
    """

    target: int
    partner: int
    max_distance: float
    target_atom: str = "O3'"
    partner_atom: str = "P"

    def __call__(self, var: Variable, partial_inst: Assignment) -> bool:
        if var.identity != self.target:
            return True
        p = partial_inst.get(self.partner).atom_position(self.partner_atom)
        return distance(p, var.atom_position(self.target_atom)) <= self.max_distance


@dataclass(frozen=True)
class ConstraintSet:
    """All member constraints must hold."""

    constraints: Tuple[DistanceConstraint, ...] = ()

    def __call__(self, var: Variable, partial_inst: Assignment) -> bool:
        return all(c(var, partial_inst) for c in self.constraints)


@dataclass(frozen=True)
class Problem:
    name: str
    steps: Tuple[DomainStep, ...]
    constraints: Tuple[DistanceConstraint, ...] = ()
    description: str = field(default="", compare=False)

    def domains(self) -> List[DomainGenerator]:
        return [step.build() for step in self.steps]

    def constraint(self) -> ConstraintPredicate:
        return ConstraintSet(tuple(self.constraints))

    def identities(self) -> List[int]:
        return [step.target for step in self.steps]

    def iter_solutions(self) -> Iterator[Assignment]:
        return iter_solutions(self.domains(), self.constraint())

    def solve(self, max_workers: int = 1, max_solutions: Optional[int] = None) -> List[Assignment]:
        logger.info(
            "Solving %s: %d domains, %d constraints", self.name, len(self.steps), len(self.constraints)
        )
        return search(
            self.domains(), self.constraint(), max_workers=max_workers, max_solutions=max_solutions
        )


def _step_from_mapping(index: int, entry: Mapping[str, Any]) -> DomainStep:
    try:
        templates = entry.get("templates", entry.get("template"))
        reference = entry.get("reference")
        relation, target = entry["relation"], int(entry["target"])
        reference = None if reference is None else int(reference)
    except KeyError as exc:
        raise ValueError(f"Step {index} is missing key {exc}") from exc
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Step {index} is malformed: {exc}") from exc
    if templates is None:
        raise ValueError(f"Step {index} names no template")
    return DomainStep(
        relation=relation,
        target=target,
        templates=templates if isinstance(templates, str) else tuple(templates),
        reference=reference,
    )


def _constraint_from_mapping(index: int, entry: Mapping[str, Any]) -> DistanceConstraint:
    try:
        return DistanceConstraint(
            target=int(entry["target"]),
            partner=int(entry["partner"]),
            max_distance=float(entry["max_distance"]),
            target_atom=entry.get("target_atom", "O3'"),
            partner_atom=entry.get("partner_atom", "P"),
        )
    except KeyError as exc:
        raise ValueError(f"Constraint {index} is missing key {exc}") from exc
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Constraint {index} is malformed: {exc}") from exc


def problem_from_mapping(mapping: Any) -> Problem:
    """
    Build a Problem from a plain mapping or an OmegaConf node::

        name: hairpin
        steps:
          - {relation: reference, target: 1, template: rC}
          - {relation: helix5, target: 2, template: rG, reference: 1}
        constraints:
          - {target: 2, partner: 1, max_distance: 8.0}
    """
    if OmegaConf.is_config(mapping):
        mapping = OmegaConf.to_container(mapping, resolve=True)
    try:
        steps: Sequence[Mapping[str, Any]] = mapping["steps"]
    except (KeyError, TypeError):
        raise ValueError("A problem definition needs a 'steps' list") from None
    return Problem(
        name=mapping.get("name", "custom"),
        steps=tuple(_step_from_mapping(i, s) for i, s in enumerate(steps)),
        constraints=tuple(
            _constraint_from_mapping(i, c) for i, c in enumerate(mapping.get("constraints") or ())
        ),
        description=mapping.get("description", ""),
    )
