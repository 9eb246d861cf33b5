"""
Domain generators.

Every combinator returns a domain generator: a callable that takes the
current partial assignment and returns the list of candidate Variables for
one target identity. Generators are ``functools.partial`` objects over
module-level functions so they can be shipped to worker processes.

Given an already placed reference nucleotide and a fixed relationship
transform R, ``align_to_reference`` computes the transform that puts a new
template in that relationship::

    combine(template.dgf_base_tfo, combine(R, inverse_ortho(base_frame(ref))))
"""

import logging
from functools import partial
from typing import Callable, List, Sequence

from ..geometry.transforms import IDENTITY, Transform, align, combine, inverse_ortho
from ..nucleotides.templates import (
    BaseKind,
    NucleotideTemplate,
    atom_c1_prime,
    atom_c2,
    atom_c3_prime,
    atom_c4,
    atom_c4_prime,
    atom_n1,
    atom_n9,
    atom_o3_prime,
    dgf_base_tfo,
)
from .relations import (
    A38_G37_TFO,
    G37_A38_TFO,
    HELIX3_TFO,
    HELIX5_TFO,
    WC_DUMAS_TFO,
    WC_TFO,
)
from .variables import Assignment, Variable

logger = logging.getLogger(__name__)

DomainGenerator = Callable[[Assignment], List[Variable]]
ConstraintPredicate = Callable[[Variable, Assignment], bool]


def base_frame(var: Variable) -> Transform:
    """
    Frame of a placed nucleotide's base plane.

    Purines are aligned on C1', N9, C4 and pyrimidines on C1', N1, C2.
    """
    c1 = var.atom_position(atom_c1_prime)
    if var.template.kind in (BaseKind.A, BaseKind.G):
        return align(c1, var.atom_position(atom_n9), var.atom_position(atom_c4))
    return align(c1, var.atom_position(atom_n1), var.atom_position(atom_c2))


def align_to_reference(
    relation: Transform, template: NucleotideTemplate, reference: Variable
) -> Transform:
    """Transform placing ``template`` in relationship ``relation`` to ``reference``."""
    local = inverse_ortho(base_frame(reference))
    return combine(dgf_base_tfo(template), combine(relation, local))


def _reference(template: NucleotideTemplate, i: int, partial_inst: Assignment) -> List[Variable]:
    return [Variable(i, IDENTITY, template)]


def _related(
    relations: Sequence[Transform],
    template: NucleotideTemplate,
    i: int,
    j: int,
    partial_inst: Assignment,
) -> List[Variable]:
    ref = partial_inst.get(j)
    return [Variable(i, align_to_reference(r, template, ref), template) for r in relations]


def _p_o3(
    templates: Sequence[NucleotideTemplate], i: int, j: int, partial_inst: Assignment
) -> List[Variable]:
    ref = partial_inst.get(j)
    frame = inverse_ortho(
        align(
            ref.atom_position(atom_o3_prime),
            ref.atom_position(atom_c3_prime),
            ref.atom_position(atom_c4_prime),
        )
    )
    candidates = []
    # Last template first; rotamers 60, 180, 275 within each template.
    for n in reversed(templates):
        for rotamer in n.rotamer_transforms():
            candidates.append(Variable(i, combine(rotamer, frame), n))
    logger.debug("p_o3 %d <- %d: %d candidates", i, j, len(candidates))
    return candidates


def reference(template: NucleotideTemplate, i: int) -> DomainGenerator:
    """Place ``i`` at the identity transform; the origin of the assembly."""
    return partial(_reference, template, i)


def wc(template: NucleotideTemplate, i: int, j: int) -> DomainGenerator:
    """Watson-Crick partner of ``j``."""
    return partial(_related, (WC_TFO,), template, i, j)


def wc_dumas(template: NucleotideTemplate, i: int, j: int) -> DomainGenerator:
    """Watson-Crick partner of ``j`` in the Dumas pairing geometry."""
    return partial(_related, (WC_DUMAS_TFO,), template, i, j)


def helix5(template: NucleotideTemplate, i: int, j: int) -> DomainGenerator:
    """Helical continuation from ``j`` towards the 5' end."""
    return partial(_related, (HELIX5_TFO,), template, i, j)


def helix3(template: NucleotideTemplate, i: int, j: int) -> DomainGenerator:
    """Helical continuation from ``j`` towards the 3' end."""
    return partial(_related, (HELIX3_TFO,), template, i, j)


def stacked5(template: NucleotideTemplate, i: int, j: int) -> DomainGenerator:
    """Two candidates: the G37/A38 stacking geometry, then the plain 5' helical step."""
    return partial(_related, (G37_A38_TFO, HELIX5_TFO), template, i, j)


def stacked3(template: NucleotideTemplate, i: int, j: int) -> DomainGenerator:
    """Two candidates: the A38/G37 stacking geometry, then the plain 3' helical step."""
    return partial(_related, (A38_G37_TFO, HELIX3_TFO), template, i, j)


def p_o3(templates: Sequence[NucleotideTemplate], i: int, j: int) -> DomainGenerator:
    """
    Close the P-O3' link from ``j`` with an unknown torsion.

    Offers every template in ``templates`` in each of its three backbone
    rotamers, i.e. ``3 * len(templates)`` candidates.
    """
    return partial(_p_o3, tuple(templates), i, j)
