"""Placed variables, relationship transforms and domain-generator combinators."""

from .combinators import (
    ConstraintPredicate,
    DomainGenerator,
    align_to_reference,
    base_frame,
    helix3,
    helix5,
    p_o3,
    reference,
    stacked3,
    stacked5,
    wc,
    wc_dumas,
)
from .relations import (
    A38_G37_TFO,
    G37_A38_TFO,
    HELIX3_TFO,
    HELIX5_TFO,
    WC_DUMAS_TFO,
    WC_TFO,
)
from .variables import EMPTY, Assignment, Variable

__all__ = [
    "Variable",
    "Assignment",
    "EMPTY",
    "DomainGenerator",
    "ConstraintPredicate",
    "base_frame",
    "align_to_reference",
    "reference",
    "wc",
    "wc_dumas",
    "helix5",
    "helix3",
    "stacked5",
    "stacked3",
    "p_o3",
    "WC_TFO",
    "WC_DUMAS_TFO",
    "HELIX5_TFO",
    "HELIX3_TFO",
    "G37_A38_TFO",
    "A38_G37_TFO",
]
