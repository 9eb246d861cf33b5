"""
RNA pseudoknot -- Science 253:1255, Figures 4a and 4b.

Helix 1 is built from A23 outwards with Dumas Watson-Crick pairs. Loop L2
(16..18) must close on U19 within 4.0 A and loop L1 (4..6) on U7 within
4.5 A (O3' of the loop residue to P of its successor).
"""

from .base import DistanceConstraint, DomainStep, Problem

PSEUDOKNOT = Problem(
    name="pseudoknot",
    description="RNA pseudoknot, Science 253:1255 Fig. 4",
    steps=(
        DomainStep("reference", 23, "rA"),
        DomainStep("wc_dumas", 8, "rU", 23),
        DomainStep("helix3", 22, "rG", 23),
        DomainStep("wc_dumas", 9, "rC", 22),
        DomainStep("helix3", 21, "rG", 22),
        DomainStep("wc_dumas", 10, "rC", 21),
        DomainStep("helix3", 20, "rC", 21),
        DomainStep("wc_dumas", 11, "rG", 20),
        DomainStep("helix3", 19, "rU_prime", 20),
        DomainStep("wc_dumas", 12, "rA", 19),
        # Helix 1
        DomainStep("helix3", 3, "rC", 19),
        DomainStep("wc_dumas", 13, "rG", 3),
        DomainStep("helix3", 2, "rC", 3),
        DomainStep("wc_dumas", 14, "rG", 2),
        DomainStep("helix3", 1, "rC", 2),
        DomainStep("wc_dumas", 15, "rG_prime", 1),
        # L2 loop
        DomainStep("p_o3", 16, "rUs", 15),
        DomainStep("p_o3", 17, "rCs", 16),
        DomainStep("p_o3", 18, "rAs", 17),
        # L1 loop
        DomainStep("helix3", 7, "rU", 8),
        DomainStep("p_o3", 4, "rCs", 3),
        DomainStep("stacked5", 5, "rU", 4),
        DomainStep("stacked5", 6, "rC", 5),
    ),
    constraints=(
        DistanceConstraint(target=18, partner=19, max_distance=4.0),
        DistanceConstraint(target=6, partner=7, max_distance=4.5),
    ),
)
