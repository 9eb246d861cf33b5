"""
tRNA anticodon loop -- Science 253:1255, Figures 3a, 3b and 3c.

The stem C27..A31 / U39..G43 is built as a regular helix, the loop is grown
back from A38 to G34 by stacking, and the two residues 32 and 33 are tried
in every backbone rotamer of every C and U conformation. The loop closes
when the O3' of 33 lands within 3.0 A of the P of 34.
"""

from .base import DistanceConstraint, DomainStep, Problem

ANTICODON = Problem(
    name="anticodon",
    description="tRNA anticodon loop, Science 253:1255 Fig. 3",
    steps=(
        DomainStep("reference", 27, "rC"),
        DomainStep("helix5", 28, "rC", 27),
        DomainStep("helix5", 29, "rA", 28),
        DomainStep("helix5", 30, "rG", 29),
        DomainStep("helix5", 31, "rA", 30),
        DomainStep("wc", 39, "rU", 31),
        DomainStep("helix5", 40, "rC", 39),
        DomainStep("helix5", 41, "rU", 40),
        DomainStep("helix5", 42, "rG", 41),
        DomainStep("helix5", 43, "rG", 42),
        DomainStep("stacked3", 38, "rA", 39),
        DomainStep("stacked3", 37, "rG", 38),
        DomainStep("stacked3", 36, "rA", 37),
        DomainStep("stacked3", 35, "rA", 36),
        DomainStep("stacked3", 34, "rG", 35),
        DomainStep("p_o3", 32, "rCs", 31),
        DomainStep("p_o3", 33, "rUs", 32),
    ),
    constraints=(DistanceConstraint(target=33, partner=34, max_distance=3.0),),
)
