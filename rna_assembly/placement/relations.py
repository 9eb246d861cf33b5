"""
Fixed relationship transforms between two nucleotides.

Each constant expresses where a nucleotide's standard frame sits relative to
an already placed neighbour for one structural relationship. All values come
from crystallographic reference data.
"""

from ..geometry.transforms import Transform

# Watson-Crick pairing. From Chandrasekaran R. et al (1989) A Re-Examination
# of the Crystal Structure of A-DNA Using Fiber Diffraction Data.
# J. Biomol. Struct. & Dynamics 6(6):1189-1202.
WC_TFO = Transform.from_components(
    (-1.0000, 0.0028, -0.0019,
     0.0028, 0.3468, -0.9379,
     -0.0019, -0.9379, -0.3468,
     -0.0080, 6.0730, 8.7208)
)

# Watson-Crick pairing, Dumas geometry.
WC_DUMAS_TFO = Transform.from_components(
    (-0.9737, -0.1834, 0.1352,
     -0.1779, 0.2417, -0.9539,
     0.1422, -0.9529, -0.2679,
     0.4837, 6.2649, 8.0285)
)

# One helical step towards the 5' end.
HELIX5_TFO = Transform.from_components(
    (0.9886, -0.0961, 0.1156,
     0.1424, 0.8452, -0.5152,
     -0.0482, 0.5258, 0.8492,
     -3.8737, 0.5480, 3.8024)
)

# One helical step towards the 3' end.
HELIX3_TFO = Transform.from_components(
    (0.9886, 0.1424, -0.0482,
     -0.0961, 0.8452, 0.5258,
     0.1156, -0.5152, 0.8492,
     3.4426, 2.0474, -3.7042)
)

# Stacking observed between G37 and A38 of tRNA, read 5' -> 3'.
G37_A38_TFO = Transform.from_components(
    (0.9991, 0.0164, -0.0387,
     -0.0375, 0.7616, -0.6470,
     0.0189, 0.6478, 0.7615,
     -3.3018, 0.9975, 2.5585)
)

# The same stacking read 3' -> 5'.
A38_G37_TFO = Transform.from_components(
    (0.9991, -0.0375, 0.0189,
     0.0164, 0.7616, 0.6478,
     -0.0387, -0.6470, 0.7615,
     3.3819, 0.7718, -2.5321)
)
