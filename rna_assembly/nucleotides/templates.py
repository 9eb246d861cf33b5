"""
Nucleotide template model.

A template is the rigid reference conformation of one nucleotide: four
standard transforms plus the atom coordinates, all expressed in the
template's own local frame. Templates are library data; they are built once
and never mutated.

Atom numbering follows IUPAC-IUB JCBN (1983) Eur. J. Biochem 131, 9-15.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

from ..errors import InvalidVariant
from ..geometry.transforms import Transform


class BaseKind(str, Enum):
    A = "A"
    C = "C"
    G = "G"
    U = "U"

    @property
    def is_purine(self) -> bool:
        return self in (BaseKind.A, BaseKind.G)


###############################################################################
# Atom layout shared by every base kind (sugar-phosphate backbone + ring).
COMMON_ATOMS = (
    "P",
    "O1P",
    "O2P",
    "O5'",
    "C5'",
    "H5'",
    "H5''",
    "C4'",
    "H4'",
    "O4'",
    "C1'",
    "H1'",
    "C2'",
    "H2''",
    "O2'",
    "H2'",
    "C3'",
    "H3'",
    "O3'",
    "N1",
    "N3",
    "C2",
    "C4",
    "C5",
    "C6",
)

# Remaining atoms for each base kind, in storage order.
BASE_SPECIFIC_ATOMS = {
    BaseKind.A: ("N6", "N7", "N9", "C8", "H2", "H61", "H62", "H8"),
    BaseKind.C: ("N4", "O2", "H41", "H42", "H5", "H6"),
    BaseKind.G: ("N2", "N7", "N9", "C8", "O6", "H1", "H21", "H22", "H8"),
    BaseKind.U: ("O2", "O4", "H3", "H5", "H6"),
}

ATOM_INDEX: Dict[BaseKind, Dict[str, int]] = {
    kind: {name: i for i, name in enumerate(COMMON_ATOMS + specific)}
    for kind, specific in BASE_SPECIFIC_ATOMS.items()
}


@dataclass(frozen=True, eq=False)
class NucleotideTemplate:
    """
    Reference conformation of one nucleotide.

    Attributes:
        name: Library name (e.g. ``"rA"``, ``"rC07"``).
        kind: Base kind.
        dgf_base_tfo: Standard frame used by the base-pairing/stacking placements.
        p_o3_275_tfo, p_o3_180_tfo, p_o3_60_tfo: Standard positions for the
            three backbone rotamers used when closing a P-O3' link.
        coords: Read-only (N, 3) array, common atoms first, then the
            base-specific atoms of ``kind``.
    """

    name: str
    kind: BaseKind
    dgf_base_tfo: Transform
    p_o3_275_tfo: Transform
    p_o3_180_tfo: Transform
    p_o3_60_tfo: Transform
    coords: np.ndarray

    def __post_init__(self):
        expected = len(ATOM_INDEX[self.kind])
        if self.coords.shape != (expected, 3):
            raise ValueError(
                f"Template {self.name!r} (base {self.kind.value}) needs {expected} atoms, "
                f"got array of shape {self.coords.shape}"
            )

    @property
    def is_purine(self) -> bool:
        return self.kind.is_purine

    def atom_names(self) -> Tuple[str, ...]:
        return COMMON_ATOMS + BASE_SPECIFIC_ATOMS[self.kind]

    def atom_coords(self) -> np.ndarray:
        return self.coords

    def has_atom(self, name: str) -> bool:
        return name in ATOM_INDEX[self.kind]

    def atom(self, name: str) -> np.ndarray:
        """Local-frame coordinate of an atom; InvalidVariant if this base lacks it."""
        try:
            return self.coords[ATOM_INDEX[self.kind][name]]
        except KeyError:
            raise InvalidVariant(self.name, self.kind.value, name) from None

    def rotamer_transforms(self) -> Tuple[Transform, Transform, Transform]:
        """Backbone rotamer frames in the order 60, 180, 275 degrees."""
        return (self.p_o3_60_tfo, self.p_o3_180_tfo, self.p_o3_275_tfo)

    def __reduce_ex__(self, protocol):
        # Library templates unpickle to the shared instance.
        from .database import TEMPLATES

        if TEMPLATES.get(self.name) is self:
            return (_library_template, (self.name,))
        return super().__reduce_ex__(protocol)

    def __repr__(self):
        return f"NucleotideTemplate({self.name!r}, {self.kind.value})"


def build_template(
    name: str,
    kind: str,
    dgf_base: Sequence[float],
    p_o3_275: Sequence[float],
    p_o3_180: Sequence[float],
    p_o3_60: Sequence[float],
    atoms: Sequence[Sequence[float]],
) -> NucleotideTemplate:
    """Build a template from raw transform components and atom rows."""
    coords = np.array(atoms, dtype=np.float64)
    coords.flags.writeable = False
    return NucleotideTemplate(
        name=name,
        kind=BaseKind(kind),
        dgf_base_tfo=Transform.from_components(dgf_base),
        p_o3_275_tfo=Transform.from_components(p_o3_275),
        p_o3_180_tfo=Transform.from_components(p_o3_180),
        p_o3_60_tfo=Transform.from_components(p_o3_60),
        coords=coords,
    )


###############################################################################
# Accessors. Each takes a template and returns one local-frame coordinate,
# so they can be passed wherever an "atom accessor" is expected.

AtomAccessor = Callable[[NucleotideTemplate], np.ndarray]


def atom_p(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("P")


def atom_c1_prime(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("C1'")


def atom_c2(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("C2")


def atom_c3_prime(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("C3'")


def atom_c4(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("C4")


def atom_c4_prime(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("C4'")


def atom_n1(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("N1")


def atom_o3_prime(n: NucleotideTemplate) -> np.ndarray:
    return n.atom("O3'")


def atom_n9(n: NucleotideTemplate) -> np.ndarray:
    """Glycosidic N9, purines only."""
    if not n.is_purine:
        raise InvalidVariant(n.name, n.kind.value, "N9")
    return n.atom("N9")


def dgf_base_tfo(n: NucleotideTemplate) -> Transform:
    return n.dgf_base_tfo


def p_o3_60_tfo(n: NucleotideTemplate) -> Transform:
    return n.p_o3_60_tfo


def p_o3_180_tfo(n: NucleotideTemplate) -> Transform:
    return n.p_o3_180_tfo


def p_o3_275_tfo(n: NucleotideTemplate) -> Transform:
    return n.p_o3_275_tfo


def base_kind(n: NucleotideTemplate) -> BaseKind:
    return n.kind


def _library_template(name: str) -> NucleotideTemplate:
    from .database import TEMPLATES

    return TEMPLATES[name]
