"""
Placed nucleotides and partial assignments.

An ``Assignment`` is a persistent singly linked list: ``extend`` returns a new
assignment that shares its prefix with the old one, so sibling search
branches can grow from the same prefix without ever seeing each other's
placements.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

import numpy as np

from ..errors import UnknownIdentity
from ..geometry.transforms import Transform, apply, apply_many
from ..nucleotides.templates import AtomAccessor, NucleotideTemplate

AtomRef = Union[str, AtomAccessor]


def _local_atom(template: NucleotideTemplate, atom: AtomRef) -> np.ndarray:
    if isinstance(atom, str):
        return template.atom(atom)
    return atom(template)


@dataclass(frozen=True, eq=False)
class Variable:
    """One residue positioned in the global frame."""

    identity: int
    transform: Transform
    template: NucleotideTemplate

    def atom_position(self, atom: AtomRef) -> np.ndarray:
        """World position of an atom, given by name or by accessor function."""
        return apply(self.transform, _local_atom(self.template, atom))

    def atom_coords(self) -> np.ndarray:
        """World positions of every atom of the template, as an (N, 3) array."""
        return apply_many(self.transform, self.template.atom_coords())

    def __repr__(self):
        return f"Variable({self.identity}, {self.template.name})"


class Assignment:
    """Immutable, structurally shared collection of placed Variables."""

    __slots__ = ("_head", "_tail", "_size")

    def __init__(self, head: Optional[Variable] = None, tail: Optional["Assignment"] = None):
        self._head = head
        self._tail = tail
        self._size = 0 if head is None else 1 + (len(tail) if tail is not None else 0)

    def extend(self, variable: Variable) -> "Assignment":
        """New assignment with ``variable`` placed after everything in self."""
        return Assignment(variable, self)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def _newest_first(self) -> Iterator[Variable]:
        node = self
        while node is not None and node._head is not None:
            yield node._head
            node = node._tail

    def __iter__(self) -> Iterator[Variable]:
        """Variables in placement order (oldest first)."""
        return iter(self.variables())

    def variables(self) -> List[Variable]:
        out = list(self._newest_first())
        out.reverse()
        return out

    def identities(self) -> List[int]:
        return [v.identity for v in self.variables()]

    def find(self, identity: int) -> Optional[Variable]:
        for v in self._newest_first():
            if v.identity == identity:
                return v
        return None

    def get(self, identity: int) -> Variable:
        """The Variable placed for ``identity``; UnknownIdentity if there is none."""
        v = self.find(identity)
        if v is None:
            raise UnknownIdentity(identity, self.identities())
        return v

    def __getitem__(self, identity: int) -> Variable:
        return self.get(identity)

    def __contains__(self, identity: object) -> bool:
        return any(v.identity == identity for v in self._newest_first())

    def world_atom_position(self, identity: int, atom: AtomRef) -> np.ndarray:
        return self.get(identity).atom_position(atom)

    def __reduce__(self):
        # Rebuild iteratively; the default pickling recurses once per node.
        return (_assignment_from_variables, (self.variables(),))

    def __repr__(self):
        body = ", ".join(f"{v.identity}:{v.template.name}" for v in self.variables())
        return f"Assignment([{body}])"


def _assignment_from_variables(variables: List[Variable]) -> Assignment:
    out = EMPTY
    for v in variables:
        out = out.extend(v)
    return out


EMPTY = Assignment()
