"""Statistics and tabular export over assembled structures."""
from __future__ import annotations

from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from ..placement.variables import Assignment, Variable

FRAME_COLUMNS = ["solution", "identity", "template", "base", "atom", "x", "y", "z"]


def variable_atom_coords(var: Variable) -> np.ndarray:
    """World coordinates of every atom of a placed nucleotide, shape [atoms, 3]."""
    return var.atom_coords()


def variable_most_distant_atom(var: Variable) -> float:
    """Largest distance from the origin over the atoms of one nucleotide."""
    return float(np.sqrt((var.atom_coords() ** 2).sum(axis=1)).max())


def solution_most_distant_atom(solution: Assignment) -> float:
    return max(variable_most_distant_atom(v) for v in solution)


def most_distant_atom(solutions: Iterable[Assignment]) -> float:
    """
    Largest distance from the global origin to any atom of any solution.

    Raises:
        ValueError: If ``solutions`` is empty.
    """
    distances = [solution_most_distant_atom(s) for s in solutions]
    if not distances:
        raise ValueError("most_distant_atom needs at least one solution")
    return max(distances)


def summarize(solutions: List[Assignment]) -> Dict[str, object]:
    """Aggregate numbers reported by the driver."""
    summary: Dict[str, object] = {"solutions": len(solutions)}
    if solutions:
        summary["residues"] = len(solutions[0])
        summary["most_distant_atom"] = most_distant_atom(solutions)
    return summary


def solutions_to_frame(solutions: Iterable[Assignment]) -> pd.DataFrame:
    """Convert assignments to one DataFrame row per atom.

    Args:
        solutions: Complete (or partial) assignments.

    Returns:
        DataFrame with columns:
            - solution: 0-based index of the assignment
            - identity: residue identity
            - template: library name of the template
            - base: A, C, G or U
            - atom: atom name
            - x, y, z: world coordinates
    """
    frames = []
    for index, solution in enumerate(solutions):
        for var in solution:
            coords = var.atom_coords()
            names = var.template.atom_names()
            frames.append(
                pd.DataFrame(
                    {
                        "solution": index,
                        "identity": var.identity,
                        "template": var.template.name,
                        "base": var.template.kind.value,
                        "atom": list(names),
                        "x": coords[:, 0],
                        "y": coords[:, 1],
                        "z": coords[:, 2],
                    }
                )
            )
    if not frames:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.concat(frames, ignore_index=True)[FRAME_COLUMNS]
