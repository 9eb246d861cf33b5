"""Consumers of search results: statistics, tables and structure files."""

from .statistics import (
    most_distant_atom,
    solution_most_distant_atom,
    solutions_to_frame,
    summarize,
    variable_atom_coords,
    variable_most_distant_atom,
)
from .structure_io import build_structure, save_structure

__all__ = [
    "variable_atom_coords",
    "variable_most_distant_atom",
    "solution_most_distant_atom",
    "most_distant_atom",
    "summarize",
    "solutions_to_frame",
    "build_structure",
    "save_structure",
]
