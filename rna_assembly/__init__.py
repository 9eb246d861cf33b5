# rna_assembly/__init__.py
"""
Assemble RNA 3D structures from rigid nucleotide templates by backtracking
over geometric placement relationships.
"""

from rna_assembly.errors import AssemblyError, InvalidVariant, UnknownIdentity
from rna_assembly.placement import EMPTY, Assignment, Variable
from rna_assembly.search import iter_solutions, search

__version__ = "1.0.0"

__all__ = [
    "AssemblyError",
    "InvalidVariant",
    "UnknownIdentity",
    "Variable",
    "Assignment",
    "EMPTY",
    "search",
    "iter_solutions",
]
