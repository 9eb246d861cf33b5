"""Backtracking search over domain generators."""

from .backtracking import always, count_solutions, expand_frontier, iter_solutions, search

__all__ = ["search", "iter_solutions", "count_solutions", "expand_frontier", "always"]
