"""Derivation matrices of a grammar's symbols."""

from __future__ import annotations

from typing import List

Matrix = List[List[bool]]


def _new_matrix(size: int) -> Matrix:
    return [[False] * size for _ in range(size)]


def transitive_closure(matrix: Matrix) -> Matrix:
    """Close a square boolean matrix under transitivity, in place, and return it."""
    for k, row_k in enumerate(matrix):
        for row in matrix:
            if row[k]:
                row[:] = [x or y for x, y in zip(row, row_k)]
    return matrix


def _reflexive_closure(matrix: Matrix) -> Matrix:
    for i, row in enumerate(matrix):
        row[i] = True
    return matrix


def direct_derivation_matrix(grammar) -> Matrix:
    """Mark each left-hand side as deriving itself and every symbol of its right-hand sides."""
    matrix = _new_matrix(grammar.num_syms())
    for rule in grammar.rules():
        row = matrix[rule.lhs]
        row[rule.lhs] = True
        for sym in rule.rhs:
            row[sym] = True
    return matrix


def reachability_matrix(grammar) -> Matrix:
    """The reflexive, transitive closure of the direct derivation matrix."""
    return _reflexive_closure(transitive_closure(direct_derivation_matrix(grammar)))


def unit_derivation_matrix(grammar) -> Matrix:
    """The transitive closure of derivations through unit rules ``A ::= B`` with ``A != B``."""
    matrix = _new_matrix(grammar.num_syms())
    for rule in grammar.rules():
        # A rule A ::= A is a self-loop, not a cycle.
        if len(rule.rhs) == 1 and rule.lhs != rule.rhs[0]:
            matrix[rule.lhs][rule.rhs[0]] = True
    return transitive_closure(matrix)