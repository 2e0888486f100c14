"""Symbolic GF(2) equations for mapping a stabilizer onto a graph state by a local Clifford."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Sequence

import numpy as np
import sympy
from numba import njit

from .clifford import BinaryCliffordGate
from .graph import Graph
from .pauli import Pauli, bit_matrices

logger = logging.getLogger(__name__)

# Entries of the per-qubit 2x2 GF(2) matrix, in row-major order
ROLES = ("axx", "axz", "azx", "azz")


class DimensionMismatchError(ValueError):
    """Raised when the stabilizer set does not fit the graph's qubit count."""


class NonLinearExpressionError(ValueError):
    """Raised when a symbolic entry contains a product of unknowns."""


class CoefficientKey(NamedTuple):
    role: str
    qubit: int

    def name(self) -> str:
        return f"{self.role}{self.qubit}"


@dataclass
class LinearConstraint:
    """``constant + sum(coeff * unknown)`` must be even, for entry (row, column) of the lhs."""

    row: int
    column: int
    constant: int
    terms: Dict[CoefficientKey, int]


@dataclass
class QuadraticConstraint:
    """``axx*azz + axz*azx == 1`` on one qubit."""

    qubit: int

    def keys(self):
        return (
            (CoefficientKey("axx", self.qubit), CoefficientKey("azz", self.qubit)),
            (CoefficientKey("axz", self.qubit), CoefficientKey("azx", self.qubit)),
        )


@dataclass
class EquationSystem:
    n: int
    m: int
    R: np.ndarray
    S: np.ndarray
    adjacency: np.ndarray
    symbols: Dict[str, List[sympy.Symbol]]
    keys: Dict[sympy.Symbol, CoefficientKey]
    lhs: sympy.Matrix
    linear: List[LinearConstraint] = field(default_factory=list)
    quadratic: List[QuadraticConstraint] = field(default_factory=list)

    def is_trivial(self) -> bool:
        return self.n == 0 or self.m == 0

    def coefficient_keys(self) -> List[CoefficientKey]:
        return [CoefficientKey(role, qubit) for qubit in range(self.n) for role in ROLES]

    def residual(self, gates: Sequence[BinaryCliffordGate]) -> np.ndarray:
        """
        Evaluate the linear system mod 2 for a candidate layer.

        Returns:
            np.ndarray: (n, m) matrix, all zero when every transformed generator
            is consistent with the graph state.
        """
        if len(gates) != self.n:
            raise DimensionMismatchError(f"Expected {self.n} gates, got {len(gates)}")
        coefficients = np.array(
            [[g.axx, g.axz, g.azx, g.azz] for g in gates], dtype=np.uint8
        ).reshape(self.n, 4)
        return _residual_mod2(self.adjacency, self.R, self.S, coefficients)

    def describe(self) -> str:
        return f"R =\n{self.R}\nS =\n{self.S}\nlhs =\n{sympy.pretty(self.lhs)}"


@njit(cache=True)
def _residual_mod2(A, R, S, coefficients):
    n, m = R.shape
    x_image = np.zeros((n, m), dtype=np.uint8)
    z_image = np.zeros((n, m), dtype=np.uint8)
    for i in range(n):
        for j in range(m):
            x_image[i, j] = (coefficients[i, 0] & R[i, j]) ^ (coefficients[i, 1] & S[i, j])
            z_image[i, j] = (coefficients[i, 2] & R[i, j]) ^ (coefficients[i, 3] & S[i, j])
    out = np.zeros((n, m), dtype=np.uint8)
    for i in range(n):
        for j in range(m):
            parity = z_image[i, j]
            for k in range(n):
                parity ^= A[i, k] & x_image[k, j]
            out[i, j] = parity
    return out


def _symbol_matrix(rows: int, cols: int, values) -> sympy.Matrix:
    return sympy.Matrix(rows, cols, lambda i, j: int(values[int(i), int(j)]))


def _diagonal(symbols: List[sympy.Symbol]) -> sympy.Matrix:
    n = len(symbols)
    return sympy.Matrix(n, n, lambda i, j: symbols[int(i)] if i == j else 0)


def _linearize(expr, keys: Dict[sympy.Symbol, CoefficientKey], row: int, column: int) -> LinearConstraint:
    constant = 0
    terms: Dict[CoefficientKey, int] = {}
    for term, coeff in sympy.expand(expr).as_coefficients_dict().items():
        if coeff == 0:
            continue
        if term == 1:
            constant += int(coeff)
        elif term in keys:
            terms[keys[term]] = terms.get(keys[term], 0) + int(coeff)
        else:
            raise NonLinearExpressionError(f"Entry ({row}, {column}) is not linear: {expr}")
    return LinearConstraint(row=row, column=column, constant=constant, terms=terms)


def build_equations(graph: Graph, stabilizers: Sequence[Pauli]) -> EquationSystem:
    """
    Build the GF(2) system whose solutions are local Cliffords taking the
    stabilizer generators into the stabilizer group of the graph state.

    The transformed generators have X part ``Axx*R + Axz*S`` and Z part
    ``Azx*R + Azz*S``. They belong to the graph state's stabilizer group exactly
    when ``A*(Axx*R + Axz*S) + Azx*R + Azz*S`` vanishes mod 2, which is encoded as
    every entry of that matrix being even.

    Args:
        graph (Graph): Target graph state.
        stabilizers (list): Generators, each acting on ``graph.num_vertices()`` qubits.

    Returns:
        EquationSystem: Linear parity constraints plus one invertibility constraint per qubit.
    """
    n = graph.num_vertices()
    m = len(stabilizers)
    for j, pauli in enumerate(stabilizers):
        if pauli.n != n:
            raise DimensionMismatchError(
                f"Generator {j} acts on {pauli.n} qubits but the graph has {n} vertices"
            )

    R, S = bit_matrices(stabilizers, n)
    A = graph.get_adjacency_matrix()

    symbols = {role: [sympy.Symbol(f"{role}{i}", integer=True) for i in range(n)] for role in ROLES}
    keys = {
        symbol: CoefficientKey(role, qubit)
        for role, vector in symbols.items()
        for qubit, symbol in enumerate(vector)
    }
    Axx, Axz, Azx, Azz = (_diagonal(symbols[role]) for role in ROLES)
    R_sym = _symbol_matrix(n, m, R)
    S_sym = _symbol_matrix(n, m, S)
    A_sym = _symbol_matrix(n, n, A)

    lhs = (A_sym * (Axx * R_sym + Axz * S_sym) + Azx * R_sym + Azz * S_sym).applyfunc(sympy.expand)

    system = EquationSystem(n=n, m=m, R=R, S=S, adjacency=A, symbols=symbols, keys=keys, lhs=lhs)
    for i in range(n):
        for j in range(m):
            system.linear.append(_linearize(lhs[i, j], keys, i, j))
    system.quadratic = [QuadraticConstraint(qubit) for qubit in range(n)]
    logger.debug("Built %d linear and %d quadratic constraints on %d qubits",
                 len(system.linear), len(system.quadratic), n)
    return system


__all__ = [
    "ROLES",
    "DimensionMismatchError",
    "NonLinearExpressionError",
    "CoefficientKey",
    "LinearConstraint",
    "QuadraticConstraint",
    "EquationSystem",
    "build_equations",
]
