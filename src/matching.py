from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from galois import GF2
from joblib import Parallel, delayed

from .clifford import BinaryCliffordGate
from .equations import DimensionMismatchError, build_equations
from .graph import Graph
from .pauli import Pauli, bit_matrices
from .solver import SolveResult, SolveStatus, SolverConfig, solve_equations

logger = logging.getLogger(__name__)


def find_local_clifford(
    graph: Graph,
    stabilizers: Sequence[Pauli],
    config: Optional[SolverConfig] = None,
) -> SolveResult:
    """
    Find a local Clifford (if it exists) that rotates a given stabilizer into the
    graph state |G>.

    Args:
        graph (Graph): Graph describing the target graph state.
        stabilizers (list): Stabilizer generators as Pauli operators, one per qubit.
        config (SolverConfig, optional): Solver settings.

    Returns:
        SolveResult: On success ``result.gates`` holds one symplectic 2x2 matrix per
        qubit, corresponding to one of the six single-qubit Clifford classes.
    """
    config = config or SolverConfig()
    n = graph.num_vertices()
    if len(stabilizers) != n:
        reason = f"expected {n} generators for a {n}-vertex graph, got {len(stabilizers)}"
        logger.info("No local Clifford: %s", reason)
        return SolveResult(SolveStatus.INFEASIBLE, reason=reason)
    try:
        system = build_equations(graph, stabilizers)
    except DimensionMismatchError as exc:
        logger.info("No local Clifford: %s", exc)
        return SolveResult(SolveStatus.INFEASIBLE, reason=str(exc))

    if config.verbose:
        logger.debug("%s", system.describe())

    result = solve_equations(system, config)
    logger.info("Local Clifford search on %d qubits: %s", n, result.status.value)
    return result


def find_local_clifford_gates(
    graph: Graph,
    stabilizers: Sequence[Pauli],
    config: Optional[SolverConfig] = None,
) -> Optional[List[BinaryCliffordGate]]:
    """Like :func:`find_local_clifford` but returns the gate list, or ``None`` if no solution was found."""
    result = find_local_clifford(graph, stabilizers, config)
    return result.gates if result.found else None


def find_local_cliffords(
    problems: Iterable[Tuple[Graph, Sequence[Pauli]]],
    config: Optional[SolverConfig] = None,
    n_jobs: int = 1,
) -> List[SolveResult]:
    """
    Solve several independent matching problems, optionally in parallel.

    Every problem is solved in its own solver session. Results are returned in
    input order.
    """
    problems = list(problems)
    if n_jobs == 1:
        return [find_local_clifford(graph, stabilizers, config) for graph, stabilizers in problems]
    return Parallel(n_jobs=n_jobs)(
        delayed(find_local_clifford)(graph, stabilizers, config) for graph, stabilizers in problems
    )


def verify_local_clifford(
    graph: Graph,
    stabilizers: Sequence[Pauli],
    gates: Sequence[BinaryCliffordGate],
) -> bool:
    """
    Check that ``gates`` is a valid layer taking the stabilizer generators into the
    stabilizer group of the graph state, ignoring phases.
    """
    n = graph.num_vertices()
    if len(gates) != n or len(stabilizers) != n:
        return False
    if not all(gate.is_symplectic() for gate in gates):
        return False
    if any(pauli.n != n for pauli in stabilizers):
        return False
    if n == 0:
        return True

    R, S = bit_matrices(stabilizers, n)
    coefficients = np.array([[g.axx, g.axz, g.azx, g.azz] for g in gates], dtype=np.uint8)
    Axx, Axz, Azx, Azz = (GF2(np.diag(coefficients[:, k])) for k in range(4))
    R, S = GF2(R), GF2(S)
    A = GF2(graph.get_adjacency_matrix())
    x_image = Axx @ R + Axz @ S
    z_image = Azx @ R + Azz @ S
    residual = (A @ x_image + z_image).view(np.ndarray)
    return not residual.any()


__all__ = [
    "find_local_clifford",
    "find_local_clifford_gates",
    "find_local_cliffords",
    "verify_local_clifford",
]
