"""Feasibility solving of an :class:`EquationSystem` with z3."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional

import z3

from .clifford import BinaryCliffordGate
from .equations import CoefficientKey, EquationSystem

logger = logging.getLogger(__name__)

# Slack variables range over [-DEFAULT_SLACK_BOUND, DEFAULT_SLACK_BOUND]
DEFAULT_SLACK_BOUND = 1000


@dataclass
class SolverConfig:
    """
    Settings for a single solver session.

    Attributes
    ----------
    timeout_ms:
        Wall clock limit handed to z3, ``None`` for no limit. Running out of
        time yields a ``SOLVER_ERROR`` result.
    slack_bound:
        Bound on the integer slack variables used to express evenness.
    random_seed:
        Seed for the solver's internal heuristics, ``None`` keeps the default.
    verbose:
        Log the generated system and the decoded layer at DEBUG level.
    """

    timeout_ms: Optional[int] = None
    slack_bound: int = DEFAULT_SLACK_BOUND
    random_seed: Optional[int] = None
    verbose: bool = False


class SolveStatus(Enum):
    SOLVED = "solved"
    INFEASIBLE = "infeasible"
    SOLVER_ERROR = "solver_error"


@dataclass
class SolveResult:
    status: SolveStatus
    gates: Optional[List[BinaryCliffordGate]] = None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def __bool__(self) -> bool:
        return self.found


@contextmanager
def solver_session(config: SolverConfig) -> Iterator[z3.Solver]:
    """A fresh z3 context and solver, reset when the block exits."""
    ctx = z3.Context()
    solver = z3.Solver(ctx=ctx)
    try:
        if config.timeout_ms is not None:
            solver.set("timeout", int(config.timeout_ms))
        if config.random_seed is not None:
            solver.set("random_seed", int(config.random_seed))
        yield solver
    finally:
        solver.reset()


def _declare(solver: z3.Solver, system: EquationSystem, slack_bound: int) -> Dict[CoefficientKey, z3.ArithRef]:
    ctx = solver.ctx
    variables = {}
    for key in system.coefficient_keys():
        var = z3.Int(key.name(), ctx)
        solver.add(var >= 0, var <= 1)
        variables[key] = var

    for constraint in system.quadratic:
        (a, d), (b, c) = constraint.keys()
        solver.add(variables[a] * variables[d] + variables[b] * variables[c] == 1)

    for constraint in system.linear:
        expr = z3.IntVal(constraint.constant, ctx)
        for key, coeff in constraint.terms.items():
            expr = expr + coeff * variables[key]
        slack = z3.Int(f"k_{constraint.row}_{constraint.column}", ctx)
        solver.add(slack >= -slack_bound, slack <= slack_bound)
        solver.add(expr == 2 * slack)
    return variables


def _decode(model: z3.ModelRef, variables: Dict[CoefficientKey, z3.ArithRef], n: int) -> List[BinaryCliffordGate]:
    def value(role, qubit):
        return model.eval(variables[CoefficientKey(role, qubit)], model_completion=True).as_long()

    return [
        BinaryCliffordGate(value("axx", q), value("axz", q), value("azx", q), value("azz", q))
        for q in range(n)
    ]


def solve_equations(system: EquationSystem, config: Optional[SolverConfig] = None) -> SolveResult:
    """
    Run one feasibility query for ``system``.

    Returns:
        SolveResult: ``SOLVED`` with one gate per qubit, ``INFEASIBLE`` when the
        solver proves there is no assignment, or ``SOLVER_ERROR`` when the solver
        gives up or fails. Solver exceptions are not propagated.
    """
    config = config or SolverConfig()
    try:
        with solver_session(config) as solver:
            variables = _declare(solver, system, config.slack_bound)
            result = solver.check()
            if result == z3.sat:
                gates = _decode(solver.model(), variables, system.n)
                if config.verbose:
                    for qubit, gate in enumerate(gates):
                        logger.debug("U_%d\n%s", qubit, gate)
                return SolveResult(SolveStatus.SOLVED, gates=gates)
            if result == z3.unsat:
                return SolveResult(SolveStatus.INFEASIBLE, reason="no local Clifford satisfies the constraints")
            reason = solver.reason_unknown()
            logger.warning("Solver returned unknown: %s", reason)
            return SolveResult(SolveStatus.SOLVER_ERROR, reason=reason)
    except z3.Z3Exception as exc:
        logger.warning("Exception during optimization: %s", exc)
        return SolveResult(SolveStatus.SOLVER_ERROR, reason=str(exc))
    except Exception as exc:
        logger.warning("Exception during optimization: %r", exc)
        return SolveResult(SolveStatus.SOLVER_ERROR, reason=repr(exc))


__all__ = [
    "DEFAULT_SLACK_BOUND",
    "SolverConfig",
    "SolveStatus",
    "SolveResult",
    "solver_session",
    "solve_equations",
]
