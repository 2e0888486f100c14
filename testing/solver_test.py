import unittest
from contextlib import contextmanager
from unittest import mock

import z3

from lcfinder import (
    Graph,
    Pauli,
    SolveResult,
    SolveStatus,
    SolverConfig,
    build_equations,
    solve_equations,
    solver_session,
)


def _edge():
    return Graph([[0, 1], [1, 0]])


class TestSolveEquations(unittest.TestCase):
    def test_bell_pair_is_solved(self):
        system = build_equations(_edge(), [Pauli("XZ"), Pauli("ZX")])
        result = solve_equations(system)
        self.assertIs(result.status, SolveStatus.SOLVED)
        self.assertTrue(result)
        self.assertEqual(len(result.gates), 2)
        for gate in result.gates:
            self.assertEqual((gate.axx * gate.azz + gate.axz * gate.azx) % 2, 1)
        self.assertFalse(system.residual(result.gates).any())

    def test_product_state_is_infeasible(self):
        system = build_equations(_edge(), [Pauli("XI"), Pauli("IX")])
        result = solve_equations(system)
        self.assertIs(result.status, SolveStatus.INFEASIBLE)
        self.assertFalse(result)
        self.assertIsNone(result.gates)

    def test_no_generators_any_layer_works(self):
        system = build_equations(_edge(), [])
        result = solve_equations(system)
        self.assertIs(result.status, SolveStatus.SOLVED)
        self.assertTrue(all(gate.is_symplectic() for gate in result.gates))

    def test_config_is_applied(self):
        system = build_equations(_edge(), [Pauli("XZ"), Pauli("ZX")])
        config = SolverConfig(timeout_ms=60000, slack_bound=4, random_seed=7, verbose=True)
        with self.assertLogs("lcfinder.solver", level="DEBUG") as logs:
            result = solve_equations(system, config)
        self.assertTrue(result.found)
        self.assertTrue(any("U_0" in line for line in logs.output))

    def test_solver_exception_becomes_error(self):
        system = build_equations(_edge(), [Pauli("XZ"), Pauli("ZX")])
        with mock.patch("lcfinder.solver._declare", side_effect=z3.Z3Exception("boom")):
            with self.assertLogs("lcfinder.solver", level="WARNING"):
                result = solve_equations(system)
        self.assertIs(result.status, SolveStatus.SOLVER_ERROR)
        self.assertIn("boom", result.reason)
        self.assertIsNone(result.gates)

    def test_unexpected_exception_becomes_error(self):
        system = build_equations(_edge(), [Pauli("XZ"), Pauli("ZX")])
        with mock.patch("lcfinder.solver._declare", side_effect=RuntimeError("licence")):
            with self.assertLogs("lcfinder.solver", level="WARNING"):
                result = solve_equations(system)
        self.assertIs(result.status, SolveStatus.SOLVER_ERROR)
        self.assertIn("licence", result.reason)

    def test_unknown_status_becomes_error(self):
        system = build_equations(_edge(), [Pauli("XZ"), Pauli("ZX")])
        fake = mock.MagicMock()
        fake.check.return_value = z3.unknown
        fake.reason_unknown.return_value = "timeout"

        @contextmanager
        def fake_session(config):
            yield fake

        with mock.patch("lcfinder.solver.solver_session", fake_session), \
                mock.patch("lcfinder.solver._declare", return_value={}):
            with self.assertLogs("lcfinder.solver", level="WARNING"):
                result = solve_equations(system)
        self.assertIs(result.status, SolveStatus.SOLVER_ERROR)
        self.assertEqual(result.reason, "timeout")


class TestSolverSession(unittest.TestCase):
    def test_fresh_solver_per_session(self):
        with solver_session(SolverConfig()) as first:
            self.assertIsInstance(first, z3.Solver)
        with solver_session(SolverConfig(timeout_ms=1000)) as second:
            self.assertIsNot(first, second)
            self.assertIsNot(first.ctx, second.ctx)

    def test_result_truthiness(self):
        self.assertFalse(SolveResult(SolveStatus.INFEASIBLE))
        self.assertFalse(SolveResult(SolveStatus.SOLVER_ERROR, reason="x"))
        self.assertTrue(SolveResult(SolveStatus.SOLVED, gates=[]))


if __name__ == "__main__":
    unittest.main()
