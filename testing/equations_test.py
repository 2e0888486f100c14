import unittest

import numpy as np
import sympy

from lcfinder import (
    HADAMARD,
    IDENTITY,
    CoefficientKey,
    DimensionMismatchError,
    Graph,
    NonLinearExpressionError,
    Pauli,
    build_equations,
)
from lcfinder.equations import _linearize


def _bell_system():
    graph = Graph([[0, 1], [1, 0]])
    return build_equations(graph, [Pauli("XZ"), Pauli("ZX")])


class TestBuildEquations(unittest.TestCase):
    def test_sizes(self):
        system = _bell_system()
        self.assertEqual((system.n, system.m), (2, 2))
        self.assertEqual(len(system.linear), 4)
        self.assertEqual(len(system.quadratic), 2)
        self.assertEqual(system.lhs.shape, (2, 2))
        self.assertFalse(system.is_trivial())

    def test_bit_matrices(self):
        system = _bell_system()
        np.testing.assert_array_equal(system.R, [[1, 0], [0, 1]])
        np.testing.assert_array_equal(system.S, [[0, 1], [1, 0]])

    def test_lhs_entries(self):
        system = _bell_system()
        axx, axz, azx, azz = (system.symbols[role] for role in ("axx", "axz", "azx", "azz"))
        expected = sympy.Matrix([
            [axz[1] + azx[0], axx[1] + azz[0]],
            [axx[0] + azz[1], axz[0] + azx[1]],
        ])
        self.assertTrue((system.lhs - expected).applyfunc(sympy.expand).is_zero_matrix)

    def test_linear_terms_use_structured_keys(self):
        system = _bell_system()
        first = system.linear[0]
        self.assertEqual((first.row, first.column), (0, 0))
        self.assertEqual(first.constant, 0)
        self.assertEqual(first.terms, {CoefficientKey("axz", 1): 1, CoefficientKey("azx", 0): 1})

    def test_symbol_keys(self):
        system = _bell_system()
        self.assertEqual(len(system.keys), 8)
        self.assertEqual(system.keys[system.symbols["azx"][1]], CoefficientKey("azx", 1))
        self.assertEqual(CoefficientKey("azx", 1).name(), "azx1")

    def test_coefficients_can_add_up(self):
        # With a Y on a vertex with a neighbour, both X and Z unknowns of the
        # neighbour appear in the same entry
        graph = Graph([[0, 1], [1, 0]])
        system = build_equations(graph, [Pauli("YI"), Pauli("IX")])
        entry = system.linear[2]  # row 1, column 0
        self.assertEqual((entry.row, entry.column), (1, 0))
        self.assertEqual(
            entry.terms,
            {CoefficientKey("axx", 0): 1, CoefficientKey("axz", 0): 1},
        )

    def test_quadratic_keys(self):
        system = _bell_system()
        self.assertEqual(
            system.quadratic[1].keys(),
            (
                (CoefficientKey("axx", 1), CoefficientKey("azz", 1)),
                (CoefficientKey("axz", 1), CoefficientKey("azx", 1)),
            ),
        )

    def test_residual(self):
        system = _bell_system()
        np.testing.assert_array_equal(system.residual([IDENTITY, IDENTITY]), np.zeros((2, 2)))
        self.assertTrue(system.residual([HADAMARD, IDENTITY]).any())
        with self.assertRaises(DimensionMismatchError):
            system.residual([IDENTITY])

    def test_no_generators(self):
        graph = Graph([[0, 1], [1, 0]])
        system = build_equations(graph, [])
        self.assertTrue(system.is_trivial())
        self.assertEqual(system.linear, [])
        self.assertEqual(len(system.quadratic), 2)

    def test_dimension_mismatch(self):
        graph = Graph([[0, 1], [1, 0]])
        with self.assertRaises(DimensionMismatchError):
            build_equations(graph, [Pauli("XZI"), Pauli("ZXI")])
        self.assertTrue(issubclass(DimensionMismatchError, ValueError))

    def test_describe(self):
        text = _bell_system().describe()
        self.assertIn("R =", text)
        self.assertIn("lhs =", text)

    def test_nonlinear_entry(self):
        system = _bell_system()
        axx, azz = system.symbols["axx"][0], system.symbols["azz"][0]
        with self.assertRaises(NonLinearExpressionError):
            _linearize(axx * azz + 1, system.keys, 0, 0)

    def test_constant_terms(self):
        system = _bell_system()
        axx = system.symbols["axx"][0]
        constraint = _linearize(2 * axx + 3, system.keys, 0, 0)
        self.assertEqual(constraint.constant, 3)
        self.assertEqual(constraint.terms, {CoefficientKey("axx", 0): 2})


if __name__ == "__main__":
    unittest.main()
