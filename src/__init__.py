# Phase and Pauli operators in binary symplectic form
from .phase import BinaryPhase
from .pauli import (
    PAULI_CHARACTERS, PauliParseError, Pauli, popcount, format_pauli,
    commutator, commutes, bit_matrices, commutation_matrix,
    is_commuting, is_independent
)

# Graph states and single-qubit binary Clifford gates
from .graph import Graph
from .clifford import (
    BinaryCliffordGate, IDENTITY, HADAMARD, PHASE, SINGLE_QUBIT_CLIFFORDS,
    apply_layer
)

# Local Clifford equations and their solution
from .equations import (
    ROLES, DimensionMismatchError, NonLinearExpressionError, CoefficientKey,
    LinearConstraint, QuadraticConstraint, EquationSystem, build_equations
)
from .solver import (
    DEFAULT_SLACK_BOUND, SolverConfig, SolveStatus, SolveResult,
    solver_session, solve_equations
)
from .matching import (
    find_local_clifford, find_local_clifford_gates, find_local_cliffords,
    verify_local_clifford
)

# Define what gets imported with "from lcfinder import *"
__all__ = [
    # Pauli algebra
    'BinaryPhase', 'PAULI_CHARACTERS', 'PauliParseError', 'Pauli', 'popcount',
    'format_pauli', 'commutator', 'commutes', 'bit_matrices',
    'commutation_matrix', 'is_commuting', 'is_independent',

    # Graphs and gates
    'Graph', 'BinaryCliffordGate', 'IDENTITY', 'HADAMARD', 'PHASE',
    'SINGLE_QUBIT_CLIFFORDS', 'apply_layer',

    # Equation builder
    'ROLES', 'DimensionMismatchError', 'NonLinearExpressionError',
    'CoefficientKey', 'LinearConstraint', 'QuadraticConstraint',
    'EquationSystem', 'build_equations',

    # Solver adapter
    'DEFAULT_SLACK_BOUND', 'SolverConfig', 'SolveStatus', 'SolveResult',
    'solver_session', 'solve_equations',

    # Matching
    'find_local_clifford', 'find_local_clifford_gates', 'find_local_cliffords',
    'verify_local_clifford',
]
