from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numba import njit
from galois import GF2

from .phase import BinaryPhase

# Character for each (x, z) pair, indexed by x + 2*z
PAULI_CHARACTERS = "IXZY"

_CHAR_BITS = {
    'I': (0, 0),
    'X': (1, 0),
    'Y': (1, 1),
    'Z': (0, 1),
}


class PauliParseError(ValueError):
    """Raised by strict parsing when a Pauli string contains an unknown character."""


def popcount(value: int) -> int:
    """Counts the number of set bits in a non-negative integer (Hamming weight)."""
    return bin(value).count("1")


def _split_phase_prefix(text: str) -> Tuple[int, str]:
    # 'i' is tested before '-i' and '-', a leading '+' is the identity phase
    if text.startswith('i'):
        return 1, text[1:]
    if text.startswith('-i'):
        return 3, text[2:]
    if text.startswith('-'):
        return 2, text[1:]
    if text.startswith('+'):
        return 0, text[1:]
    return 0, text


class Pauli:
    """
    An n-qubit Pauli operator in binary symplectic form.

    Bit ``q`` of ``r`` marks an X component on qubit ``q`` and bit ``q`` of ``s``
    a Z component. The phase is tracked in the convention where every Y is
    written as ``i*X*Z``, so ``Pauli("Y")`` stores phase ``i`` and displays none.

    Args:
        spec (int, str): Number of qubits for the identity operator, or a Pauli
            string with an optional phase prefix (``i``, ``-i``, ``-``), e.g.
            ``"XIIXZ"``, ``"-XYYYX"``, ``"-iZZ"``, ``"iXIX"``.
    """

    __slots__ = ("n", "r", "s", "phase")

    def __init__(self, spec: Union[int, str] = 1):
        if isinstance(spec, str):
            parsed = Pauli.from_string(spec)
            self.n, self.r, self.s, self.phase = parsed.n, parsed.r, parsed.s, parsed.phase
            return
        if isinstance(spec, (bool, float)) or not isinstance(spec, (int, np.integer)):
            raise ValueError("Pauli expects a qubit count or a Pauli string.")
        if spec < 0:
            raise ValueError("Number of qubits must be non-negative")
        self.n = int(spec)
        self.r = 0
        self.s = 0
        self.phase = BinaryPhase(0)

    @classmethod
    def from_string(cls, text: str, strict: bool = False) -> "Pauli":
        """
        Parse a phased Pauli string.

        Characters outside ``IXYZ`` act as identity on their qubit unless
        ``strict`` is set, in which case a :class:`PauliParseError` is raised.
        """
        phase_inc, body = _split_phase_prefix(text)
        pauli = cls(len(body))
        for qubit, char in enumerate(body):
            bits = _CHAR_BITS.get(char)
            if bits is None:
                if strict:
                    raise PauliParseError(f"Invalid Pauli character '{char}' in '{text}'")
                continue
            if bits[0]:
                pauli.r |= 1 << qubit
            if bits[1]:
                pauli.s |= 1 << qubit
        pauli.phase = BinaryPhase(phase_inc) + pauli._y_phase()
        return pauli

    @classmethod
    def single_x(cls, n: int, qubit: int) -> "Pauli":
        """Identity on n qubits except for an X at ``qubit``, e.g. IIXIII."""
        pauli = cls(n)
        pauli.set_x(qubit, 1)
        return pauli

    @classmethod
    def single_z(cls, n: int, qubit: int) -> "Pauli":
        """Identity on n qubits except for a Z at ``qubit``, e.g. IIZIII."""
        pauli = cls(n)
        pauli.set_z(qubit, 1)
        return pauli

    def copy(self) -> "Pauli":
        other = Pauli(self.n)
        other.r, other.s, other.phase = self.r, self.s, self.phase
        return other

    def num_qubits(self) -> int:
        return self.n

    def _check_qubit(self, qubit: int) -> None:
        if qubit < 0 or qubit >= self.n:
            raise IndexError("qubit index out of range")

    def x(self, qubit: int) -> int:
        self._check_qubit(qubit)
        return (self.r >> qubit) & 1

    def z(self, qubit: int) -> int:
        self._check_qubit(qubit)
        return (self.s >> qubit) & 1

    def set_x(self, qubit: int, value: int) -> None:
        self._check_qubit(qubit)
        mask = 1 << qubit
        self.r = (self.r | mask) if value else (self.r & ~mask)

    def set_z(self, qubit: int, value: int) -> None:
        self._check_qubit(qubit)
        mask = 1 << qubit
        self.s = (self.s | mask) if value else (self.s & ~mask)

    def _y_phase(self) -> BinaryPhase:
        # phase accumulated by writing each Y as iXZ
        return BinaryPhase(popcount(self.r & self.s))

    def get_phase(self) -> BinaryPhase:
        """Phase of the operator when Y is kept as a primitive."""
        return self.phase - self._y_phase()

    def get_xz_phase(self) -> BinaryPhase:
        """Phase of the operator when Y is represented as iXZ."""
        return self.phase

    def increase_phase(self, phase_inc: int) -> None:
        self.phase = self.phase + phase_inc

    def decrease_phase(self, phase_dec: int) -> None:
        self.phase = self.phase - phase_dec

    def pauli_weight(self) -> int:
        """Number of non-identity single-qubit factors."""
        return popcount(self.r | self.s)

    def identity_count(self) -> int:
        return self.n - self.pauli_weight()

    def get_x_string(self) -> int:
        """X components as a bit field, e.g. XYZI -> 0b0011 (qubit 0 is bit 0)."""
        return self.r

    def get_z_string(self) -> int:
        """Z components as a bit field, e.g. XYZI -> 0b0110."""
        return self.s

    def get_identity_string(self) -> int:
        """Bit field with a 1 for each identity factor, e.g. XYZI -> 0b1000."""
        return ~(self.r | self.s) & ((1 << self.n) - 1)

    def to_string(self) -> str:
        return ''.join(PAULI_CHARACTERS[self.x(q) + 2 * self.z(q)] for q in range(self.n))

    def __str__(self) -> str:
        return format_pauli(self)

    def __repr__(self) -> str:
        return f"Pauli('{format_pauli(self)}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pauli):
            return NotImplemented
        return (self.n, self.r, self.s, self.phase) == (other.n, other.r, other.s, other.phase)

    def __hash__(self) -> int:
        return hash((self.n, self.r, self.s, self.phase.value))


def format_pauli(pauli: Pauli) -> str:
    """Displayed phase (omitted when trivial) followed by the operator string."""
    return pauli.get_phase().to_string() + pauli.to_string()


def commutator(p1: Pauli, p2: Pauli) -> int:
    """
    Commutator of two Pauli operators in binary form: 0 if they commute, 1 if
    they anticommute.
    """
    if p1.n != p2.n:
        raise ValueError("Commutator requires equal numbers of qubits")
    return popcount((p1.r & p2.s) ^ (p2.r & p1.s)) & 1


def commutes(p1: Pauli, p2: Pauli) -> bool:
    return commutator(p1, p2) == 0


def bit_matrices(paulis: Sequence[Pauli], n: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Unpack a list of Pauli operators into X and Z bit matrices.

    Args:
        paulis (list): Pauli operators acting on the same number of qubits.
        n (int, optional): Expected number of qubits. Defaults to that of the first operator.

    Returns:
        tuple[np.ndarray, np.ndarray]: ``(R, S)`` of shape (n, m) with
        ``R[i, j] = paulis[j].x(i)`` and ``S[i, j] = paulis[j].z(i)``.
    """
    if n is None:
        n = paulis[0].n if len(paulis) else 0
    m = len(paulis)
    R = np.zeros((n, m), dtype=np.uint8)
    S = np.zeros((n, m), dtype=np.uint8)
    for j, pauli in enumerate(paulis):
        if pauli.n != n:
            raise ValueError(f"Operator {j} acts on {pauli.n} qubits, expected {n}")
        for i in range(n):
            R[i, j] = (pauli.r >> i) & 1
            S[i, j] = (pauli.s >> i) & 1
    return R, S


@njit(cache=True)
def _symplectic_products(R, S):
    n, m = R.shape
    out = np.zeros((m, m), dtype=np.int8)
    for a in range(m):
        for b in range(a + 1, m):
            parity = 0
            for i in range(n):
                parity ^= (R[i, a] & S[i, b]) ^ (S[i, a] & R[i, b])
            out[a, b] = parity
            out[b, a] = parity
    return out


def commutation_matrix(paulis: Sequence[Pauli]) -> np.ndarray:
    """(m, m) matrix of pairwise commutators, 1 where a pair anticommutes."""
    R, S = bit_matrices(paulis)
    return _symplectic_products(R, S)


def is_commuting(paulis: Sequence[Pauli]) -> bool:
    return not np.any(commutation_matrix(paulis))


def is_independent(paulis: Sequence[Pauli]) -> bool:
    """True if the operators are linearly independent over GF(2), ignoring phases."""
    if len(paulis) == 0:
        return True
    R, S = bit_matrices(paulis)
    if R.shape[0] == 0:
        return False
    stacked = GF2(np.vstack([R, S]).T)
    return int(np.linalg.matrix_rank(stacked)) == len(paulis)


__all__ = [
    "PAULI_CHARACTERS",
    "PauliParseError",
    "Pauli",
    "popcount",
    "format_pauli",
    "commutator",
    "commutes",
    "bit_matrices",
    "commutation_matrix",
    "is_commuting",
    "is_independent",
]
