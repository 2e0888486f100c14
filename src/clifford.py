"""
Binary (phase-free) single-qubit Clifford gates acting on the (x, z) bit pair
of a Pauli operator by conjugation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .pauli import Pauli


@dataclass(frozen=True)
class BinaryCliffordGate:
    """
    2x2 matrix over GF(2)::

        [[axx, axz],
         [azx, azz]]

    mapping a bit pair by ``x' = axx*x + axz*z`` and ``z' = azx*x + azz*z``.
    """

    axx: int = 1
    axz: int = 0
    azx: int = 0
    azz: int = 1

    def __post_init__(self) -> None:
        for name in ("axx", "axz", "azx", "azz"):
            # Solver values may arrive as floats or numpy scalars
            raw = float(getattr(self, name))
            value = int(round(raw))
            if value not in (0, 1) or abs(raw - value) > 1e-6:
                raise ValueError(f"{name} must be 0 or 1, got {getattr(self, name)}")
            object.__setattr__(self, name, value)

    @classmethod
    def from_matrix(cls, matrix) -> "BinaryCliffordGate":
        M = np.asarray(matrix)
        if M.shape != (2, 2):
            raise ValueError(f"Expected a 2x2 matrix, got shape {M.shape}")
        return cls(int(M[0, 0]) % 2, int(M[0, 1]) % 2, int(M[1, 0]) % 2, int(M[1, 1]) % 2)

    def matrix(self) -> np.ndarray:
        return np.array([[self.axx, self.axz], [self.azx, self.azz]], dtype=np.uint8)

    def is_symplectic(self) -> bool:
        return (self.axx * self.azz + self.axz * self.azx) % 2 == 1

    def apply(self, x: int, z: int) -> Tuple[int, int]:
        return (self.axx * x + self.axz * z) % 2, (self.azx * x + self.azz * z) % 2

    def compose(self, other: "BinaryCliffordGate") -> "BinaryCliffordGate":
        """The gate applying ``other`` first and then ``self``."""
        return BinaryCliffordGate.from_matrix(self.matrix().astype(np.int64) @ other.matrix().astype(np.int64))

    def name(self) -> Optional[str]:
        for label, gate in SINGLE_QUBIT_CLIFFORDS.items():
            if gate == self:
                return label
        return None

    def __str__(self) -> str:
        return f"[{self.axx} {self.axz}]\n[{self.azx} {self.azz}]"


IDENTITY = BinaryCliffordGate(1, 0, 0, 1)
HADAMARD = BinaryCliffordGate(0, 1, 1, 0)
PHASE = BinaryCliffordGate(1, 0, 1, 1)

# The six symplectic 2x2 matrices, labelled as operator products
SINGLE_QUBIT_CLIFFORDS: Dict[str, BinaryCliffordGate] = {
    "I": IDENTITY,
    "H": HADAMARD,
    "S": PHASE,
    "HS": HADAMARD.compose(PHASE),
    "SH": PHASE.compose(HADAMARD),
    "HSH": HADAMARD.compose(PHASE).compose(HADAMARD),
}


def apply_layer(gates: Sequence[BinaryCliffordGate], paulis: Sequence[Pauli]) -> List[Pauli]:
    """
    Conjugate Pauli operators by a layer of single-qubit binary Clifford gates.

    Binary gates carry no phase information, so each returned operator has a
    displayed phase of +1 (its stored phase holds only the i of every Y).
    """
    outputs = []
    for pauli in paulis:
        if pauli.n != len(gates):
            raise ValueError(f"Layer has {len(gates)} gates but the operator acts on {pauli.n} qubits")
        image = Pauli(pauli.n)
        for qubit, gate in enumerate(gates):
            x_bit, z_bit = gate.apply(pauli.x(qubit), pauli.z(qubit))
            image.set_x(qubit, x_bit)
            image.set_z(qubit, z_bit)
        image.phase = image._y_phase()
        outputs.append(image)
    return outputs


__all__ = [
    "BinaryCliffordGate",
    "IDENTITY",
    "HADAMARD",
    "PHASE",
    "SINGLE_QUBIT_CLIFFORDS",
    "apply_layer",
]
