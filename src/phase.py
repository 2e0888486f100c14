from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Text form of i**k for k = 0..3
_PHASE_TEXT = ("", "i", "-", "-i")
_PHASE_COMPLEX = (1, 1j, -1, -1j)


@dataclass(frozen=True)
class BinaryPhase:
    """Global phase factor ``i**value`` with ``value`` kept in ``[0, 4)``."""

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", int(self.value) % 4)

    @classmethod
    def from_string(cls, prefix: str) -> "BinaryPhase":
        """Parse a phase prefix as written in front of a Pauli string."""
        if prefix == "+":
            return cls(0)
        try:
            return cls(_PHASE_TEXT.index(prefix))
        except ValueError:
            raise ValueError(f"Unrecognised phase prefix '{prefix}'") from None

    def __add__(self, other: Union[int, "BinaryPhase"]) -> "BinaryPhase":
        return BinaryPhase(self.value + int(other))

    __radd__ = __add__

    def __sub__(self, other: Union[int, "BinaryPhase"]) -> "BinaryPhase":
        return BinaryPhase(self.value - int(other))

    def __rsub__(self, other: int) -> "BinaryPhase":
        return BinaryPhase(int(other) - self.value)

    def __neg__(self) -> "BinaryPhase":
        return BinaryPhase(-self.value)

    def __int__(self) -> int:
        return self.value

    __index__ = __int__

    def __eq__(self, other) -> bool:
        if isinstance(other, BinaryPhase):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def to_complex(self) -> complex:
        return _PHASE_COMPLEX[self.value]

    def to_string(self) -> str:
        return _PHASE_TEXT[self.value]

    def __str__(self) -> str:
        return _PHASE_TEXT[self.value]

    def __repr__(self) -> str:
        return f"BinaryPhase({self.value})"


__all__ = ["BinaryPhase"]
