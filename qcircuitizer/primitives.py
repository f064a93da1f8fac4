"""Small value types shared by the drawer, event records and trace I/O."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from .exceptions import CircuitizerError, InvalidAxisError


class Pauli(Enum):
    """Single-qubit Pauli axis."""

    I = "I"
    X = "X"
    Y = "Y"
    Z = "Z"

    @property
    def letter(self) -> str:
        """Lower-case axis letter used in labels; the identity has none."""
        return "?" if self is Pauli.I else self.value.lower()

    @classmethod
    def coerce(cls, value: Union["Pauli", str]) -> "Pauli":
        """
        Accept a :class:`Pauli`, an axis letter (``"x"``, ``"Z"``) or a
        qualified name (``"PauliX"``).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key.startswith("PAULI"):
                key = key[len("PAULI"):]
            try:
                return cls(key)
            except ValueError:
                pass
        raise InvalidAxisError(f"Not a Pauli axis: {value!r}.")


@dataclass(frozen=True)
class MeasurementResult:
    """
    Handle for a measurement outcome.

    Nothing is simulated, so the outcome itself is unknown; the handle only
    names the classical wire the result was written to so later
    conditioned regions can refer to it.

    Attributes
    ----------
    classical_wire_id:
        Sequential id minted by the drawer for this measurement.
    qubits:
        Measured wire ids.
    paulis:
        Measurement basis per measured wire.
    """

    classical_wire_id: int
    qubits: Tuple[int, ...]
    paulis: Tuple[Pauli, ...]
    origin: object = field(default=None, compare=False, repr=False)

    @property
    def value(self) -> bool:
        raise CircuitizerError(
            "The circuit drawer does not simulate; measurement outcomes are unavailable."
        )


__all__ = ["Pauli", "MeasurementResult"]
