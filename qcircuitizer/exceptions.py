"""Exception hierarchy for qcircuitizer.

Every error raised by the drawer derives from :class:`CircuitizerError`.
Most of them also subclass the closest built-in exception so callers that
only catch ``ValueError`` or ``TypeError`` keep working.
"""

from __future__ import annotations


class CircuitizerError(Exception):
    """Base class for all qcircuitizer errors."""


class WireStateError(CircuitizerError, ValueError):
    """A wire id was used in a way its lifecycle state does not allow.

    Raised for unknown or released wires, double releases, allocating an
    id that is still active, malformed ids and duplicate ids in one event.
    """


class ShapeMismatchError(CircuitizerError, ValueError):
    """Parallel per-qubit argument sequences disagree in length."""


class InvalidAxisError(CircuitizerError, ValueError):
    """A value could not be read as a Pauli axis."""


class UnsupportedGateError(CircuitizerError, NotImplementedError):
    """The selected output flavour cannot express the requested event."""


class InvalidResultError(CircuitizerError, TypeError):
    """A measurement result that this drawer did not mint was supplied."""


class InvariantError(CircuitizerError, AssertionError):
    """An internal diagram invariant was violated (debug checks only)."""


class TraceFormatError(CircuitizerError, ValueError):
    """An event trace document is malformed."""


__all__ = [
    "CircuitizerError",
    "WireStateError",
    "ShapeMismatchError",
    "InvalidAxisError",
    "UnsupportedGateError",
    "InvalidResultError",
    "InvariantError",
    "TraceFormatError",
]
