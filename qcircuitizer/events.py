"""Event records and replay.

A recorded execution is a sequence of immutable event records, one per
event call. :func:`replay` feeds such a sequence into a
:class:`~qcircuitizer.drawer.CircuitDrawer`, which makes diagrams
reproducible from a stored trace without the executor that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Union

from .drawer import CircuitDrawer
from .exceptions import InvalidResultError
from .primitives import MeasurementResult, Pauli

Results = Dict[int, MeasurementResult]


@dataclass(frozen=True)
class SingleGate:
    """A box on one wire. ``name`` overrides the directive name."""

    label: str
    target: int
    name: Optional[str] = None

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.gate(self.label, self.target, self.name)


@dataclass(frozen=True)
class ControlledGate:
    label: str
    controls: Tuple[int, ...]
    target: int
    name: Optional[str] = None

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.controlled_gate(self.label, self.controls, self.target, self.name)


@dataclass(frozen=True)
class ConnectedGate:
    """Several targets drawn as one block, e.g. a multi-qubit exponential."""

    prefix: str
    paulis: Tuple[Pauli, ...]
    targets: Tuple[int, ...]
    controls: Tuple[int, ...] = ()

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.connected_gate(self.prefix, self.paulis, self.targets, self.controls)


@dataclass(frozen=True)
class Swap:
    q1: int
    q2: int

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.swap(self.q1, self.q2)


@dataclass(frozen=True)
class ControlledSwap:
    controls: Tuple[int, ...]
    q1: int
    q2: int

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.controlled_swap(self.controls, self.q1, self.q2)


@dataclass(frozen=True)
class Measure:
    target: int

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        result = drawer.m(self.target)
        results[result.classical_wire_id] = result


@dataclass(frozen=True)
class MultiMeasure:
    paulis: Tuple[Pauli, ...]
    targets: Tuple[int, ...]

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        result = drawer.measure(self.paulis, self.targets)
        results[result.classical_wire_id] = result


@dataclass(frozen=True)
class Reset:
    target: int

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.reset(self.target)


@dataclass(frozen=True)
class Allocate:
    qubits: Tuple[int, ...]

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.allocate(self.qubits)


@dataclass(frozen=True)
class Release:
    qubits: Tuple[int, ...]

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.release(self.qubits)


@dataclass(frozen=True)
class Borrow:
    qubits: Tuple[int, ...]

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.borrow(self.qubits)


@dataclass(frozen=True)
class Return:
    qubits: Tuple[int, ...]

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.return_(self.qubits)


@dataclass(frozen=True)
class Assertion:
    """Assertion notification; accepted and not drawn."""

    paulis: Tuple[Pauli, ...]
    targets: Tuple[int, ...]
    message: str = ""

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        drawer.assert_(self.paulis, self.targets, None, self.message)


@dataclass(frozen=True)
class ClassicallyControlled:
    """
    A measurement-conditioned region.

    Attributes
    ----------
    classical_wire_id:
        Id of an earlier measurement in the same replay.
    on_zero, on_one:
        Events of each branch; both are drawn, zero branch first.
    """

    classical_wire_id: int
    on_zero: Tuple["Event", ...] = ()
    on_one: Tuple["Event", ...] = ()

    def apply(self, drawer: CircuitDrawer, results: Results) -> None:
        result = results.get(self.classical_wire_id)
        if result is None:
            raise InvalidResultError(
                f"No measurement with classical wire id {self.classical_wire_id} "
                "precedes this conditioned region."
            )
        drawer.classically_controlled(
            result,
            lambda: replay(self.on_zero, drawer, results),
            lambda: replay(self.on_one, drawer, results),
        )


Event = Union[
    SingleGate,
    ControlledGate,
    ConnectedGate,
    Swap,
    ControlledSwap,
    Measure,
    MultiMeasure,
    Reset,
    Allocate,
    Release,
    Borrow,
    Return,
    Assertion,
    ClassicallyControlled,
]


def replay(
    events: Iterable[Event],
    drawer: Optional[CircuitDrawer] = None,
    results: Optional[Results] = None,
) -> CircuitDrawer:
    """
    Apply ``events`` in order to ``drawer``.

    Parameters
    ----------
    events:
        Event records.
    drawer:
        Drawer to feed; a fresh box-flavour drawer when None.
    results:
        Measurement results seen so far, keyed by classical wire id. Filled
        in as measurements are replayed.

    Returns
    -------
    CircuitDrawer
        The drawer that received the events.
    """
    if drawer is None:
        drawer = CircuitDrawer()
    if results is None:
        results = {}
    for event in events:
        event.apply(drawer, results)
    return drawer


__all__ = [
    "SingleGate",
    "ControlledGate",
    "ConnectedGate",
    "Swap",
    "ControlledSwap",
    "Measure",
    "MultiMeasure",
    "Reset",
    "Allocate",
    "Release",
    "Borrow",
    "Return",
    "Assertion",
    "ClassicallyControlled",
    "Event",
    "replay",
]
