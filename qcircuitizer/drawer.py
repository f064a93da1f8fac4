"""Event-driven circuit drawer.

:class:`CircuitDrawer` is a sink for gate-application notifications coming
from an executor. Each call is validated, laid out over the wires it spans,
packed into the current column and turned into glyphs by the configured
:class:`~qcircuitizer.glyphs.GlyphSet`. Nothing is simulated.

Example
-------
>>> drawer = CircuitDrawer()
>>> drawer.allocate([0, 1])
>>> drawer.h(0)
>>> drawer.controlled_x([0], 1)
>>> print(drawer.render())  # doctest: +SKIP
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from .config import DrawerConfig
from .control import ClassicalControlStack, Frame
from .diagnostics import assert_column_widths, assert_rows_synchronized, is_debug_enabled
from .exceptions import InvalidResultError, ShapeMismatchError, WireStateError
from .glyphs import BoxGlyphs, ElementKind, GlyphSet, Statement
from .logging import get_logger
from .packing import ColumnPacker, layout
from .primitives import MeasurementResult, Pauli
from .wires import WireRegistry, WireState, check_distinct, check_wire_id

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

PauliLike = Union[Pauli, str]
Roles = Dict[int, Tuple[ElementKind, str]]


def _event(method: F) -> F:
    """Log the call and, when enabled, verify diagram invariants afterwards."""

    @functools.wraps(method)
    def wrapper(self: "CircuitDrawer", *args: Any, **kwargs: Any) -> Any:
        logger.debug("%s%r", method.__name__, args)
        result = method(self, *args, **kwargs)
        if self.config.check_invariants or is_debug_enabled():
            self.check_invariants()
        return result

    return wrapper  # type: ignore[return-value]


class CircuitDrawer:
    """
    Renders a stream of circuit events into a text diagram.

    One instance follows exactly one execution of one circuit; it is not
    thread-safe and must not be shared between executions.

    Parameters
    ----------
    glyphs:
        Output flavour. Defaults to :class:`~qcircuitizer.glyphs.BoxGlyphs`.
    config:
        Rendering options. Defaults to ``DrawerConfig()``.
    """

    def __init__(
        self,
        glyphs: Optional[GlyphSet] = None,
        config: Optional[DrawerConfig] = None,
    ) -> None:
        self.glyphs = glyphs if glyphs is not None else BoxGlyphs()
        self.config = config if config is not None else DrawerConfig()
        self._registry = WireRegistry()
        self._packer = ColumnPacker(self._registry, self.glyphs)
        self._control = ClassicalControlStack()
        self._statements: List[str] = []
        self._next_classical_id = 0
        self._token = object()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def wires(self) -> List[int]:
        """Every wire id seen so far, ascending."""
        return self._registry.ids

    @property
    def classical_control(self) -> Tuple[Frame, ...]:
        """Active classical-control frames, outermost first."""
        return self._control.frames

    @property
    def statements(self) -> Tuple[str, ...]:
        return tuple(self._statements)

    def wire_state(self, wire_id: int) -> WireState:
        return self._registry.state(wire_id)

    def lines(self) -> List[str]:
        """Diagram rows as they would be rendered now, three per wire."""
        return self._registry.lines(self._packer.pending_fillers())

    def check_invariants(self) -> None:
        """Raise :class:`~qcircuitizer.exceptions.InvariantError` on a malformed diagram."""
        assert_column_widths(
            list(self._registry.widths),
            self._packer.committed_width,
            self.glyphs.cell_width,
        )
        assert_rows_synchronized(self.lines())

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def render(self) -> str:
        """
        Serialize the diagram.

        The open column is padded in the output only, so rendering never
        changes how later events pack.
        """
        return self.glyphs.assemble(self.lines(), self._statements)

    def write_to_file(self, path: str) -> None:
        """Write :meth:`render` output to ``path`` (UTF-8)."""
        text = self.render()
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("wrote %d wire(s) to %s", len(self._registry), path)

    def __str__(self) -> str:
        return self.render()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _active(self, wire_ids: Sequence[int], what: str = "event") -> Tuple[int, ...]:
        ids = tuple(check_wire_id(w) for w in wire_ids)
        check_distinct(ids, what)
        self._registry.require_active(ids)
        return ids

    def _conditions(self) -> Tuple[Frame, ...]:
        return self._control.frames if self.config.annotate_conditioned else ()

    def _draw(self, roles: Roles, name: str, wires: Sequence[int], kind: str) -> None:
        text = self.glyphs.statement(
            Statement(name, tuple(wires), kind, self._conditions())
        )
        conditioned = self.config.annotate_conditioned and bool(self._control)
        self._packer.place(layout(self._registry, roles), conditioned)
        if text is not None:
            self._statements.append(text)

    def _mint(self, qubits: Sequence[int], paulis: Sequence[Pauli]) -> MeasurementResult:
        result = MeasurementResult(
            self._next_classical_id, tuple(qubits), tuple(paulis), origin=self._token
        )
        self._next_classical_id += 1
        if self.config.mark_collapsed:
            for q in qubits:
                self._registry.set_collapsed(q)
        return result

    @staticmethod
    def _paulis(paulis: Sequence[PauliLike], targets: Sequence[int]) -> List[Pauli]:
        axes = [Pauli.coerce(p) for p in paulis]
        if len(axes) != len(targets):
            raise ShapeMismatchError(
                f"Got {len(axes)} Pauli axes for {len(targets)} target qubits."
            )
        if not targets:
            raise ShapeMismatchError("A multi-qubit event needs at least one target.")
        return axes

    # ------------------------------------------------------------------
    # Generic event shapes
    # ------------------------------------------------------------------

    @_event
    def gate(self, label: str, target: int, name: Optional[str] = None) -> None:
        """Draw a single-qubit box labelled ``label`` (three characters at most)."""
        (target,) = self._active([target])
        self._draw({target: (ElementKind.BOX, label)}, name or label.lower(), (target,), "gate")

    @_event
    def controlled_gate(
        self, label: str, controls: Sequence[int], target: int, name: Optional[str] = None
    ) -> None:
        """Draw a box on ``target`` with a control dot on each of ``controls``."""
        controls = list(controls)
        if not controls:
            self.gate(label, target, name)
            return
        wires = self._active(controls + [target])
        roles: Roles = {c: (ElementKind.CONTROL, "") for c in wires[:-1]}
        roles[wires[-1]] = (ElementKind.BOX, label)
        self._draw(roles, "c" * len(controls) + (name or label.lower()), wires, "controlled")

    @_event
    def connected_gate(
        self,
        prefix: str,
        paulis: Sequence[PauliLike],
        targets: Sequence[int],
        controls: Sequence[int] = (),
    ) -> None:
        """
        Draw one ``<prefix><axis>`` box per target, joined into a single block.

        Parameters
        ----------
        prefix:
            Label prefix, e.g. ``"e"`` for exponentials.
        paulis:
            One axis per target.
        targets:
            Target wire ids.
        controls:
            Optional control wires, drawn as dots in the same column.
        """
        targets = list(targets)
        controls = list(controls)
        axes = self._paulis(paulis, targets)
        wires = self._active(controls + targets)
        roles: Roles = {c: (ElementKind.CONTROL, "") for c in wires[: len(controls)]}
        for t, axis in zip(wires[len(controls):], axes):
            roles[t] = (ElementKind.BOX, prefix + axis.letter)
        name = "c" * len(controls) + prefix + "".join(a.letter for a in axes)
        kind = "controlled_connected" if controls else "connected"
        self._draw(roles, name, wires, kind)

    @_event
    def swap(self, q1: int, q2: int) -> None:
        wires = self._active([q1, q2])
        roles: Roles = {w: (ElementKind.SWAP, "") for w in wires}
        self._draw(roles, "swap", wires, "swap")

    @_event
    def controlled_swap(self, controls: Sequence[int], q1: int, q2: int) -> None:
        controls = list(controls)
        if not controls:
            self.swap(q1, q2)
            return
        wires = self._active(controls + [q1, q2])
        roles: Roles = {c: (ElementKind.CONTROL, "") for c in wires[:-2]}
        for w in wires[-2:]:
            roles[w] = (ElementKind.SWAP, "")
        self._draw(roles, "c" * len(controls) + "swap", wires, "swap")

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    @_event
    def m(self, target: int) -> MeasurementResult:
        """Measure ``target`` in the Z basis; mints a new classical wire id."""
        (target,) = self._active([target])
        self._draw({target: (ElementKind.BOX, "Mz")}, "mz", (target,), "measure")
        return self._mint((target,), (Pauli.Z,))

    @_event
    def measure(
        self, paulis: Sequence[PauliLike], targets: Sequence[int]
    ) -> MeasurementResult:
        """Joint measurement; each target gets an ``M<axis>`` box."""
        targets = list(targets)
        axes = self._paulis(paulis, targets)
        wires = self._active(targets)
        roles: Roles = {t: (ElementKind.BOX, "M" + a.letter) for t, a in zip(wires, axes)}
        self._draw(roles, "m" + "".join(a.letter for a in axes), wires, "measure")
        return self._mint(wires, axes)

    @_event
    def reset(self, target: int) -> None:
        (target,) = self._active([target])
        self._draw({target: (ElementKind.BOX, "|0>")}, "reset", (target,), "reset")
        self._registry.set_collapsed(target, False)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @_event
    def allocate(self, qubits: Sequence[int]) -> None:
        """
        Start new wires, or restart released ones.

        New ids get fresh rows padded to the current diagram width. Released
        ids keep their rows and get a restart marker in a marker column.
        """
        ids = [check_wire_id(q) for q in qubits]
        if not ids:
            return
        check_distinct(ids, "allocation")
        for w in ids:
            if self._registry.state(w) is WireState.ACTIVE:
                raise WireStateError(f"Wire {w} is already allocated.")
        text = self.glyphs.statement(
            Statement("alloc", tuple(ids), "lifecycle", self._conditions())
        )

        reused = [w for w in ids if self._registry.state(w) is WireState.RELEASED]
        if reused:
            self._packer.flush()
            for w in reused:
                self._registry.reactivate(w)
            self._packer.marker_column({w: self.glyphs.start_marker() for w in reused})
        for w in ids:
            if w not in reused:
                self._packer.start_wire(w)

        if text is not None:
            self._statements.append(text)

    @_event
    def release(self, qubits: Sequence[int]) -> None:
        """End the given wires with a release marker."""
        ids = list(self._active(qubits, "release"))
        if not ids:
            return
        text = self.glyphs.statement(
            Statement("release", tuple(ids), "lifecycle", self._conditions())
        )
        self._packer.marker_column({w: self.glyphs.release_marker() for w in ids})
        for w in ids:
            self._registry.mark_released(w)
        if text is not None:
            self._statements.append(text)

    def borrow(self, qubits: Sequence[int]) -> None:
        logger.debug("borrow%r ignored", (qubits,))

    def return_(self, qubits: Sequence[int]) -> None:
        logger.debug("return%r ignored", (qubits,))

    # ------------------------------------------------------------------
    # Notifications without visual effect
    # ------------------------------------------------------------------

    def assert_(
        self,
        paulis: Sequence[PauliLike],
        targets: Sequence[int],
        result: Any = None,
        message: str = "",
    ) -> None:
        pass

    def assert_prob(
        self,
        paulis: Sequence[PauliLike],
        targets: Sequence[int],
        probability_of_zero: float = 0.0,
        message: str = "",
        tolerance: float = 0.0,
    ) -> None:
        pass

    def on_operation_start(self, operation: Any, arguments: Any = None) -> None:
        pass

    def on_operation_end(self, operation: Any, arguments: Any = None) -> None:
        pass

    # ------------------------------------------------------------------
    # Classical control
    # ------------------------------------------------------------------

    def classically_controlled(
        self,
        result: MeasurementResult,
        on_zero: Optional[Callable[[], Any]] = None,
        on_one: Optional[Callable[[], Any]] = None,
    ) -> None:
        """
        Run both branches of a measurement-conditioned region.

        ``on_zero`` runs inside the frame ``(id, False)``, then ``on_one``
        inside ``(id, True)``. Frames are popped even if a branch raises.

        Raises
        ------
        InvalidResultError
            If ``result`` was not returned by this drawer's ``m``/``measure``.
        """
        if not isinstance(result, MeasurementResult) or result.origin is not self._token:
            raise InvalidResultError(
                "classically_controlled needs a MeasurementResult minted by this drawer, "
                f"got {result!r}."
            )
        cid = result.classical_wire_id
        self._control.run(cid, False, on_zero)
        self._control.run(cid, True, on_one)

    # ------------------------------------------------------------------
    # Named gates
    # ------------------------------------------------------------------

    def h(self, target: int) -> None:
        self.gate("H", target)

    def x(self, target: int) -> None:
        self.gate("X", target)

    def y(self, target: int) -> None:
        self.gate("Y", target)

    def z(self, target: int) -> None:
        self.gate("Z", target)

    def s(self, target: int) -> None:
        self.gate("S", target)

    def s_adj(self, target: int) -> None:
        self.gate("S†", target, "sdg")

    def t(self, target: int) -> None:
        self.gate("T", target)

    def t_adj(self, target: int) -> None:
        self.gate("T†", target, "tdg")

    def r(self, axis: PauliLike, theta: float, target: int) -> None:
        letter = Pauli.coerce(axis).letter
        self.gate("R" + letter, target, "r" + letter)

    def r_frac(self, axis: PauliLike, numerator: int, power: int, target: int) -> None:
        self.r(axis, 0.0, target)

    def r1(self, theta: float, target: int) -> None:
        self.gate("R1", target)

    def r1_frac(self, numerator: int, denominator: int, target: int) -> None:
        self.gate("R1", target)

    def exp(self, paulis: Sequence[PauliLike], theta: float, targets: Sequence[int]) -> None:
        self.connected_gate("e", paulis, targets)

    def exp_frac(
        self,
        paulis: Sequence[PauliLike],
        numerator: int,
        denominator: int,
        targets: Sequence[int],
    ) -> None:
        self.connected_gate("e", paulis, targets)

    # ------------------------------------------------------------------
    # Named controlled gates
    # ------------------------------------------------------------------

    def controlled_h(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("H", controls, target)

    def controlled_x(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("X", controls, target)

    def controlled_y(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("Y", controls, target)

    def controlled_z(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("Z", controls, target)

    def controlled_s(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("S", controls, target)

    def controlled_s_adj(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("S†", controls, target, "sdg")

    def controlled_t(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("T", controls, target)

    def controlled_t_adj(self, controls: Sequence[int], target: int) -> None:
        self.controlled_gate("T†", controls, target, "tdg")

    def controlled_r(
        self, controls: Sequence[int], axis: PauliLike, theta: float, target: int
    ) -> None:
        letter = Pauli.coerce(axis).letter
        self.controlled_gate("R" + letter, controls, target, "r" + letter)

    def controlled_r_frac(
        self,
        controls: Sequence[int],
        axis: PauliLike,
        numerator: int,
        power: int,
        target: int,
    ) -> None:
        self.controlled_r(controls, axis, 0.0, target)

    def controlled_r1(self, controls: Sequence[int], theta: float, target: int) -> None:
        self.controlled_gate("R1", controls, target)

    def controlled_r1_frac(
        self, controls: Sequence[int], numerator: int, denominator: int, target: int
    ) -> None:
        self.controlled_gate("R1", controls, target)

    def controlled_exp(
        self,
        controls: Sequence[int],
        paulis: Sequence[PauliLike],
        theta: float,
        targets: Sequence[int],
    ) -> None:
        self.connected_gate("e", paulis, targets, controls)

    def controlled_exp_frac(
        self,
        controls: Sequence[int],
        paulis: Sequence[PauliLike],
        numerator: int,
        denominator: int,
        targets: Sequence[int],
    ) -> None:
        self.connected_gate("e", paulis, targets, controls)


__all__ = ["CircuitDrawer"]
