"""Wire registry: per-qubit row storage and lifecycle state.

Every wire owns three text rows (top spacer, body, bottom spacer). Rows are
stored in slots handed out in first-allocation order; a wire keeps its slot
for the whole lifetime of the diagram, through any number of release and
re-allocation cycles. Wire ids are looked up through an explicit map, so
sparse or externally assigned ids are fine.
"""

from __future__ import annotations

from enum import Enum
from numbers import Integral
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .exceptions import WireStateError

Cell = Tuple[str, str, str]


class WireState(Enum):
    """Lifecycle state of a wire id."""

    UNSEEN = "unseen"
    ACTIVE = "active"
    RELEASED = "released"


class WireStyle(Enum):
    """How idle stretches of a wire are drawn."""

    ACTIVE = "active"
    COLLAPSED = "collapsed"
    RELEASED = "released"


def check_wire_id(wire_id: object) -> int:
    """Return ``wire_id`` as an int, rejecting bools, non-integers and negatives."""
    if isinstance(wire_id, bool) or not isinstance(wire_id, Integral):
        raise WireStateError(f"Wire id must be an integer, got {wire_id!r}.")
    if wire_id < 0:
        raise WireStateError(f"Wire id must be non-negative, got {wire_id}.")
    return int(wire_id)


def check_distinct(wire_ids: Sequence[int], what: str = "event") -> None:
    """Reject a wire id listed twice in a single event."""
    seen = set()
    for w in wire_ids:
        if w in seen:
            raise WireStateError(f"Wire {w} appears more than once in one {what}.")
        seen.add(w)


class WireRegistry:
    """
    Row storage and allocation state for every wire seen so far.

    Rows are kept as lists of fragments and only joined when the diagram is
    assembled. All three rows of a wire always grow together, so a single
    width per slot describes them.
    """

    def __init__(self) -> None:
        self._slots: Dict[int, int] = {}
        self._ids: List[int] = []
        self._rows: List[Tuple[List[str], List[str], List[str]]] = []
        self._widths = np.zeros(0, dtype=np.int64)
        self._released = np.zeros(0, dtype=bool)
        self._collapsed = np.zeros(0, dtype=bool)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, wire_id: object) -> bool:
        return wire_id in self._slots

    @property
    def ids(self) -> List[int]:
        """Known wire ids in ascending order."""
        return sorted(self._ids)

    @property
    def widths(self) -> np.ndarray:
        """Current row width per slot (read-only copy)."""
        return self._widths.copy()

    def slot(self, wire_id: int) -> int:
        """Return the fixed slot index of a known wire."""
        try:
            return self._slots[wire_id]
        except KeyError:
            raise WireStateError(f"Wire {wire_id} has never been allocated.") from None

    def state(self, wire_id: int) -> WireState:
        if wire_id not in self._slots:
            return WireState.UNSEEN
        if self._released[self._slots[wire_id]]:
            return WireState.RELEASED
        return WireState.ACTIVE

    def style(self, wire_id: int) -> WireStyle:
        """Idle-wire style for ``wire_id``; collapsed only applies to active wires."""
        s = self.slot(wire_id)
        if self._released[s]:
            return WireStyle.RELEASED
        if self._collapsed[s]:
            return WireStyle.COLLAPSED
        return WireStyle.ACTIVE

    def width(self, wire_id: int) -> int:
        return int(self._widths[self.slot(wire_id)])

    def require_active(self, wire_ids: Iterable[int]) -> None:
        """Raise :class:`WireStateError` unless every id is a currently active wire."""
        for w in wire_ids:
            state = self.state(w)
            if state is WireState.UNSEEN:
                raise WireStateError(f"Wire {w} has not been allocated.")
            if state is WireState.RELEASED:
                raise WireStateError(f"Wire {w} has already been released.")

    def between(self, low: int, high: int) -> List[int]:
        """Known wire ids strictly between ``low`` and ``high``, ascending."""
        return [w for w in self.ids if low < w < high]

    def add(self, wire_id: int, padding: int, marker: Cell) -> int:
        """
        Create rows for a new wire.

        Parameters
        ----------
        wire_id:
            Id of the wire; must not be known yet.
        padding:
            Number of blank columns placed before ``marker`` on each row.
        marker:
            The wire's start glyph.

        Returns
        -------
        int
            The slot assigned to the wire.
        """
        if wire_id in self._slots:
            raise WireStateError(f"Wire {wire_id} is already registered.")
        slot = len(self._ids)
        self._slots[wire_id] = slot
        self._ids.append(wire_id)
        pad = " " * padding
        self._rows.append(([pad + marker[0]], [pad + marker[1]], [pad + marker[2]]))
        self._widths = np.append(self._widths, padding + len(marker[1]))
        self._released = np.append(self._released, False)
        self._collapsed = np.append(self._collapsed, False)
        return slot

    def reactivate(self, wire_id: int) -> None:
        """Move a released wire back to active; its slot is unchanged."""
        s = self.slot(wire_id)
        self._released[s] = False
        self._collapsed[s] = False

    def mark_released(self, wire_id: int) -> None:
        self._released[self.slot(wire_id)] = True

    def set_collapsed(self, wire_id: int, collapsed: bool = True) -> None:
        self._collapsed[self.slot(wire_id)] = bool(collapsed)

    def append(self, wire_id: int, cell: Cell) -> None:
        """Append one glyph cell to all three rows of a wire."""
        top, mid, bot = self._rows[self.slot(wire_id)]
        top.append(cell[0])
        mid.append(cell[1])
        bot.append(cell[2])
        self._widths[self.slot(wire_id)] += len(cell[1])

    def lines(self, pending: Optional[Mapping[int, Cell]] = None) -> List[str]:
        """
        Assemble the rows into text lines, three per wire, by ascending id.

        Parameters
        ----------
        pending:
            Extra cells appended to the output of the given wires only; the
            stored rows are left untouched.
        """
        out: List[str] = []
        for w in self.ids:
            rows = self._rows[self._slots[w]]
            extra = pending.get(w) if pending else None
            for i, row in enumerate(rows):
                text = "".join(row)
                if extra is not None:
                    text += extra[i]
                out.append(text)
        return out


__all__ = [
    "Cell",
    "WireState",
    "WireStyle",
    "WireRegistry",
    "check_wire_id",
    "check_distinct",
]
