"""Column packing engine.

Gates are packed left to right into discrete columns. A column stays open
while events keep landing on wires that are still free in it; touching an
occupied wire closes ("flushes") the column, which fills every wire that
received nothing with an idle glyph. Events spanning more than one wire
always get a column to themselves, so their connector lines can never be
confused with a neighbouring gate.

The engine only decides *where* things go. What the cells look like is up to
the :class:`~qcircuitizer.glyphs.GlyphSet` it is parameterized with.
"""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

import numpy as np

from .glyphs.base import Element, ElementKind, GlyphSet
from .logging import get_logger
from .wires import Cell, WireRegistry

logger = get_logger(__name__)


def layout(
    registry: WireRegistry, roles: Mapping[int, Tuple[ElementKind, str]]
) -> Dict[int, Element]:
    """
    Lay an event out over the wires it spans.

    Each touched wire gets its element with stubs pointing at the touched
    wires above and below it; every known wire strictly between the extremes
    that is not itself touched gets a connector.

    Parameters
    ----------
    registry:
        Registry used to find the wires between the extremes.
    roles:
        Touched wire id -> (element kind, label).

    Returns
    -------
    Dict[int, Element]
        Wire id -> element for every wire that receives a glyph.
    """
    low, high = min(roles), max(roles)
    cells: Dict[int, Element] = {}
    for w, (kind, label) in roles.items():
        cells[w] = Element(kind, label, up=w > low, down=w < high)
    for w in registry.between(low, high):
        if w not in roles:
            cells[w] = Element(ElementKind.CONNECTOR, up=True, down=True)
    return cells


class ColumnPacker:
    """
    Occupancy tracking and column flushing over a :class:`WireRegistry`.

    Invariant: between flushes, every wire is either at the committed width
    (free in the open column) or exactly one cell wider (occupied).
    """

    def __init__(self, registry: WireRegistry, glyphs: GlyphSet) -> None:
        self._registry = registry
        self._glyphs = glyphs
        self._occupied = np.zeros(0, dtype=bool)
        self._committed = 0

    @property
    def committed_width(self) -> int:
        """Row width at the last column boundary."""
        return self._committed

    def _sync(self) -> None:
        missing = len(self._registry) - self._occupied.size
        if missing > 0:
            self._occupied = np.append(self._occupied, np.zeros(missing, dtype=bool))

    def is_occupied(self, wire_id: int) -> bool:
        self._sync()
        return bool(self._occupied[self._registry.slot(wire_id)])

    def column_empty(self) -> bool:
        self._sync()
        return not self._occupied.any()

    def start_wire(self, wire_id: int) -> None:
        """Create rows for a brand-new wire so it starts at the open column."""
        marker = self._glyphs.start_marker()
        padding = max(self._committed - len(marker[1]), 0)
        self._registry.add(wire_id, padding, marker)
        self._committed = max(self._committed, padding + len(marker[1]))
        self._sync()

    def flush(self) -> None:
        """Close the open column, filling every wire that stayed free in it."""
        self._sync()
        if not self._occupied.any():
            return
        for w in self._registry.ids:
            if not self._occupied[self._registry.slot(w)]:
                self._registry.append(w, self._glyphs.filler(self._registry.style(w)))
        self._occupied[:] = False
        self._committed += self._glyphs.cell_width
        logger.debug("flushed column; committed width is now %d", self._committed)

    def place(self, cells: Mapping[int, Element], conditioned: bool = False) -> None:
        """
        Draw one event's cells, flushing before and after as needed.

        A single-wire event only forces a flush when its wire is already
        taken in the open column. A multi-wire event needs the column to be
        empty and closes it straight after drawing.
        """
        self._sync()
        exclusive = len(cells) > 1
        if exclusive:
            self.flush()
        elif any(self.is_occupied(w) for w in cells):
            self.flush()

        for w in sorted(cells):
            element = cells[w]
            glyph = self._glyphs.cell(element, self._registry.style(w), conditioned)
            self._registry.append(w, glyph)
            self._occupied[self._registry.slot(w)] = True

        if exclusive:
            self.flush()

    def marker_column(self, markers: Mapping[int, Cell]) -> None:
        """
        Close the open column, then append a lifecycle marker column.

        Wires listed in ``markers`` get their marker; every other wire gets
        the marker-width filler for its style.
        """
        self.flush()
        for w in self._registry.ids:
            cell = markers.get(w)
            if cell is None:
                cell = self._glyphs.marker_filler(self._registry.style(w))
            self._registry.append(w, cell)
        self._committed += self._glyphs.marker_width

    def pending_fillers(self) -> Dict[int, Cell]:
        """Fillers the free wires would receive if the open column closed now."""
        self._sync()
        if not self._occupied.any():
            return {}
        return {
            w: self._glyphs.filler(self._registry.style(w))
            for w in self._registry.ids
            if not self._occupied[self._registry.slot(w)]
        }


__all__ = ["ElementKind", "Element", "layout", "ColumnPacker"]
