"""Box-drawing glyphs: the default text diagram flavour.

Every gate cell is seven characters wide::

    ┌─────┐      ┌──┴──┐         │
    ┤  H  ├      ┤ Rx  ├      ───●───
    └─────┘      └─────┘

Boxes get a notch in the border that faces another wire of the same event;
controls and swap ends get a vertical stub instead.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..wires import Cell, WireStyle
from .base import Element, ElementKind, GlyphSet, Statement, center_label

CELL_WIDTH = 7
MARKER_WIDTH = 5

_BLANK = " " * CELL_WIDTH
_STUB = "   │   "

_WIRE: Dict[WireStyle, str] = {
    WireStyle.ACTIVE: "─",
    WireStyle.COLLAPSED: "═",
    WireStyle.RELEASED: " ",
}
_CROSSING: Dict[WireStyle, str] = {
    WireStyle.ACTIVE: "───┼───",
    WireStyle.COLLAPSED: "═══╪═══",
    WireStyle.RELEASED: _STUB,
}

# (top-left, horizontal, top-right, notch-up, left edge, right edge,
#  bottom-left, bottom-right, notch-down)
_PLAIN_BORDER = ("┌", "─", "┐", "┴", "┤", "├", "└", "┘", "┬")
_DOUBLE_BORDER = ("╔", "═", "╗", "╧", "╡", "╞", "╚", "╝", "╤")


def _box(label: str, up: bool, down: bool, border: Sequence[str]) -> Cell:
    tl, h, tr, notch_up, left, right, bl, br, notch_down = border
    top = tl + (h * 2 + notch_up + h * 2 if up else h * 5) + tr
    mid = left + " " + center_label(label) + " " + right
    bot = bl + (h * 2 + notch_down + h * 2 if down else h * 5) + br
    return top, mid, bot


def _on_wire(symbol: str, element: Element, style: WireStyle) -> Cell:
    wire = _WIRE[style] * 3
    return (
        _STUB if element.up else _BLANK,
        wire + symbol + wire,
        _STUB if element.down else _BLANK,
    )


class BoxGlyphs(GlyphSet):
    """Unicode box-drawing glyphs, one three-row cell per wire."""

    cell_width = CELL_WIDTH
    marker_width = MARKER_WIDTH

    def start_marker(self) -> Cell:
        return "     ", "|0>──", "     "

    def release_marker(self) -> Cell:
        return "     ", "──<0|", "     "

    def filler(self, style: WireStyle) -> Cell:
        return _BLANK, _WIRE[style] * CELL_WIDTH, _BLANK

    def marker_filler(self, style: WireStyle) -> Cell:
        blank = " " * MARKER_WIDTH
        return blank, _WIRE[style] * MARKER_WIDTH, blank

    def cell(self, element: Element, style: WireStyle, conditioned: bool = False) -> Cell:
        kind = element.kind
        if kind is ElementKind.BOX:
            border = _DOUBLE_BORDER if conditioned else _PLAIN_BORDER
            return _box(element.label, element.up, element.down, border)
        if kind is ElementKind.CONTROL:
            return _on_wire("●", element, style)
        if kind is ElementKind.SWAP:
            return _on_wire("╳", element, style)
        if kind is ElementKind.CONNECTOR:
            return _STUB, _CROSSING[style], _STUB
        raise ValueError(f"Unknown element kind: {kind!r}")

    def statement(self, statement: Statement) -> Optional[str]:
        return None

    def assemble(self, lines: Sequence[str], statements: Sequence[str]) -> str:
        return "\n".join(lines)


__all__ = ["BoxGlyphs", "CELL_WIDTH", "MARKER_WIDTH"]
