"""Glyph production interface shared by every output flavour."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from ..wires import Cell, WireStyle


class ElementKind(Enum):
    BOX = "box"
    CONTROL = "control"
    SWAP = "swap"
    CONNECTOR = "connector"


@dataclass(frozen=True)
class Element:
    """
    One wire's share of a drawn event.

    Attributes
    ----------
    kind:
        What sits on the wire in this column.
    label:
        Box label; empty for every other kind.
    up, down:
        Whether the event continues to a wire above / below this one.
    """

    kind: ElementKind
    label: str = ""
    up: bool = False
    down: bool = False


@dataclass(frozen=True)
class Statement:
    """
    Flavour-neutral description of one drawn event.

    Attributes
    ----------
    name:
        Directive name, e.g. ``"h"``, ``"cx"``, ``"swap"``, ``"exz"``.
    wires:
        Wire ids in argument order (controls first).
    kind:
        Event shape: ``"gate"``, ``"controlled"``, ``"connected"``,
        ``"controlled_connected"``, ``"swap"``, ``"measure"``, ``"reset"``
        or ``"lifecycle"``.
    conditions:
        Enclosing classical-control frames, outermost first.
    """

    name: str
    wires: Tuple[int, ...]
    kind: str = "gate"
    conditions: Tuple[Tuple[int, bool], ...] = ()


class GlyphSet(ABC):
    """
    Capability interface for turning laid-out events into output text.

    The packing engine and wire registry never look at glyph contents; they
    only rely on :attr:`cell_width` and :attr:`marker_width` to keep every
    wire's rows the same length.
    """

    #: Width of a gate, connector or filler cell.
    cell_width: int = 0
    #: Width of wire start/release markers and the fillers beside them.
    marker_width: int = 0

    @abstractmethod
    def start_marker(self) -> Cell:
        """Cell that begins a freshly (re-)allocated wire."""

    @abstractmethod
    def release_marker(self) -> Cell:
        """Cell that ends a released wire."""

    @abstractmethod
    def filler(self, style: WireStyle) -> Cell:
        """Idle cell for a wire that got nothing in a column."""

    @abstractmethod
    def marker_filler(self, style: WireStyle) -> Cell:
        """Idle cell for a wire beside somebody else's lifecycle marker."""

    @abstractmethod
    def cell(self, element: Element, style: WireStyle, conditioned: bool = False) -> Cell:
        """Cell for one wire's share of an event."""

    @abstractmethod
    def statement(self, statement: Statement) -> Optional[str]:
        """
        Validate ``statement`` and return its text, or None when the flavour
        has no statement output.

        Called before anything is drawn, so raising here leaves the diagram
        untouched.
        """

    @abstractmethod
    def assemble(self, lines: Sequence[str], statements: Sequence[str]) -> str:
        """Serialize the finished diagram."""


def center_label(label: str, width: int = 3) -> str:
    """
    Center ``label`` in a field of ``width`` characters.

    Odd padding puts the extra space on the right; labels longer than the
    field are truncated.
    """
    label = label[:width]
    left = (width - len(label)) // 2
    right = width - len(label) - left
    return " " * left + label + " " * right


__all__ = [
    "ElementKind",
    "Element",
    "Statement",
    "GlyphSet",
    "center_label",
]
