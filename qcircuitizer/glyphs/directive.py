"""Directive-syntax flavour: one ``<name> <wire ids>;`` statement per event.

Produces no row glyphs at all; the packing engine still runs, so wire
lifecycle and contract checks behave exactly as in the box flavour. Sample
output::

    alloc 0 1 2;
    h 0;
    cx 0 2;
    if(c0==1) x 1;
    release 0 1 2;
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ..exceptions import UnsupportedGateError
from ..wires import Cell, WireStyle
from .base import Element, GlyphSet, Statement

_EMPTY: Cell = ("", "", "")
_NAME_RE = re.compile(r"^[^\s;]+$")

_SUPPORTED_KINDS = frozenset(
    ("gate", "controlled", "connected", "swap", "measure", "reset", "lifecycle")
)


class DirectiveGlyphs(GlyphSet):
    """
    Line-oriented statement output.

    Statements carrying classical-control conditions are prefixed with
    ``if(c<id>==<value>,...)``.
    """

    cell_width = 0
    marker_width = 0

    def start_marker(self) -> Cell:
        return _EMPTY

    def release_marker(self) -> Cell:
        return _EMPTY

    def filler(self, style: WireStyle) -> Cell:
        return _EMPTY

    def marker_filler(self, style: WireStyle) -> Cell:
        return _EMPTY

    def cell(self, element: Element, style: WireStyle, conditioned: bool = False) -> Cell:
        return _EMPTY

    def statement(self, statement: Statement) -> Optional[str]:
        if statement.kind not in _SUPPORTED_KINDS:
            raise UnsupportedGateError(
                f"Directive output cannot express {statement.kind} event "
                f"{statement.name!r}."
            )
        if not _NAME_RE.match(statement.name):
            raise UnsupportedGateError(
                f"Gate name {statement.name!r} cannot be written as a directive."
            )
        text = statement.name + " " + " ".join(str(w) for w in statement.wires) + ";"
        if statement.conditions:
            clauses = ",".join(f"c{cid}=={int(value)}" for cid, value in statement.conditions)
            text = f"if({clauses}) {text}"
        return text

    def assemble(self, lines: Sequence[str], statements: Sequence[str]) -> str:
        return "\n".join(statements)


__all__ = ["DirectiveGlyphs"]
