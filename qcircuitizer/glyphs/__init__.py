"""Output flavours for the circuit drawer."""

from .base import Element, ElementKind, GlyphSet, Statement, center_label
from .box import BoxGlyphs
from .directive import DirectiveGlyphs

__all__ = [
    "Element",
    "ElementKind",
    "GlyphSet",
    "Statement",
    "center_label",
    "BoxGlyphs",
    "DirectiveGlyphs",
]
