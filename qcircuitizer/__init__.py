"""qcircuitizer - render streams of quantum gate events as text circuit diagrams."""

__version__ = "0.1.0"

from .config import DrawerConfig
from .control import ClassicalControlStack
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled
from .drawer import CircuitDrawer
from .events import (
    Allocate,
    Assertion,
    Borrow,
    ClassicallyControlled,
    ConnectedGate,
    ControlledGate,
    ControlledSwap,
    Measure,
    MultiMeasure,
    Release,
    Reset,
    Return,
    SingleGate,
    Swap,
    replay,
)
from .exceptions import (
    CircuitizerError,
    InvalidAxisError,
    InvalidResultError,
    InvariantError,
    ShapeMismatchError,
    TraceFormatError,
    UnsupportedGateError,
    WireStateError,
)
from .glyphs import BoxGlyphs, DirectiveGlyphs, GlyphSet
from .io import dump_trace, events_to_trace, load_trace, trace_to_events
from .primitives import MeasurementResult, Pauli
from .wires import WireState

__all__ = [
    "__version__",
    # Drawer
    "CircuitDrawer",
    "DrawerConfig",
    "ClassicalControlStack",
    "MeasurementResult",
    "Pauli",
    "WireState",
    # Output flavours
    "GlyphSet",
    "BoxGlyphs",
    "DirectiveGlyphs",
    # Event records
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
    "replay",
    # Trace I/O
    "trace_to_events",
    "events_to_trace",
    "load_trace",
    "dump_trace",
    # Diagnostics
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Errors
    "CircuitizerError",
    "WireStateError",
    "ShapeMismatchError",
    "InvalidAxisError",
    "UnsupportedGateError",
    "InvalidResultError",
    "InvariantError",
    "TraceFormatError",
]
