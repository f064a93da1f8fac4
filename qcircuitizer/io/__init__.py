"""Event trace import and export."""

from .schema import TRACE_VERSION, trace_schema, validate_trace
from .trace import dump_trace, events_to_trace, load_trace, trace_to_events

__all__ = [
    "TRACE_VERSION",
    "trace_schema",
    "validate_trace",
    "trace_to_events",
    "events_to_trace",
    "dump_trace",
    "load_trace",
]
