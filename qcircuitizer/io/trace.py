"""JSON event trace import and export.

See schema.py for the trace format.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..events import (
    Allocate,
    Assertion,
    Borrow,
    ClassicallyControlled,
    ConnectedGate,
    ControlledGate,
    ControlledSwap,
    Event,
    Measure,
    MultiMeasure,
    Release,
    Reset,
    Return,
    SingleGate,
    Swap,
)
from ..exceptions import TraceFormatError
from ..primitives import Pauli
from .schema import TRACE_VERSION, _validate_events, validate_trace

_LIFECYCLE = {"allocate": Allocate, "release": Release, "borrow": Borrow, "return": Return}


def _paulis(values: Iterable[str]) -> Tuple[Pauli, ...]:
    return tuple(Pauli.coerce(v) for v in values)


def _event_from_json(obj: Dict[str, Any]) -> Event:
    op = obj["op"]
    if op == "gate":
        return SingleGate(obj["label"], obj["target"], obj.get("name"))
    if op == "controlled":
        return ControlledGate(obj["label"], tuple(obj["controls"]), obj["target"], obj.get("name"))
    if op == "connected":
        return ConnectedGate(
            obj["prefix"],
            _paulis(obj["paulis"]),
            tuple(obj["targets"]),
            tuple(obj.get("controls", ())),
        )
    if op == "swap":
        return Swap(obj["q1"], obj["q2"])
    if op == "cswap":
        return ControlledSwap(tuple(obj["controls"]), obj["q1"], obj["q2"])
    if op == "m":
        return Measure(obj["target"])
    if op == "measure":
        return MultiMeasure(_paulis(obj["paulis"]), tuple(obj["targets"]))
    if op == "reset":
        return Reset(obj["target"])
    if op in _LIFECYCLE:
        return _LIFECYCLE[op](tuple(obj["qubits"]))
    if op == "assert":
        return Assertion(_paulis(obj["paulis"]), tuple(obj["targets"]), obj.get("message", ""))
    if op == "if":
        return ClassicallyControlled(
            obj["result"],
            tuple(_event_from_json(e) for e in obj.get("zero", ())),
            tuple(_event_from_json(e) for e in obj.get("one", ())),
        )
    raise TraceFormatError(f"Unknown op {op!r}.")


def _event_to_json(event: Event) -> Dict[str, Any]:
    if isinstance(event, SingleGate):
        out: Dict[str, Any] = {"op": "gate", "label": event.label, "target": event.target}
        if event.name is not None:
            out["name"] = event.name
        return out
    if isinstance(event, ControlledGate):
        out = {
            "op": "controlled",
            "label": event.label,
            "controls": list(event.controls),
            "target": event.target,
        }
        if event.name is not None:
            out["name"] = event.name
        return out
    if isinstance(event, ConnectedGate):
        out = {
            "op": "connected",
            "prefix": event.prefix,
            "paulis": [Pauli.coerce(p).value for p in event.paulis],
            "targets": list(event.targets),
        }
        if event.controls:
            out["controls"] = list(event.controls)
        return out
    if isinstance(event, Swap):
        return {"op": "swap", "q1": event.q1, "q2": event.q2}
    if isinstance(event, ControlledSwap):
        return {"op": "cswap", "controls": list(event.controls), "q1": event.q1, "q2": event.q2}
    if isinstance(event, Measure):
        return {"op": "m", "target": event.target}
    if isinstance(event, MultiMeasure):
        return {
            "op": "measure",
            "paulis": [Pauli.coerce(p).value for p in event.paulis],
            "targets": list(event.targets),
        }
    if isinstance(event, Reset):
        return {"op": "reset", "target": event.target}
    for op, cls in _LIFECYCLE.items():
        if isinstance(event, cls):
            return {"op": op, "qubits": list(event.qubits)}
    if isinstance(event, Assertion):
        out = {
            "op": "assert",
            "paulis": [Pauli.coerce(p).value for p in event.paulis],
            "targets": list(event.targets),
        }
        if event.message:
            out["message"] = event.message
        return out
    if isinstance(event, ClassicallyControlled):
        return {
            "op": "if",
            "result": event.classical_wire_id,
            "zero": [_event_to_json(e) for e in event.on_zero],
            "one": [_event_to_json(e) for e in event.on_one],
        }
    raise TypeError(f"Expected an event record, got {type(event).__name__}.")


def trace_to_events(obj: dict) -> Tuple[Event, ...]:
    """
    Convert a trace object to event records.

    Raises
    ------
    TraceFormatError
        If the trace does not match the schema.
    """
    validate_trace(obj)
    return tuple(_event_from_json(e) for e in obj["events"])


def events_to_trace(events: Iterable[Event], metadata: Optional[dict] = None) -> dict:
    """
    Convert event records to a trace object.

    Parameters
    ----------
    events:
        Event records in call order.
    metadata:
        Optional JSON-serializable metadata (producer, notes, ...).
    """
    serialized: List[Dict[str, Any]] = [_event_to_json(e) for e in events]
    _validate_events(serialized, "events")
    result: Dict[str, Any] = {"version": TRACE_VERSION, "events": serialized}
    if metadata:
        result["metadata"] = metadata
    return result


def dump_trace(events: Iterable[Event], path: str, metadata: Optional[dict] = None) -> None:
    """Write event records to a JSON trace file."""
    obj = events_to_trace(events, metadata)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def load_trace(path: str) -> Tuple[Event, ...]:
    """
    Load event records from a JSON trace file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    TraceFormatError
        If the file is not valid JSON or does not match the schema.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Trace file not found: {path}")
    except json.JSONDecodeError as e:
        raise TraceFormatError(f"Invalid JSON in trace file {path}: {e}")

    return trace_to_events(obj)


__all__ = ["trace_to_events", "events_to_trace", "dump_trace", "load_trace"]
