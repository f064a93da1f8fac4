"""Event trace schema definition and validation.

An event trace records the calls an executor made on a drawer so the
diagram can be rebuilt later. Trace structure::

    {
        "version": "qcircuitizer-trace-1.0",
        "events": [
            {"op": "allocate", "qubits": [0, 1]},
            {"op": "gate", "label": "H", "target": 0},
            {"op": "controlled", "label": "X", "controls": [0], "target": 1},
            {"op": "m", "target": 0},
            {"op": "if", "result": 0, "zero": [...], "one": [...]},
            ...
        ],
        "metadata": {...}                       # optional
    }

``"result"`` in an ``"if"`` event is the classical wire id of an earlier
measurement; ids count measurements from zero in trace order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from ..exceptions import TraceFormatError

TRACE_VERSION = "qcircuitizer-trace-1.0"

_INT = "integer"
_INTS = "integer list"
_STR = "string"
_PAULIS = "pauli list"
_EVENTS = "event list"

# op -> (required fields, optional fields)
EVENT_FIELDS: Dict[str, Tuple[Dict[str, str], Dict[str, str]]] = {
    "gate": ({"label": _STR, "target": _INT}, {"name": _STR}),
    "controlled": (
        {"label": _STR, "controls": _INTS, "target": _INT},
        {"name": _STR},
    ),
    "connected": (
        {"prefix": _STR, "paulis": _PAULIS, "targets": _INTS},
        {"controls": _INTS},
    ),
    "swap": ({"q1": _INT, "q2": _INT}, {}),
    "cswap": ({"controls": _INTS, "q1": _INT, "q2": _INT}, {}),
    "m": ({"target": _INT}, {}),
    "measure": ({"paulis": _PAULIS, "targets": _INTS}, {}),
    "reset": ({"target": _INT}, {}),
    "allocate": ({"qubits": _INTS}, {}),
    "release": ({"qubits": _INTS}, {}),
    "borrow": ({"qubits": _INTS}, {}),
    "return": ({"qubits": _INTS}, {}),
    "assert": ({"paulis": _PAULIS, "targets": _INTS}, {"message": _STR}),
    "if": ({"result": _INT}, {"zero": _EVENTS, "one": _EVENTS}),
}

_PAULI_NAMES = {"I", "X", "Y", "Z", "PAULII", "PAULIX", "PAULIY", "PAULIZ"}


def trace_schema() -> dict:
    """
    Return a structural description of the trace format.

    This is documentation in dict form, not a JSON Schema document.
    """
    return {
        "version": {"type": _STR, "required": True, "value": TRACE_VERSION},
        "events": {
            "type": _EVENTS,
            "required": True,
            "ops": {
                op: {"required": dict(req), "optional": dict(opt)}
                for op, (req, opt) in EVENT_FIELDS.items()
            },
        },
        "metadata": {"type": "object", "required": False},
    }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_field(path: str, name: str, kind: str, value: Any) -> None:
    where = f"{path}.{name}"
    if kind == _INT:
        ok = _is_int(value)
    elif kind == _STR:
        ok = isinstance(value, str)
    elif kind == _INTS:
        ok = isinstance(value, list) and all(_is_int(v) for v in value)
    elif kind == _PAULIS:
        ok = isinstance(value, list) and all(
            isinstance(v, str) and v.strip().upper() in _PAULI_NAMES for v in value
        )
    elif kind == _EVENTS:
        if not isinstance(value, list):
            raise TraceFormatError(f"{where} must be a list of events.")
        _validate_events(value, where)
        return
    else:
        raise TraceFormatError(f"Unknown field kind {kind!r} for {where}.")
    if not ok:
        raise TraceFormatError(f"{where} must be a {kind}, got {value!r}.")


def _validate_events(events: Sequence[Any], path: str) -> None:
    for i, event in enumerate(events):
        where = f"{path}[{i}]"
        if not isinstance(event, dict):
            raise TraceFormatError(f"{where} must be an object, got {type(event).__name__}.")
        op = event.get("op")
        if op not in EVENT_FIELDS:
            raise TraceFormatError(
                f"{where} has unknown op {op!r}. Supported ops: {sorted(EVENT_FIELDS)}."
            )
        required, optional = EVENT_FIELDS[op]
        for name, kind in required.items():
            if name not in event:
                raise TraceFormatError(f"{where} ({op}) is missing field {name!r}.")
            _check_field(where, name, kind, event[name])
        for name, kind in optional.items():
            if name in event:
                _check_field(where, name, kind, event[name])
        unknown: List[str] = [
            k for k in event if k != "op" and k not in required and k not in optional
        ]
        if unknown:
            raise TraceFormatError(f"{where} ({op}) has unknown fields {sorted(unknown)}.")


def validate_trace(obj: Any) -> None:
    """
    Validate an event trace object.

    Raises
    ------
    TraceFormatError
        On the first structural problem found, naming its location.
    """
    if not isinstance(obj, dict):
        raise TraceFormatError(f"Trace must be an object, got {type(obj).__name__}.")
    version = obj.get("version")
    if version != TRACE_VERSION:
        raise TraceFormatError(
            f"Unsupported trace version {version!r}; expected {TRACE_VERSION!r}."
        )
    events = obj.get("events")
    if not isinstance(events, list):
        raise TraceFormatError("Trace field 'events' must be a list.")
    if "metadata" in obj and not isinstance(obj["metadata"], dict):
        raise TraceFormatError("Trace field 'metadata' must be an object.")
    _validate_events(events, "events")


__all__ = ["TRACE_VERSION", "EVENT_FIELDS", "trace_schema", "validate_trace"]
