"""Tests for JSON event trace import/export."""

import json

import pytest

from qcircuitizer import (
    Allocate,
    ClassicallyControlled,
    ConnectedGate,
    ControlledGate,
    Measure,
    Pauli,
    SingleGate,
    TraceFormatError,
    replay,
)
from qcircuitizer.io import (
    TRACE_VERSION,
    dump_trace,
    events_to_trace,
    load_trace,
    trace_schema,
    trace_to_events,
    validate_trace,
)

EVENTS = (
    Allocate((0, 1)),
    SingleGate("S†", 0, "sdg"),
    ControlledGate("X", (0,), 1),
    ConnectedGate("e", (Pauli.X, Pauli.Z), (0, 1)),
    Measure(0),
    ClassicallyControlled(0, on_zero=(), on_one=(SingleGate("X", 1),)),
)


def _trace(*events):
    return {"version": TRACE_VERSION, "events": list(events)}


def test_events_to_trace_layout():
    trace = events_to_trace(EVENTS, metadata={"producer": "tests"})
    assert trace["version"] == TRACE_VERSION
    assert trace["metadata"] == {"producer": "tests"}
    assert trace["events"][1] == {"op": "gate", "label": "S†", "target": 0, "name": "sdg"}
    assert trace["events"][3] == {
        "op": "connected",
        "prefix": "e",
        "paulis": ["X", "Z"],
        "targets": [0, 1],
    }
    assert trace["events"][5] == {
        "op": "if",
        "result": 0,
        "zero": [],
        "one": [{"op": "gate", "label": "X", "target": 1}],
    }


def test_dump_and_load(tmp_path):
    path = tmp_path / "trace.json"
    dump_trace(EVENTS, str(path))

    loaded = load_trace(str(path))
    assert loaded == EVENTS
    assert replay(loaded).render() == replay(EVENTS).render()


def test_trace_accepts_pauli_names():
    events = trace_to_events(
        _trace({"op": "measure", "paulis": ["PauliX", "z"], "targets": [0, 1]})
    )
    assert events[0].paulis == (Pauli.X, Pauli.Z)


@pytest.mark.parametrize(
    "trace, match",
    [
        ([], "must be an object"),
        ({"version": "0.1", "events": []}, "Unsupported trace version"),
        ({"version": TRACE_VERSION}, "'events' must be a list"),
        ({"version": TRACE_VERSION, "events": [], "metadata": 3}, "'metadata'"),
        (_trace({"op": "teleport"}), "unknown op"),
        (_trace({"op": "gate", "label": "H"}), "missing field 'target'"),
        (_trace({"op": "gate", "label": "H", "target": "0"}), "must be a integer"),
        (_trace({"op": "gate", "label": "H", "target": True}), "must be a integer"),
        (_trace({"op": "gate", "label": "H", "target": 0, "colour": 1}), "unknown fields"),
        (_trace({"op": "measure", "paulis": ["Q"], "targets": [0]}), "pauli list"),
        (_trace({"op": "if", "result": 0, "one": [{"op": "nope"}]}), r"events\[0\]\.one\[0\]"),
        (_trace(5), "must be an object"),
    ],
)
def test_invalid_traces(trace, match):
    with pytest.raises(TraceFormatError, match=match):
        validate_trace(trace)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trace(str(tmp_path / "missing.json"))


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(TraceFormatError, match="Invalid JSON"):
        load_trace(str(path))


def test_trace_schema_lists_every_op():
    ops = trace_schema()["events"]["ops"]
    assert {"gate", "controlled", "connected", "swap", "cswap", "m", "measure", "reset",
            "allocate", "release", "borrow", "return", "assert", "if"} == set(ops)
    json.dumps(trace_schema())
