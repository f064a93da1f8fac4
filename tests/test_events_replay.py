"""Tests for event records and replay."""

import pytest

from qcircuitizer import (
    Allocate,
    Assertion,
    Borrow,
    CircuitDrawer,
    ClassicallyControlled,
    ConnectedGate,
    ControlledGate,
    ControlledSwap,
    DirectiveGlyphs,
    InvalidResultError,
    Measure,
    MultiMeasure,
    Pauli,
    Release,
    Reset,
    Return,
    SingleGate,
    Swap,
    replay,
)

TELEPORT = (
    Allocate((0, 1, 2)),
    SingleGate("H", 1),
    ControlledGate("X", (1,), 2),
    ControlledGate("X", (0,), 1),
    SingleGate("H", 0),
    Measure(0),
    Measure(1),
    ClassicallyControlled(1, on_one=(SingleGate("X", 2),)),
    ClassicallyControlled(0, on_one=(SingleGate("Z", 2),)),
    Release((0, 1, 2)),
)


def _direct_teleport(drawer):
    drawer.allocate([0, 1, 2])
    drawer.h(1)
    drawer.controlled_x([1], 2)
    drawer.controlled_x([0], 1)
    drawer.h(0)
    a = drawer.m(0)
    b = drawer.m(1)
    drawer.classically_controlled(b, on_one=lambda: drawer.x(2))
    drawer.classically_controlled(a, on_one=lambda: drawer.z(2))
    drawer.release([0, 1, 2])


def test_replay_matches_direct_calls():
    direct = CircuitDrawer()
    _direct_teleport(direct)
    assert replay(TELEPORT).render() == direct.render()


def test_replay_is_deterministic():
    assert replay(TELEPORT).render() == replay(TELEPORT).render()


def test_replay_into_given_drawer():
    drawer = CircuitDrawer(glyphs=DirectiveGlyphs())
    assert replay(TELEPORT, drawer) is drawer
    assert drawer.statements[-3:] == ("x 2;", "z 2;", "release 0 1 2;")


def test_replay_collects_results():
    results = {}
    replay(
        (Allocate((0, 1)), Measure(0), MultiMeasure((Pauli.X, Pauli.Y), (0, 1))),
        results=results,
    )
    assert sorted(results) == [0, 1]
    assert results[1].paulis == (Pauli.X, Pauli.Y)


def test_every_event_kind_replays():
    events = (
        Allocate((0, 1, 2)),
        Borrow((0,)),
        ConnectedGate("e", (Pauli.X, Pauli.Z), (0, 2)),
        ConnectedGate("e", (Pauli.Y,), (2,), controls=(1,)),
        Swap(0, 1),
        ControlledSwap((2,), 0, 1),
        Reset(0),
        Assertion((Pauli.Z,), (0,), "zero"),
        Return((0,)),
        Release((2,)),
    )
    drawer = replay(events)
    drawer.check_invariants()
    assert "ex" in drawer.render()
    assert "ey" in drawer.render()


def test_unknown_result_id_rejected():
    with pytest.raises(InvalidResultError, match="classical wire id 4"):
        replay((Allocate((0,)), ClassicallyControlled(4, on_one=(SingleGate("X", 0),))))
