"""Tests for the wire registry."""

import numpy as np
import pytest

from qcircuitizer.exceptions import WireStateError
from qcircuitizer.wires import (
    WireRegistry,
    WireState,
    WireStyle,
    check_distinct,
    check_wire_id,
)

MARKER = ("     ", "|0>──", "     ")


def test_new_registry_is_empty():
    reg = WireRegistry()
    assert len(reg) == 0
    assert reg.ids == []
    assert reg.lines() == []
    assert reg.state(0) is WireState.UNSEEN


def test_add_pads_rows_and_assigns_slots():
    reg = WireRegistry()
    assert reg.add(3, 0, MARKER) == 0
    assert reg.add(1, 4, MARKER) == 1

    assert reg.slot(3) == 0
    assert reg.slot(1) == 1
    assert reg.width(1) == 9
    assert reg.state(3) is WireState.ACTIVE
    # Output is ordered by wire id, not by slot.
    assert reg.ids == [1, 3]
    assert reg.lines()[1] == "    |0>──"
    assert reg.lines()[4] == "|0>──"


def test_add_known_wire_rejected():
    reg = WireRegistry()
    reg.add(0, 0, MARKER)
    with pytest.raises(WireStateError, match="already registered"):
        reg.add(0, 0, MARKER)


def test_append_grows_all_three_rows():
    reg = WireRegistry()
    reg.add(0, 0, MARKER)
    reg.append(0, ("┌─────┐", "┤  H  ├", "└─────┘"))

    assert reg.lines() == ["     ┌─────┐", "|0>──┤  H  ├", "     └─────┘"]
    assert reg.width(0) == 12
    assert isinstance(reg.widths, np.ndarray)
    assert list(reg.widths) == [12]


def test_pending_cells_do_not_mutate_rows():
    reg = WireRegistry()
    reg.add(0, 0, MARKER)
    pending = {0: ("       ", "───────", "       ")}

    assert reg.lines(pending)[1] == "|0>─────────"
    assert reg.lines()[1] == "|0>──"


def test_release_and_reactivate_keep_slot():
    reg = WireRegistry()
    reg.add(0, 0, MARKER)
    reg.add(1, 0, MARKER)

    reg.mark_released(0)
    assert reg.state(0) is WireState.RELEASED
    assert reg.style(0) is WireStyle.RELEASED

    reg.reactivate(0)
    assert reg.state(0) is WireState.ACTIVE
    assert reg.slot(0) == 0


def test_collapsed_style_cleared_on_reactivate():
    reg = WireRegistry()
    reg.add(0, 0, MARKER)
    reg.set_collapsed(0)
    assert reg.style(0) is WireStyle.COLLAPSED

    reg.mark_released(0)
    assert reg.style(0) is WireStyle.RELEASED

    reg.reactivate(0)
    assert reg.style(0) is WireStyle.ACTIVE


def test_require_active():
    reg = WireRegistry()
    reg.add(0, 0, MARKER)
    reg.require_active([0])

    with pytest.raises(WireStateError, match="not been allocated"):
        reg.require_active([5])

    reg.mark_released(0)
    with pytest.raises(WireStateError, match="already been released"):
        reg.require_active([0])


def test_between_uses_known_ids_only():
    reg = WireRegistry()
    for w in (0, 2, 5, 7):
        reg.add(w, 0, MARKER)

    assert reg.between(0, 7) == [2, 5]
    assert reg.between(2, 5) == []
    assert reg.between(0, 3) == [2]


def test_check_wire_id():
    assert check_wire_id(3) == 3
    assert check_wire_id(np.int64(4)) == 4
    with pytest.raises(WireStateError, match="non-negative"):
        check_wire_id(-1)
    with pytest.raises(WireStateError, match="integer"):
        check_wire_id("0")
    with pytest.raises(WireStateError, match="integer"):
        check_wire_id(True)


def test_check_distinct():
    check_distinct([0, 1, 2])
    with pytest.raises(WireStateError, match="more than once"):
        check_distinct([0, 1, 0], "swap")
