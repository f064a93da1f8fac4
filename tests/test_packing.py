"""Tests for layout and the column packing engine."""

from qcircuitizer.glyphs import BoxGlyphs, Element, ElementKind
from qcircuitizer.packing import ColumnPacker, layout
from qcircuitizer.wires import WireRegistry


def _packer(*wires):
    registry = WireRegistry()
    packer = ColumnPacker(registry, BoxGlyphs())
    for w in wires:
        packer.start_wire(w)
    return registry, packer


def _box(label="H"):
    return Element(ElementKind.BOX, label)


def test_layout_sets_stubs_and_connectors():
    registry, _ = _packer(0, 1, 2, 3)
    cells = layout(registry, {0: (ElementKind.CONTROL, ""), 3: (ElementKind.BOX, "X")})

    assert cells[0] == Element(ElementKind.CONTROL, "", up=False, down=True)
    assert cells[3] == Element(ElementKind.BOX, "X", up=True, down=False)
    assert cells[1] == Element(ElementKind.CONNECTOR, up=True, down=True)
    assert cells[2] == Element(ElementKind.CONNECTOR, up=True, down=True)


def test_layout_single_wire_has_no_stubs():
    registry, _ = _packer(0, 1)
    assert layout(registry, {1: (ElementKind.BOX, "H")}) == {1: _box("H")}


def test_layout_skips_unknown_ids_between():
    registry, _ = _packer(0, 5)
    cells = layout(registry, {0: (ElementKind.SWAP, ""), 5: (ElementKind.SWAP, "")})
    assert sorted(cells) == [0, 5]


def test_start_wire_pads_to_committed_width():
    registry, packer = _packer(0)
    assert packer.committed_width == 5

    packer.place({0: _box()})
    packer.flush()
    assert packer.committed_width == 12

    packer.start_wire(1)
    assert registry.width(1) == 12
    assert registry.lines()[4] == "       |0>──"


def test_single_wire_events_share_a_column():
    registry, packer = _packer(0, 1)
    packer.place({0: _box()})
    packer.place({1: _box("X")})

    assert packer.committed_width == 5
    assert not packer.column_empty()
    assert list(registry.widths) == [12, 12]


def test_occupied_wire_forces_flush():
    registry, packer = _packer(0, 1)
    packer.place({0: _box()})
    packer.place({0: _box()})

    assert packer.committed_width == 12
    assert packer.is_occupied(0)
    assert not packer.is_occupied(1)
    assert registry.lines()[4] == "|0>─────────"


def test_multi_wire_event_gets_its_own_column():
    registry, packer = _packer(0, 1, 2)
    packer.place({2: _box()})
    packer.place(layout(registry, {0: (ElementKind.SWAP, ""), 1: (ElementKind.SWAP, "")}))

    # Column 1 held the box on wire 2, column 2 the swap.
    assert packer.committed_width == 19
    assert packer.column_empty()
    assert registry.lines()[7] == "|0>──┤  H  ├───────"
    assert registry.lines()[1] == "|0>──" + "───────" + "───╳───"


def test_flush_on_empty_column_is_noop():
    registry, packer = _packer(0)
    packer.flush()
    assert packer.committed_width == 5
    assert registry.lines()[1] == "|0>──"


def test_pending_fillers_cover_free_wires_only():
    registry, packer = _packer(0, 1)
    assert packer.pending_fillers() == {}

    packer.place({1: _box()})
    assert packer.pending_fillers() == {0: ("       ", "───────", "       ")}


def test_marker_column_flushes_first():
    registry, packer = _packer(0, 1)
    packer.place({1: _box()})
    packer.marker_column({0: BoxGlyphs().release_marker()})

    assert packer.committed_width == 17
    assert registry.lines()[1] == "|0>───────────<0|"
    assert registry.lines()[4] == "|0>──┤  H  ├─────"
