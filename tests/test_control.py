"""Tests for the classical control stack."""

import pytest

from qcircuitizer import ClassicalControlStack


def test_empty_stack():
    stack = ClassicalControlStack()
    assert len(stack) == 0
    assert not stack
    assert stack.top is None
    assert stack.frames == ()


def test_enter_pushes_and_pops():
    stack = ClassicalControlStack()
    with stack.enter(3, True) as frame:
        assert frame == (3, True)
        assert stack.top == (3, True)
        with stack.enter(4, 0):
            assert stack.frames == ((3, True), (4, False))
        assert len(stack) == 1
    assert not stack


def test_enter_pops_on_exception():
    stack = ClassicalControlStack()
    with pytest.raises(KeyError):
        with stack.enter(0, False):
            raise KeyError("branch failed")
    assert stack.frames == ()


def test_run_returns_body_result():
    stack = ClassicalControlStack()
    assert stack.run(1, True, lambda: stack.top) == (1, True)
    assert stack.run(1, False, None) is None
    assert stack.top is None
