"""Pytest configuration and shared fixtures for qcircuitizer tests.

This module provides:
- A deterministic numpy RNG for randomized event sequences
- Drawer factories for both output flavours
- Debug-mode isolation between tests
"""

import os

import numpy as np
import pytest

from qcircuitizer import CircuitDrawer, DirectiveGlyphs, DrawerConfig
from qcircuitizer.diagnostics import is_debug_enabled, set_debug_enabled


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def drawer() -> CircuitDrawer:
    """Box-flavour drawer that checks its invariants after every event."""
    return CircuitDrawer(config=DrawerConfig(check_invariants=True))


@pytest.fixture
def directive_drawer() -> CircuitDrawer:
    return CircuitDrawer(glyphs=DirectiveGlyphs(), config=DrawerConfig(check_invariants=True))


@pytest.fixture(autouse=True)
def restore_debug_mode():
    """Keep a test that toggles debug mode from leaking into the next one."""
    previous = is_debug_enabled()
    yield
    set_debug_enabled(previous)
