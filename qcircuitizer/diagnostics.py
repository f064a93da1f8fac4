"""Debug mode and diagram invariant checks.

Debug mode makes every drawer verify, after each event call, that the
diagram it would render is still well formed. It can be toggled with
:func:`set_debug_enabled`, :func:`debug_context` or the
``QCIRCUITIZER_DEBUG`` environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Sequence

from .exceptions import InvariantError

_DEBUG_ENV_VAR = "QCIRCUITIZER_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """Return whether debug mode is currently enabled."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable debug mode.

    Example
    -------
    >>> with debug_context(True):
    ...     drawer.h(0)  # invariants checked after the call
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


def assert_rows_synchronized(lines: Sequence[str]) -> None:
    """
    Raise :class:`InvariantError` unless every line has the same length.

    Parameters
    ----------
    lines:
        Rendered diagram lines, three per wire.
    """
    if len(lines) % 3 != 0:
        raise InvariantError(
            f"Diagram must hold three rows per wire, got {len(lines)} rows."
        )
    lengths = {len(line) for line in lines}
    if len(lengths) > 1:
        raise InvariantError(
            f"Diagram rows are out of sync; found lengths {sorted(lengths)}."
        )


def assert_column_widths(
    widths: Sequence[int], committed: int, cell_width: int
) -> None:
    """
    Raise :class:`InvariantError` unless each wire sits on a column boundary.

    Between flushes a wire is either still at the committed width (it has
    not been drawn on in the pending column) or exactly one cell past it.
    """
    allowed = (committed, committed + cell_width)
    for slot, width in enumerate(widths):
        if width not in allowed:
            raise InvariantError(
                f"Wire slot {slot} has width {width}; expected one of {allowed}."
            )


__all__ = [
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "assert_rows_synchronized",
    "assert_column_widths",
]
