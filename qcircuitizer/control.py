"""Classical control context.

Tracks the nested measurement-conditioned regions the drawer is currently
inside. Frames are pushed on entry and popped on every exit path, including
exceptions, so nested and aborted branches compose correctly.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

Frame = Tuple[int, bool]


class ClassicalControlStack:
    """Ordered stack of ``(classical_wire_id, branch_value)`` frames."""

    def __init__(self) -> None:
        self._frames: List[Frame] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    @property
    def frames(self) -> Tuple[Frame, ...]:
        """Active frames, outermost first."""
        return tuple(self._frames)

    @property
    def top(self) -> Optional[Frame]:
        """Innermost frame, or None outside any conditioned region."""
        return self._frames[-1] if self._frames else None

    @contextmanager
    def enter(self, classical_wire_id: int, value: bool) -> Iterator[Frame]:
        """
        Scope a conditioned region.

        Example
        -------
        >>> stack = ClassicalControlStack()
        >>> with stack.enter(0, True):
        ...     assert stack.top == (0, True)
        >>> stack.top is None
        True
        """
        frame = (int(classical_wire_id), bool(value))
        self._frames.append(frame)
        try:
            yield frame
        finally:
            self._frames.pop()

    def run(
        self, classical_wire_id: int, value: bool, body: Optional[Callable[[], T]]
    ) -> Optional[T]:
        """Call ``body`` inside :meth:`enter` and return its result."""
        with self.enter(classical_wire_id, value):
            if body is None:
                return None
            return body()


__all__ = ["ClassicalControlStack", "Frame"]
