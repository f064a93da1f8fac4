"""Drawer configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUE_VALUES = ("1", "true", "yes", "on")

ANNOTATE_ENV_VAR = "QCIRCUITIZER_ANNOTATE_CONDITIONED"
COLLAPSED_ENV_VAR = "QCIRCUITIZER_MARK_COLLAPSED"


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "0").strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class DrawerConfig:
    """
    Rendering options for :class:`~qcircuitizer.drawer.CircuitDrawer`.

    The defaults draw conditioned gates and measured wires like any others.

    Attributes
    ----------
    annotate_conditioned:
        Draw boxes emitted inside a classically conditioned region with a
        double-line border (box flavour) or an ``if(...)`` prefix (directive
        flavour). When False, conditioned gates look like any other gate.
    mark_collapsed:
        Mark measured wires as collapsed so later fillers on them use the
        double-line wire. Cleared by reset and re-allocation.
    check_invariants:
        Verify row synchronization after every event, as debug mode does.
    """

    annotate_conditioned: bool = False
    mark_collapsed: bool = False
    check_invariants: bool = False

    def __post_init__(self) -> None:
        for name in ("annotate_conditioned", "mark_collapsed", "check_invariants"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool, got {type(value).__name__}.")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "DrawerConfig":
        """
        Build a configuration from environment variables.

        Reads ``QCIRCUITIZER_ANNOTATE_CONDITIONED`` and
        ``QCIRCUITIZER_MARK_COLLAPSED``; accepted truthy values are
        ``1``, ``true``, ``yes`` and ``on``.

        Parameters
        ----------
        env:
            Mapping to read instead of ``os.environ``.
        """
        if env is None:
            env = os.environ
        return cls(
            annotate_conditioned=_env_flag(env, ANNOTATE_ENV_VAR),
            mark_collapsed=_env_flag(env, COLLAPSED_ENV_VAR),
        )


__all__ = ["DrawerConfig", "ANNOTATE_ENV_VAR", "COLLAPSED_ENV_VAR"]
