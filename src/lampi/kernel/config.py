"""Checker configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from lampi.kernel.reduce import Fuel

MAX_STEPS_ENV = "LAMPI_MAX_STEPS"


@dataclass(frozen=True)
class Config:
    """Settings for one top-level ``typecheck`` or ``evaluate`` call.

    Args:
        max_steps: Beta-contraction budget, or ``None`` to reduce without bound.
    """

    max_steps: int | None = None

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must be non-negative")

    def fuel(self) -> Fuel:
        """Fresh step counter honouring ``max_steps``."""
        return Fuel(self.max_steps)

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Config:
        """Read ``LAMPI_MAX_STEPS``; unset or empty means unbounded."""
        environ = os.environ if environ is None else environ
        raw = environ.get(MAX_STEPS_ENV, "").strip()
        if not raw:
            return Config()
        try:
            max_steps = int(raw)
        except ValueError as exc:
            raise ValueError(
                f"{MAX_STEPS_ENV} must be an integer, got {raw!r}"
            ) from exc
        return Config(max_steps=max_steps)


__all__ = ["Config", "MAX_STEPS_ENV"]
