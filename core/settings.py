"""Environment-driven settings for the CLI and the web service."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from hanoi_engine.hints import ADVISORS

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        hint_strategy: Default hint advisor for new games
        tick_seconds: Interval of the elapsed-time tick
        verify_invariants: Check state invariants after every transition
        cors_origins: Origins allowed to call the web API
    """

    hint_strategy: str = "greedy"
    tick_seconds: float = 1.0
    verify_invariants: bool = False
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"]
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from the environment.

        Raises:
            ValueError: On an unknown hint strategy or a non-positive tick.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        hint_strategy = env.get("HANOI_HINT_STRATEGY", defaults.hint_strategy).lower()
        if hint_strategy not in ADVISORS:
            raise ValueError(f"HANOI_HINT_STRATEGY must be one of {sorted(ADVISORS)}, got {hint_strategy!r}")

        tick_seconds = float(env.get("HANOI_TICK_SECONDS", defaults.tick_seconds))
        if tick_seconds <= 0:
            raise ValueError(f"HANOI_TICK_SECONDS must be positive, got {tick_seconds}")

        verify = env.get("HANOI_VERIFY_INVARIANTS", "").strip().lower() in _TRUE_VALUES

        cors_origins = list(defaults.cors_origins)
        prod_url = env.get("FRONTEND_URL")
        if prod_url:
            cors_origins.append(prod_url)

        return cls(
            hint_strategy=hint_strategy,
            tick_seconds=tick_seconds,
            verify_invariants=verify,
            cors_origins=cors_origins,
        )
