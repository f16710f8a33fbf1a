"""Runtime settings for rdcalc, read from the environment.

RDCALC_MAX_INPUT  - longest expression accepted by the CLI (default 99)
RDCALC_MAX_DEPTH  - deepest parenthesis nesting evaluated (default 200, at most 250)
RDCALC_LEGACY     - 1/true/yes/on selects the lenient legacy grammar
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_INPUT = 99
DEFAULT_MAX_DEPTH = 200
# three interpreter frames per nesting level; keeps well inside the default
# recursion limit
MAX_DEPTH_CEILING = 250

_TRUTHY = ("1", "true", "yes", "on")


def _env_int(env: dict[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass
class Settings:
    """Limits and grammar mode for one run."""

    max_input: int = DEFAULT_MAX_INPUT
    max_depth: int = DEFAULT_MAX_DEPTH
    legacy: bool = False

    def __post_init__(self) -> None:
        self.max_depth = min(self.max_depth, MAX_DEPTH_CEILING)

    @classmethod
    def from_env(cls, env: Optional[dict[str, str]] = None) -> Settings:
        """Build settings from RDCALC_* variables, falling back to defaults."""
        env = os.environ if env is None else env
        return cls(
            max_input=_env_int(env, "RDCALC_MAX_INPUT", DEFAULT_MAX_INPUT),
            max_depth=_env_int(env, "RDCALC_MAX_DEPTH", DEFAULT_MAX_DEPTH),
            legacy=env.get("RDCALC_LEGACY", "").strip().lower() in _TRUTHY,
        )

    def override(
        self,
        max_input: Optional[int] = None,
        max_depth: Optional[int] = None,
        legacy: Optional[bool] = None,
    ) -> Settings:
        """Return a copy with any non-None fields replaced."""
        return Settings(
            max_input=max_input if max_input is not None else self.max_input,
            max_depth=max_depth if max_depth is not None else self.max_depth,
            legacy=legacy if legacy is not None else self.legacy,
        )
