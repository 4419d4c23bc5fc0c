"""CLI settings — flags and ``BLOGFORGE_*`` env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``BLOGFORGE_*`` prefix
  3. Code defaults

The project configuration itself (``blogforge.config.*``) is not a
settings source; it is loaded by :mod:`blogforge.config.loader` once the
project root is known.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class BlogForgeSettings(BaseSettings):
    """Process-wide CLI behaviour flags, frozen after construction.

    Attributes:
        project_root: Explicit ``--root`` override, or None for discovery.
    """

    model_config = SettingsConfigDict(frozen=True, env_prefix="BLOGFORGE_")

    project_root: Path | None = None
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> BlogForgeSettings:
        """Construct settings from a CLI invocation.

        Flags left at their unset value (None) do not mask env vars.
        """
        explicit = {key: value for key, value in cli_flags.items() if value not in (None, False)}
        return cls(**explicit)
