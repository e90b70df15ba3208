"""
Settings — validated runtime configuration.

Loaded from ``texheal.yml`` by the config loader; every field has a
default so running without a configuration file is the normal case.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_COMPILERS = ["latexmk", "pdflatex"]
DEFAULT_INSTALLERS = ["dnf", "tlmgr"]
DEFAULT_MAX_ATTEMPTS = 32


class HeartbeatSettings(BaseModel):
    """Progress dots printed while a compile runs."""

    every: int = Field(default=10, ge=1)    # scanned lines per dot
    wrap: int = Field(default=500, ge=1)    # scanned lines per line break


class Settings(BaseModel):
    """Top-level configuration."""

    compilers: list[str] = Field(default_factory=lambda: list(DEFAULT_COMPILERS))
    installers: list[str] = Field(default_factory=lambda: list(DEFAULT_INSTALLERS))
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1, le=1000)
    aux_file: str | None = None
    heartbeat: HeartbeatSettings = Field(default_factory=HeartbeatSettings)

    @field_validator("compilers", "installers")
    @classmethod
    def _non_empty_names(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("list must not be empty")
        for name in value:
            if not name or any(ch.isspace() for ch in name):
                raise ValueError(f"invalid program name: {name!r}")
        return value

    @field_validator("installers")
    @classmethod
    def _known_installers(cls, value: list[str]) -> list[str]:
        from texheal.adapters.installers import BACKENDS

        unknown = [name for name in value if name not in BACKENDS]
        if unknown:
            raise ValueError(
                f"unknown installer(s): {', '.join(unknown)} "
                f"(known: {', '.join(sorted(BACKENDS))})"
            )
        return value
