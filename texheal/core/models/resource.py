"""
MissingResource — what a failed compile needs installed.

The diagnostic parser produces one of these; the installer backends
consume it. The ``kind`` travels with the name so a backend can pick
its package-name transformation without re-parsing compiler output.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

ResourceKind = Literal["file", "font", "babel"]

BABEL_SUFFIX = ".ldf"


class MissingResource(BaseModel):
    """A file, font, or babel language definition the compiler could not find."""

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    name: str

    @field_validator("name")
    @classmethod
    def _well_formed(cls, value: str) -> str:
        if not value:
            raise ValueError("resource name must not be empty")
        if any(ch.isspace() for ch in value):
            raise ValueError(f"resource name must not contain whitespace: {value!r}")
        return value

    @classmethod
    def file(cls, name: str) -> MissingResource:
        return cls(kind="file", name=name)

    @classmethod
    def font(cls, name: str) -> MissingResource:
        return cls(kind="font", name=name)

    @classmethod
    def babel_language(cls, language: str) -> MissingResource:
        """Babel option ``language`` → the ``<language>.ldf`` definition file."""
        return cls(kind="babel", name=language + BABEL_SUFFIX)

    def __str__(self) -> str:
        return self.name
