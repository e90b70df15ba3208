"""
InstallReceipt — the result of asking a package manager for a resource.

Installer backends NEVER raise; every outcome, including "no backend
available", is expressed as a receipt with ``status='failed'``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InstallReceipt(BaseModel):
    """Outcome of one installer invocation."""

    backend: str                    # "dnf", "tlmgr", ... or "" if none selected
    resource: str                   # resource name as reported by the parser
    package: str = ""               # name handed to the package manager
    status: Literal["ok", "failed"] = "ok"

    argv: list[str] = Field(default_factory=list)
    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, backend: str, resource: str, **kwargs: Any) -> InstallReceipt:
        return cls(backend=backend, resource=resource, status="ok", **kwargs)

    @classmethod
    def failure(
        cls,
        backend: str,
        resource: str,
        error: str,
        **kwargs: Any,
    ) -> InstallReceipt:
        return cls(backend=backend, resource=resource, status="failed",
                   error=error, **kwargs)
