"""
RunResult — outcome of one child process run.

Created by the process runner, consumed by the supervisor, the
diagnostic parser and the installer backends. A result with
``launch_error`` set never started at all; that is distinct from a
child that started and exited non-zero.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RunResult(BaseModel):
    """Captured output and termination status of a child process."""

    argv: list[str] = Field(default_factory=list)
    output: str = ""
    status: Literal["ok", "failed"] = "ok"

    exit_code: int | None = None
    signal: int | None = None         # set when the child was killed by a signal
    launch_error: str | None = None   # set when the child never started

    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def launched(self) -> bool:
        """Whether the child process actually started."""
        return self.launch_error is None

    @classmethod
    def from_returncode(
        cls,
        argv: list[str],
        returncode: int,
        output: str = "",
        duration_ms: int = 0,
    ) -> RunResult:
        """Build a result from a ``Popen.returncode`` (negative = signal)."""
        if returncode == 0:
            return cls(argv=argv, output=output, status="ok", exit_code=0,
                       duration_ms=duration_ms)
        if returncode < 0:
            return cls(argv=argv, output=output, status="failed",
                       signal=-returncode, duration_ms=duration_ms)
        return cls(argv=argv, output=output, status="failed",
                   exit_code=returncode, duration_ms=duration_ms)

    @classmethod
    def not_launched(cls, argv: list[str], error: str) -> RunResult:
        return cls(argv=argv, output="", status="failed", launch_error=error)

    def describe(self) -> str:
        """Short human-readable termination status."""
        if self.launch_error is not None:
            return f"could not launch: {self.launch_error}"
        if self.signal is not None:
            return f"killed by signal {self.signal}"
        if self.exit_code:
            return f"exit code {self.exit_code}"
        return "ok"
