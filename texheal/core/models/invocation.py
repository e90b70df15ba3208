"""
CompilerInvocation — one compile attempt's command line.

Built fresh for every attempt from the selected compiler and the
user's positional arguments; immutable for the duration of the run.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict

DEFAULT_SOURCE = "main.tex"

# Always passed, in this order, right before the source filename.
FIXED_COMPILER_ARGS: tuple[str, ...] = (
    "-file-line-error",
    "-interaction=nonstopmode",
    "-synctex=1",
    "-output-format=pdf",
)


class CompilerInvocation(BaseModel):
    """(compiler, ordered arguments, source filename)."""

    model_config = ConfigDict(frozen=True)

    compiler: str
    extra_args: tuple[str, ...] = ()
    source: str = DEFAULT_SOURCE

    @classmethod
    def from_cli_args(cls, compiler: str, cli_args: Sequence[str]) -> CompilerInvocation:
        """Split user arguments: the last one is the source, the rest pass through.

        With no arguments the source defaults to ``main.tex``.
        """
        if not cli_args:
            return cls(compiler=compiler)
        return cls(
            compiler=compiler,
            extra_args=tuple(cli_args[:-1]),
            source=cli_args[-1],
        )

    @property
    def arguments(self) -> list[str]:
        """Argument list handed to the compiler (excluding the binary)."""
        return [*self.extra_args, *FIXED_COMPILER_ARGS, self.source]

    @property
    def argv(self) -> list[str]:
        return [self.compiler, *self.arguments]

    def aux_path(self, cwd: Path | None = None) -> Path:
        """The auxiliary file the compiler writes next to its working directory.

        TeX writes ``<jobname>.aux`` into the current directory, and the
        job name is the source file's stem.
        """
        return (cwd or Path.cwd()) / (Path(self.source).stem + ".aux")
