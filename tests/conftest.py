"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import os
import textwrap
from pathlib import Path

import pytest

from texheal.core.models.process import RunResult


class ScriptedRunner:
    """In-process stand-in for ProcessRunner.

    ``run`` (compiles) answers from ``compile_results`` in order and
    repeats the last one when they run out.  ``stream`` (installers)
    does the same with ``install_results``, defaulting to success.
    """

    def __init__(
        self,
        compile_results: list[RunResult],
        install_results: list[RunResult] | None = None,
    ):
        self._compile_results = list(compile_results)
        self._install_results = list(install_results or [])
        self.compile_calls: list[list[str]] = []
        self.stream_calls: list[list[str]] = []

    def run(self, command: str, args) -> RunResult:
        argv = [command, *args]
        self.compile_calls.append(argv)
        if len(self._compile_results) > 1:
            return self._compile_results.pop(0)
        return self._compile_results[0]

    def stream(self, command: str, args) -> RunResult:
        argv = [command, *args]
        self.stream_calls.append(argv)
        if not self._install_results:
            return RunResult.from_returncode(argv, 0)
        if len(self._install_results) > 1:
            return self._install_results.pop(0)
        return self._install_results[0]

    @staticmethod
    def ok() -> RunResult:
        return RunResult.from_returncode(["latexmk"], 0, output="Output written on main.pdf\n")

    @staticmethod
    def failed(output: str, code: int = 1) -> RunResult:
        return RunResult.from_returncode(["latexmk"], code, output=output)


@pytest.fixture
def scripted_runner():
    """Factory for ScriptedRunner instances."""
    return ScriptedRunner


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    """Keep a developer's TEXHEAL_* environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("TEXHEAL_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def stub_bin(tmp_path: Path, monkeypatch) -> Path:
    """A directory of stub executables that is the whole PATH.

    Use ``write_stub(stub_bin, name, body)`` to add programs.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


def write_stub(bin_dir: Path, name: str, body: str) -> Path:
    """Write an executable /bin/sh script called ``name``."""
    path = bin_dir / name
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body))
    path.chmod(0o755)
    return path


@pytest.fixture
def stub_writer():
    return write_stub
