"""
Tests for the CLI — argument forwarding, output, exit codes.

The use case is patched; scenario coverage lives in test_build.py and
test_e2e.py.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from texheal.core.use_cases.build import (
    INTERRUPTED,
    NOT_ROOT,
    UNRECOVERABLE,
    BuildResult,
)
from texheal.main import cli

_BUILD = "texheal.core.use_cases.build.compile_and_install"


class TestArguments:
    def test_no_arguments(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch(_BUILD, return_value=BuildResult(ok=True, outcome="done")) as build:
            result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert build.call_args.args[0] == []

    def test_compiler_flags_are_forwarded(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch(_BUILD, return_value=BuildResult(ok=True, outcome="done")) as build:
            result = CliRunner().invoke(cli, ["-shell-escape", "--jobname=x", "thesis.tex"])
        assert result.exit_code == 0
        assert build.call_args.args[0] == ["-shell-escape", "--jobname=x", "thesis.tex"]

    def test_help_is_not_interpreted(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch(_BUILD, return_value=BuildResult(ok=True, outcome="done")) as build:
            CliRunner().invoke(cli, ["--help"])
        assert build.call_args.args[0] == ["--help"]


class TestOutput:
    def test_success(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        ok = BuildResult(ok=True, outcome="done", installed=["tex(tikz.sty)"])
        with patch(_BUILD, return_value=ok):
            result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0
        assert "Document built successfully!" in result.output
        assert "tex(tikz.sty)" in result.output

    def test_unrecoverable_prints_captured_output(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        failed = BuildResult(
            outcome=UNRECOVERABLE,
            error="Unrecoverable build error (latexmk exit code 1)",
            output="! Undefined control sequence.\nl.12 \\foo\n",
        )
        with patch(_BUILD, return_value=failed):
            result = CliRunner().invoke(cli, [])
        assert result.exit_code == 1
        assert "! Undefined control sequence.\nl.12 \\foo\n" in result.output
        assert "Unrecoverable build error" in result.output

    def test_fatal_with_hint(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        failed = BuildResult(
            outcome=NOT_ROOT,
            error="This program must be run as root to install foo.cls",
            hint="Re-run with sudo.",
            output="! I can't find file `foo.cls'.\n",
        )
        with patch(_BUILD, return_value=failed):
            result = CliRunner().invoke(cli, [])
        assert result.exit_code == 1
        assert "must be run as root" in result.output
        assert "Re-run with sudo." in result.output
        # captured output is only shown for unrecoverable errors
        assert "I can't find file" not in result.output

    def test_interrupted_exit_code(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch(_BUILD, return_value=BuildResult(outcome=INTERRUPTED, error="Interrupted")):
            result = CliRunner().invoke(cli, [])
        assert result.exit_code == 130


class TestConfiguration:
    def test_invalid_config_exit_code(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "texheal.yml").write_text("max_attempts: -1\n")
        with patch(_BUILD) as build:
            result = CliRunner().invoke(cli, [])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output
        build.assert_not_called()

    def test_settings_passed_to_build(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "texheal.yml").write_text("max_attempts: 4\n")
        with patch(_BUILD, return_value=BuildResult(ok=True, outcome="done")) as build:
            CliRunner().invoke(cli, [])
        assert build.call_args.kwargs["settings"].max_attempts == 4


class TestStartupLogging:
    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_reports_installer_availability(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TEXHEAL_LOG_LEVEL", "INFO")
        def which(name):
            return "/usr/bin/tlmgr" if name == "tlmgr" else None

        with patch("texheal.adapters.base.shutil.which", which), \
                patch(_BUILD, return_value=BuildResult(ok=True, outcome="done")) as build:
            result = CliRunner().invoke(cli, [])
        assert "dnf installer available: False" in result.output
        assert "tlmgr installer available: True" in result.output
        assert build.call_args.kwargs["registry"].list_backends() == ["dnf", "tlmgr"]

    def test_debug_logs_build_result(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TEXHEAL_LOG_LEVEL", "DEBUG")
        failed = BuildResult(outcome=NOT_ROOT, attempts=1, error="must be run as root")
        with patch(_BUILD, return_value=failed):
            result = CliRunner().invoke(cli, [])
        assert "Build result: {'ok': False, 'outcome': 'not_root', 'attempts': 1" in result.output

    def test_quiet_by_default(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch(_BUILD, return_value=BuildResult(ok=True, outcome="done")):
            result = CliRunner().invoke(cli, [])
        assert "installer available" not in result.output
