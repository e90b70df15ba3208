"""
Build use case — compile, diagnose, install, retry.

This is the recovery supervisor.  One loop iteration is an attempt:

    Attempt     run the compiler (first of the preference list on PATH)
    Diagnose    on failure, look for a missing resource in the output
    Recover     check for root, then install the resource
    Invalidate  delete the stale .aux file so the next run starts clean

The loop ends on a clean build or on the first fatal condition.  The
supervisor owns every fatal transition: it reports them in the
BuildResult and leaves process exit to the CLI.

The loop is bounded twice over: at most ``max_attempts`` compiles, and
a resource that is still missing right after it was installed stops
the build instead of being installed again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import click

from texheal.adapters.registry import InstallerRegistry
from texheal.adapters.shell.process import ProcessRunner
from texheal.core.models.invocation import CompilerInvocation
from texheal.core.models.resource import MissingResource
from texheal.core.models.settings import Settings
from texheal.core.services.compiler import select_compiler
from texheal.core.services.diagnostics import parse_missing_resource
from texheal.core.services.privilege import PrivilegeProbeError, is_elevated

logger = logging.getLogger(__name__)

# Outcomes
DONE = "done"
NO_COMPILER = "no_compiler"
LAUNCH_FAILED = "launch_failed"
UNRECOVERABLE = "unrecoverable"
PRIVILEGE_PROBE_FAILED = "privilege_probe_failed"
NOT_ROOT = "not_root"
NO_INSTALLER = "no_installer"
INSTALL_FAILED = "install_failed"
LOOP_BOUND = "loop_bound"
INTERRUPTED = "interrupted"


@dataclass
class BuildResult:
    """Result of a compile-and-install run."""

    ok: bool = False
    outcome: str = ""
    error: str | None = None
    hint: str | None = None
    attempts: int = 0
    compiler: str | None = None
    installed: list[str] = field(default_factory=list)
    output: str = ""   # captured output of the last failed compile

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "outcome": self.outcome,
            "attempts": self.attempts,
            "compiler": self.compiler,
            "installed": list(self.installed),
        }
        if self.error:
            result["error"] = self.error
        if self.hint:
            result["hint"] = self.hint
        return result

    def fatal(self, outcome: str, error: str, hint: str | None = None) -> BuildResult:
        self.ok = False
        self.outcome = outcome
        self.error = error
        self.hint = hint
        logger.debug("Fatal transition: %s (%s)", outcome, error)
        return self


def invalidate_aux(path: Path) -> bool:
    """Remove the compiler's auxiliary file.  Returns whether one existed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.info("Removed %s to force a full rebuild", path)
    return True


def compile_and_install(
    cli_args: Sequence[str] = (),
    settings: Settings | None = None,
    runner: ProcessRunner | None = None,
    registry: InstallerRegistry | None = None,
    elevated: Callable[[], bool] = is_elevated,
    cwd: Path | None = None,
) -> BuildResult:
    """Compile a TeX document, installing missing resources as needed.

    Args:
        cli_args: Positional arguments from the command line.  The last
            one is the source file (default ``main.tex``); the rest are
            passed to the compiler ahead of the fixed flags.
        settings: Configuration (defaults if None).
        runner: Process runner (built from settings if None).
        registry: Installer registry (built from settings if None).
        elevated: Privilege probe; may raise ``PrivilegeProbeError``.
        cwd: Directory holding the auxiliary file (default: cwd).

    Returns:
        BuildResult describing the terminal state.
    """
    settings = settings or Settings()
    if runner is None:
        runner = ProcessRunner(
            heartbeat_every=settings.heartbeat.every,
            heartbeat_wrap=settings.heartbeat.wrap,
        )
    if registry is None:
        registry = InstallerRegistry.from_names(settings.installers)

    result = BuildResult()
    try:
        return _recovery_loop(cli_args, settings, runner, registry, elevated, cwd, result)
    except KeyboardInterrupt:
        logger.info("Interrupted after %d attempt(s)", result.attempts)
        return result.fatal(INTERRUPTED, "Interrupted", hint="Nothing further was attempted.")


def _recovery_loop(
    cli_args: Sequence[str],
    settings: Settings,
    runner: ProcessRunner,
    registry: InstallerRegistry,
    elevated: Callable[[], bool],
    cwd: Path | None,
    result: BuildResult,
) -> BuildResult:
    just_installed: MissingResource | None = None

    while True:
        # ── Attempt ──────────────────────────────────────────────
        compiler = select_compiler(settings.compilers)
        if compiler is None:
            return result.fatal(
                NO_COMPILER,
                "None of the following LaTeX compilers is available: "
                f"[{', '.join(settings.compilers)}]",
                hint=f"Install one of: {', '.join(settings.compilers)}.",
            )

        invocation = CompilerInvocation.from_cli_args(compiler, cli_args)
        result.compiler = compiler
        result.attempts += 1

        click.echo("Building:")
        logger.info("Attempt %d: %s", result.attempts, " ".join(invocation.argv))
        run = runner.run(invocation.compiler, invocation.arguments)

        if run.ok:
            result.ok = True
            result.outcome = DONE
            result.output = ""
            return result

        click.echo("An error occurred while compiling the document!")
        result.output = run.output

        if not run.launched:
            return result.fatal(
                LAUNCH_FAILED,
                f"Could not start {compiler}: {run.launch_error}",
                hint=f"Check that {compiler} is executable.",
            )

        # ── Diagnose ─────────────────────────────────────────────
        resource = parse_missing_resource(run.output)
        if resource is None:
            return result.fatal(
                UNRECOVERABLE,
                f"Unrecoverable build error ({compiler} {run.describe()})",
                hint="Fix the error shown above in your document.",
            )

        if resource == just_installed:
            return result.fatal(
                LOOP_BOUND,
                f"Loop bound exceeded: {resource.name} is still missing after it was installed",
                hint="The installed package did not provide it; install it manually.",
            )

        # No install unless a compile can follow it.
        if result.attempts >= settings.max_attempts:
            return result.fatal(
                LOOP_BOUND,
                f"Loop bound exceeded: gave up after {result.attempts} compile attempts",
                hint="Raise max_attempts in texheal.yml or install the missing packages manually.",
            )

        # ── Recover ──────────────────────────────────────────────
        click.echo(f"We need to download: {resource.name}")
        try:
            root = elevated()
        except PrivilegeProbeError as e:
            return result.fatal(
                PRIVILEGE_PROBE_FAILED,
                f"Cannot determine user privileges: {e}",
                hint="Automatic installs need a Unix host with `id` on PATH.",
            )
        if not root:
            return result.fatal(
                NOT_ROOT,
                f"This program must be run as root to install {resource.name}",
                hint="Re-run with sudo.",
            )
        logger.info("Running with root permissions")

        receipt = registry.install(resource, runner)
        if receipt.failed:
            if not receipt.backend:
                return result.fatal(
                    NO_INSTALLER,
                    receipt.error or "No TeX package manager found",
                    hint=f"Install one of: {', '.join(registry.list_backends())}.",
                )
            return result.fatal(
                INSTALL_FAILED,
                f"Installing {receipt.package} with {receipt.backend} failed: {receipt.error}",
                hint=f"Try installing {receipt.package} manually.",
            )
        result.installed.append(receipt.package)

        # ── Invalidate ───────────────────────────────────────────
        aux = Path(settings.aux_file) if settings.aux_file else invocation.aux_path(cwd)
        if cwd is not None and not aux.is_absolute():
            aux = cwd / aux
        invalidate_aux(aux)
        just_installed = resource
