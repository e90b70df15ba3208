"""
texheal — CLI entrypoint.

Usage:
    texheal                       # builds main.tex
    texheal thesis.tex
    texheal -shell-escape thesis.tex

Every argument is forwarded to the TeX compiler; the last one names the
source file.  texheal interprets no flags of its own.  Logging is
controlled through TEXHEAL_LOG_LEVEL, TEXHEAL_LOG_FILE and
TEXHEAL_LOG_FILE_LEVEL; settings live in an optional texheal.yml.
"""

from __future__ import annotations

import logging
import sys

import click

from texheal.core.observability.logging_config import setup_logging_from_env

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(args: tuple[str, ...]) -> None:
    """Build a TeX document, installing missing packages along the way."""
    setup_logging_from_env()

    from texheal.adapters.registry import InstallerRegistry
    from texheal.core.config.loader import ConfigError, load_settings
    from texheal.core.services.compiler import toolchain_report
    from texheal.core.use_cases.build import INTERRUPTED, UNRECOVERABLE, compile_and_install

    try:
        settings = load_settings()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(EXIT_CONFIG)

    report = toolchain_report(settings.compilers)
    for name, present in report["compilers"].items():
        logger.info("%s command exists: %s", name, present)
    logger.info("Operating system: %s", report["os"])
    registry = InstallerRegistry.from_names(settings.installers)
    for name, status in registry.backend_status().items():
        logger.info("%s installer available: %s", name, status["available"])

    result = compile_and_install(list(args), settings=settings, registry=registry)
    logger.debug("Build result: %s", result.to_dict())

    if result.ok:
        installed = f" (installed: {', '.join(result.installed)})" if result.installed else ""
        click.secho(f"Document built successfully!{installed}", fg="green")
        return

    if result.outcome == UNRECOVERABLE:
        click.echo(result.output, nl=False)
        click.echo("Another build error occurred!")

    click.secho(f"❌ {result.error}", fg="red", err=True)
    if result.hint:
        click.echo(f"   {result.hint}", err=True)

    sys.exit(EXIT_INTERRUPTED if result.outcome == INTERRUPTED else EXIT_FAILED)


if __name__ == "__main__":
    cli()
