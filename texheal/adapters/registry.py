"""
Installer registry — ordered dispatch to the first available backend.

Backends are probed in registration order; the first whose executable
is on PATH handles the install.  The supervisor never talks to a
backend directly — always through the registry.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import click

from texheal.adapters.base import InstallerBackend
from texheal.adapters.shell.process import ProcessRunner
from texheal.core.models.receipt import InstallReceipt
from texheal.core.models.resource import MissingResource

logger = logging.getLogger(__name__)


class InstallerRegistry:
    """Ordered collection of package-manager backends."""

    def __init__(self, backends: Sequence[InstallerBackend] = ()):
        self._backends: dict[str, InstallerBackend] = {}
        for backend in backends:
            self.register(backend)

    @classmethod
    def from_names(cls, names: Sequence[str]) -> InstallerRegistry:
        """Build a registry from backend names, keeping their order.

        Raises:
            KeyError: If a name is not a known backend.
        """
        from texheal.adapters.installers import BACKENDS

        return cls([BACKENDS[name]() for name in names])

    def register(self, backend: InstallerBackend) -> None:
        """Append a backend to the probe order."""
        name = backend.name
        if name in self._backends:
            logger.warning("Overwriting existing installer: %s", name)
        self._backends[name] = backend
        logger.debug("Registered installer: %s", name)

    def list_backends(self) -> list[str]:
        """Backend names in probe order."""
        return list(self._backends.keys())

    def backend_status(self) -> dict[str, dict[str, Any]]:
        """Availability of every registered backend."""
        return {
            name: {
                "name": name,
                "available": backend.is_available(),
                "type": backend.__class__.__name__,
            }
            for name, backend in self._backends.items()
        }

    def select(self) -> InstallerBackend | None:
        """The first available backend, or None."""
        for backend in self._backends.values():
            if backend.is_available():
                return backend
        return None

    def install(self, resource: MissingResource, runner: ProcessRunner) -> InstallReceipt:
        """Install ``resource`` with the first available backend.

        Returns a failed receipt with an empty ``backend`` when no
        package manager is present.  Never raises.
        """
        backend = self.select()
        if backend is None:
            tried = ", ".join(self.list_backends()) or "none configured"
            logger.warning("No installer available (tried: %s)", tried)
            return InstallReceipt.failure(
                backend="",
                resource=resource.name,
                error=f"No TeX package manager found (tried: {tried})",
            )

        names = self.list_backends()
        skipped = names[: names.index(backend.name)]
        if skipped:
            click.echo(f"{', '.join(skipped)} not available -> trying to install with {backend.name}")
        logger.debug("Selected installer %s for %s", backend.name, resource.name)
        return backend.install(resource, runner)
