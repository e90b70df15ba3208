"""
Installer base — the contract between the supervisor and package managers.

The supervisor only talks to package managers through this protocol,
never directly to ``dnf`` or ``tlmgr``.  Supporting another package
manager means one new subclass plus one registry entry; the build
loop does not change.
"""

from __future__ import annotations

import logging
import shutil
import time
from abc import ABC, abstractmethod

import click

from texheal.adapters.shell.process import ProcessRunner
from texheal.core.models.receipt import InstallReceipt
from texheal.core.models.resource import MissingResource

logger = logging.getLogger(__name__)


class InstallerBackend(ABC):
    """Abstract base class for package-manager backends.

    Backends perform the install and return receipts.
    They NEVER raise — failures are captured in the InstallReceipt.

    To add a backend:
        1. Subclass InstallerBackend
        2. Implement name, package_name, command
        3. Add it to ``texheal.adapters.installers.BACKENDS``
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier, also its executable (e.g. 'dnf')."""

    @abstractmethod
    def package_name(self, resource: MissingResource) -> str:
        """What this package manager calls the package providing ``resource``."""

    @abstractmethod
    def command(self, resource: MissingResource) -> list[str]:
        """Full argv that installs ``resource`` non-interactively."""

    def is_available(self) -> bool:
        """Whether the backend's executable is on PATH.  Never raises."""
        return shutil.which(self.name) is not None

    def install(self, resource: MissingResource, runner: ProcessRunner) -> InstallReceipt:
        """Install ``resource``, showing the package manager's output live.

        Succeeds iff the package manager exits with status zero.
        """
        package = self.package_name(resource)
        argv = self.command(resource)

        click.echo(" ".join(argv))
        click.echo(f"running {self.name} install now!")
        logger.info("Installing %s via %s (package %s)", resource.name, self.name, package)

        start = time.monotonic()
        result = runner.stream(argv[0], argv[1:])
        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.ok:
            return InstallReceipt.success(
                backend=self.name,
                resource=resource.name,
                package=package,
                argv=argv,
                output=result.output,
                duration_ms=elapsed_ms,
            )

        logger.warning("%s install of %s failed: %s", self.name, package, result.describe())
        return InstallReceipt.failure(
            backend=self.name,
            resource=resource.name,
            package=package,
            error=f"{self.name} {result.describe()}",
            argv=argv,
            output=result.output,
            duration_ms=elapsed_ms,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
