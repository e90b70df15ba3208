"""
Mock installer — test double for package-manager backends.

Records every resource it is asked to install and answers with a
configurable outcome, without touching the system.
"""

from __future__ import annotations

from texheal.adapters.base import InstallerBackend
from texheal.adapters.shell.process import ProcessRunner
from texheal.core.models.receipt import InstallReceipt
from texheal.core.models.resource import MissingResource


class MockInstaller(InstallerBackend):
    """Installer that succeeds (or fails) on demand.

    By default every install succeeds. ``set_failure`` makes a given
    resource name fail.
    """

    def __init__(self, backend_name: str = "mock", available: bool = True, succeed: bool = True):
        self._name = backend_name
        self._available = available
        self._succeed = succeed
        self._failures: dict[str, str] = {}
        self._call_log: list[MissingResource] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[MissingResource]:
        """All resources this mock has been asked to install."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, resource_name: str, error: str = "Mock failure") -> None:
        """Configure installs of ``resource_name`` to fail."""
        self._failures[resource_name] = error

    def package_name(self, resource: MissingResource) -> str:
        return resource.name

    def command(self, resource: MissingResource) -> list[str]:
        return [self._name, "install", self.package_name(resource)]

    def install(self, resource: MissingResource, runner: ProcessRunner) -> InstallReceipt:
        self._call_log.append(resource)
        argv = self.command(resource)

        if resource.name in self._failures or not self._succeed:
            return InstallReceipt.failure(
                backend=self._name,
                resource=resource.name,
                package=self.package_name(resource),
                error=self._failures.get(resource.name, "Mock failure"),
                argv=argv,
            )

        return InstallReceipt.success(
            backend=self._name,
            resource=resource.name,
            package=self.package_name(resource),
            argv=argv,
            output="[mock] installed",
        )

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
