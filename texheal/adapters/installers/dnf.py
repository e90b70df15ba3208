"""
dnf backend — Fedora/RHEL TeX Live packages.

Fedora's TeX Live packages advertise every file they ship as a
``tex(<file>)`` capability, so the resource name goes in verbatim,
extension included.
"""

from __future__ import annotations

from texheal.adapters.base import InstallerBackend
from texheal.core.models.resource import MissingResource


class DnfInstaller(InstallerBackend):
    """Install through ``dnf -y install "tex(<resource>)"``."""

    @property
    def name(self) -> str:
        return "dnf"

    def package_name(self, resource: MissingResource) -> str:
        return f"tex({resource.name})"

    def command(self, resource: MissingResource) -> list[str]:
        return ["dnf", "-y", "install", self.package_name(resource)]
