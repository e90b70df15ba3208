"""
tlmgr backend — TeX Live's own package manager.

tlmgr names packages after the file's stem: ``tikz.sty`` lives in
``tikz``, ``ngerman.ldf`` in ``ngerman``.
"""

from __future__ import annotations

import os

from texheal.adapters.base import InstallerBackend
from texheal.core.models.resource import MissingResource


class TlmgrInstaller(InstallerBackend):
    """Install through ``tlmgr install <resource-without-extension>``."""

    @property
    def name(self) -> str:
        return "tlmgr"

    def package_name(self, resource: MissingResource) -> str:
        stem, _ext = os.path.splitext(resource.name)
        return stem or resource.name

    def command(self, resource: MissingResource) -> list[str]:
        return ["tlmgr", "install", self.package_name(resource)]
