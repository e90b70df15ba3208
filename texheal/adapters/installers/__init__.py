"""Package-manager backends, keyed by name."""

from texheal.adapters.installers.dnf import DnfInstaller
from texheal.adapters.installers.tlmgr import TlmgrInstaller

BACKENDS = {
    "dnf": DnfInstaller,
    "tlmgr": TlmgrInstaller,
}

__all__ = [
    "BACKENDS",
    "DnfInstaller",
    "TlmgrInstaller",
]
