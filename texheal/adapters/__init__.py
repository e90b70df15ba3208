"""Adapters — bindings to external programs.

Public re-exports for convenient access.
"""

from texheal.adapters.base import InstallerBackend
from texheal.adapters.mock import MockInstaller
from texheal.adapters.registry import InstallerRegistry
from texheal.adapters.shell.process import Heartbeat, ProcessRunner

__all__ = [
    "Heartbeat",
    "InstallerBackend",
    "InstallerRegistry",
    "MockInstaller",
    "ProcessRunner",
]
