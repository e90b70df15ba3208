"""Domain models — pure data, no I/O.

Public re-exports for convenient access.
"""

from texheal.core.models.invocation import FIXED_COMPILER_ARGS, CompilerInvocation
from texheal.core.models.process import RunResult
from texheal.core.models.receipt import InstallReceipt
from texheal.core.models.resource import MissingResource
from texheal.core.models.settings import HeartbeatSettings, Settings

__all__ = [
    "FIXED_COMPILER_ARGS",
    "CompilerInvocation",
    "HeartbeatSettings",
    "InstallReceipt",
    "MissingResource",
    "RunResult",
    "Settings",
]
