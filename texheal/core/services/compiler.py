"""
Compiler selection — which TeX front end to run for an attempt.
"""

from __future__ import annotations

import logging
import platform
import shutil
from collections.abc import Sequence

logger = logging.getLogger(__name__)


def select_compiler(preferences: Sequence[str]) -> str | None:
    """First program in ``preferences`` found on PATH, or None."""
    for name in preferences:
        if shutil.which(name) is not None:
            return name
    return None


def toolchain_report(preferences: Sequence[str]) -> dict:
    """What the host offers, for the startup log line.

    Returns::

        {
            "compilers": {"latexmk": True, "pdflatex": True},
            "os": "linux/x86_64",
        }
    """
    return {
        "compilers": {name: shutil.which(name) is not None for name in preferences},
        "os": f"{platform.system().lower()}/{platform.machine().lower()}",
    }
