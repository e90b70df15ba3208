"""
Privilege probe — are we running as the superuser?

Asks the operating system through ``id -u`` rather than
``os.geteuid()`` so the answer matches what the package manager
will see.  Unix only: a host without ``id`` cannot be probed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)

ID_COMMAND = ["id", "-u"]


class PrivilegeProbeError(Exception):
    """Raised when the effective user id cannot be determined."""


def current_uid() -> int:
    """Numeric user id reported by ``id -u``.

    Raises:
        PrivilegeProbeError: ``id`` is missing, fails, or prints
            something that is not an integer.
    """
    if shutil.which(ID_COMMAND[0]) is None:
        raise PrivilegeProbeError("`id` is not available on PATH; cannot check for root")

    try:
        r = subprocess.run(ID_COMMAND, capture_output=True, text=True, timeout=10)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise PrivilegeProbeError(f"`id -u` could not be run: {e}") from e

    if r.returncode != 0:
        raise PrivilegeProbeError(
            f"`id -u` failed (exit {r.returncode}): {r.stderr.strip()}"
        )

    raw = r.stdout.rstrip("\n")
    try:
        uid = int(raw)
    except ValueError as e:
        raise PrivilegeProbeError(f"`id -u` printed {raw!r}, not a user id") from e

    logger.debug("id -u → %d", uid)
    return uid


def is_elevated() -> bool:
    """True iff the process runs as root (uid 0)."""
    return current_uid() == 0
