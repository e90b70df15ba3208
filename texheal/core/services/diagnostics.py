"""
Diagnostics — find the missing resource behind a failed compile (pure).

Scans captured compiler output for the three failure shapes a package
manager can repair and returns the first match as a ``MissingResource``.
No I/O, no subprocess.

Pattern families, in priority order:

    1. missing file   ``! LaTeX Error: File `NAME' not found``
                      ``! I can't find file `NAME'.``
    2. font           ``! Font \\CS=TOKEN <whitespace>``
    3. babel option   ``Unknown option `NAME'. Either you misspelled``

The first family that matches anywhere in the buffer wins; later
families are not consulted.  Everything else (syntax errors, undefined
control sequences, runaway arguments) is unrecoverable and yields None.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from texheal.core.models.resource import MissingResource

logger = logging.getLogger(__name__)

# Names never span lines, never contain whitespace, and stop at the
# closing quote (TeX quotes as `name').
_NAME = r"[^`'\s]+"

_MISSING_FILE = re.compile(
    rf"! LaTeX Error: File `(?P<latex>{_NAME})' not found"
    rf"|! I can't find file `(?P<tex>{_NAME})'\."
)

# Best effort: the font name is whatever follows the first '=' up to
# the next whitespace, e.g. ``! Font \T1/cmr/m/n/10=ecrm1000 at 10.0pt``.
_FONT = re.compile(r"! Font \\[^=\n]*=(?P<font>\S+)\s")

_BABEL = re.compile(rf"Unknown option `(?P<language>{_NAME})'\. Either you misspelled")


def _match_missing_file(output: str) -> MissingResource | None:
    m = _MISSING_FILE.search(output)
    if m is None:
        return None
    return MissingResource.file(m.group("latex") or m.group("tex"))


def _match_font(output: str) -> MissingResource | None:
    m = _FONT.search(output)
    if m is None:
        return None
    return MissingResource.font(m.group("font"))


def _match_babel(output: str) -> MissingResource | None:
    m = _BABEL.search(output)
    if m is None:
        return None
    return MissingResource.babel_language(m.group("language"))


_MATCHERS: tuple[Callable[[str], MissingResource | None], ...] = (
    _match_missing_file,
    _match_font,
    _match_babel,
)


def parse_missing_resource(output: str) -> MissingResource | None:
    """Return the resource a failed compile needs, or None if unrecoverable.

    Args:
        output: Combined stdout+stderr captured from the compiler.

    Returns:
        The first ``MissingResource`` found by priority, or None.
    """
    if not output:
        return None

    for matcher in _MATCHERS:
        resource = matcher(output)
        if resource is not None:
            logger.debug("Diagnosed missing %s: %s", resource.kind, resource.name)
            return resource

    return None
