# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Pure ANSI color utilities for help output.

Usage writers receive arbitrary text streams (files, pipes, ``io.StringIO``
in tests), so color support is decided per stream rather than by looking at
``sys.stdout``.
"""

import os
from typing import IO


def supports_color(stream: IO[str] | None) -> bool:
    """Check if *stream* supports color output.

    Follows the NO_COLOR (https://no-color.org/) and FORCE_COLOR conventions.
    NO_COLOR always wins. FORCE_COLOR (when set and not ``"0"``) forces color
    on even when the stream is not a TTY. Otherwise falls back to
    ``stream.isatty()``; streams without ``isatty`` never get color.
    """
    if stream is None:
        return False
    if "NO_COLOR" in os.environ:
        return False
    force = os.environ.get("FORCE_COLOR")
    if force is not None and force != "0":
        return True
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        # closed or detached stream
        return False


def color(text: str, code: str, enabled: bool) -> str:
    """Wrap *text* in ANSI escape codes when *enabled* is True.

    Args:
        text: The string to colorize.
        code: ANSI SGR parameter (e.g. ``"31"`` for red).
        enabled: When False the original *text* is returned unchanged.
    """
    if not enabled:
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


def bold(text: str, enabled: bool) -> str:
    """Return *text* in bold (ANSI 1) when *enabled*."""
    return color(text, "1", enabled)


def gray(text: str, enabled: bool) -> str:
    """Return *text* in gray (ANSI 90) when *enabled*."""
    return color(text, "90", enabled)
