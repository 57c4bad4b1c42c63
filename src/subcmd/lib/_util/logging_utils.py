# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Utility functions for logging."""


def _log_debug(message: str) -> None:
    """Append a simple debug line to the subcmd library log.

    Does nothing unless ``SUBCMD_DEBUG`` is set, so programs built on subcmd
    never touch the disk by default. When enabled, writes timestamped lines
    to ``state_root()/subcmd.log``.

    Fully exception-safe: any IO error is silently ignored so this function
    never raises or affects callers.
    """
    try:
        import time

        from ..core.config import debug_enabled
        from ..core.paths import log_path

        if not debug_enabled():
            return
        path = log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
    except Exception:
        pass
