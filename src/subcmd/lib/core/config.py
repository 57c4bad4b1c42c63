# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Environment-driven settings.

subcmd is a library embedded in other programs, so it reads no config files
of its own. Every knob is an environment variable, resolved on each call so
tests can patch ``os.environ``.
"""

import os

DEBUG_ENV = "SUBCMD_DEBUG"
STATE_DIR_ENV = "SUBCMD_STATE_DIR"

# Reported by the demo ``paths`` command when set.
OVERRIDE_ENV_VARS = (
    DEBUG_ENV,
    STATE_DIR_ENV,
    "NO_COLOR",
    "FORCE_COLOR",
    "XDG_DATA_HOME",
)


def debug_enabled() -> bool:
    """Return True when ``SUBCMD_DEBUG`` asks for the debug log."""
    value = os.environ.get(DEBUG_ENV, "").strip().lower()
    return value not in ("", "0", "false", "no", "off")


def env_overrides() -> dict[str, str]:
    """Return the subset of :data:`OVERRIDE_ENV_VARS` that is currently set."""
    return {var: os.environ[var] for var in OVERRIDE_ENV_VARS if var in os.environ}
