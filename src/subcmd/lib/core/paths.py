# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Platform-aware path resolution for the state directory."""

import os
from pathlib import Path

from platformdirs import user_data_dir

from .config import STATE_DIR_ENV

APP_NAME = "subcmd"
LOG_FILE_NAME = "subcmd.log"


def state_root() -> Path:
    """
    Writable state (currently only the debug log).

    Priority:
      1. SUBCMD_STATE_DIR
      2. platformdirs user data dir (~/.local/share/subcmd on Linux)
    """
    env = os.getenv(STATE_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return Path(user_data_dir(APP_NAME))


def log_path() -> Path:
    """Location of the debug log file."""
    return state_root() / LOG_FILE_NAME
