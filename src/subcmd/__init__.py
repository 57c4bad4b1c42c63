# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""subcmd package: lightweight subcommands for command-line programs.

Modules:
- subcmd.lib.core: Program, registry, definitions, flags, built-in help
- subcmd.lib._util: Internal helpers (ANSI colors, debug logging)
- subcmd.cli: Demo program entry point (subcmd)
"""

from subcmd.lib.core.definition import Command, Def, FlagSetter
from subcmd.lib.core.flags import (
    Flag,
    FlagError,
    FlagSet,
    HelpRequested,
    Value,
    format_duration,
    parse_duration,
)
from subcmd.lib.core.program import Input, Options, Program, UnknownCommand
from subcmd.lib.core.registry import RegistrationError, Registry

__all__ = [
    "Command",
    "Def",
    "Flag",
    "FlagError",
    "FlagSet",
    "FlagSetter",
    "HelpRequested",
    "Input",
    "Options",
    "Program",
    "RegistrationError",
    "Registry",
    "UnknownCommand",
    "Value",
    "format_duration",
    "parse_duration",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("subcmd")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
