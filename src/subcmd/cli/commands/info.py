# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Informational commands: version and paths."""

from __future__ import annotations

from typing import IO

from ...lib._util.ansi import gray, supports_color
from ...lib.core.config import debug_enabled, env_overrides
from ...lib.core.paths import log_path, state_root
from ...lib.core.program import Options, Program


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


class VersionCommand:
    def run(self, opt: Options) -> None:
        from ... import __version__

        opt.parse_flags()
        if opt.stdout is not None:
            print(f"{opt.program} {__version__}", file=opt.stdout)


class PathsCommand:
    """Show where subcmd keeps its state and which overrides are active."""

    def run(self, opt: Options) -> None:
        opt.parse_flags()
        if opt.stdout is not None:
            _print_paths(opt.stdout)


def _print_paths(out: IO[str]) -> None:
    color_enabled = supports_color(out)
    sroot = state_root()
    print(
        f"- State root: {gray(str(sroot), color_enabled)} (exists: {_yes_no(sroot.is_dir())})",
        file=out,
    )
    print(f"- Debug log: {gray(str(log_path()), color_enabled)}", file=out)
    print(f"- Debug logging enabled: {_yes_no(debug_enabled())}", file=out)

    overrides = env_overrides()
    print("Environment overrides (if set):", file=out)
    for var, val in overrides.items():
        print(f"- {var}={gray(val, color_enabled)}", file=out)


def register(program: Program) -> None:
    """Register informational subcommands (version, paths)."""
    program.command(
        "version",
        summary="Show the subcmd version.",
        description="Write the program name and the installed subcmd version to standard output.",
    )(VersionCommand)
    program.command("paths", summary="Show state and log locations.")(PathsCommand)
