#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Sequence
from typing import IO

from ..lib.core.program import Program
from .commands import echo, info

PROGRAM_NAME = "subcmd"

GLOBAL_USAGE = (
    "Usage: %s <command> [arguments]\n"
    "\n"
    "Demo program for the subcmd library.\n"
    "\n"
    "The following commands are available:\n"
    "%s\n"
    "Run 'subcmd help <command>' for details on a command.\n"
)

_COMMAND_MODULES = (echo, info)


def build_program(
    args: Sequence[str] | None = None,
    *,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> Program:
    """Create the demo program with every command module registered."""
    program = Program(PROGRAM_NAME, args, stdin=stdin, stdout=stdout, stderr=stderr)
    program.usage(GLOBAL_USAGE)
    for module in _COMMAND_MODULES:
        module.register(program)
    return program


def main(argv: Sequence[str] | None = None) -> None:
    build_program(argv).main()


if __name__ == "__main__":
    main()
