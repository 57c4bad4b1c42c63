# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""The ``echo`` demo command."""

from __future__ import annotations

from ...lib.core.definition import Def
from ...lib.core.flags import FlagSet
from ...lib.core.program import Options, Program


class EchoCommand:
    no_newline: bool

    def set_flags(self, flags: FlagSet) -> None:
        flags.bind_bool(self, "no_newline", "n", False, "Suppress trailing newline.")

    def run(self, opt: Options) -> None:
        opt.parse_flags()
        out = opt.stdout
        if out is None:
            return
        out.write(" ".join(opt.args()))
        if not self.no_newline:
            out.write("\n")


def register(program: Program) -> None:
    """Register the echo subcommand."""
    program.register(
        Def(
            name="echo",
            summary="Display text.",
            arguments="[-n] [TEXT...]",
            description="Write the given arguments to standard output, separated by spaces.",
            new=EchoCommand,
        )
    )
