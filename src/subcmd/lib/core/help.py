# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""The built-in ``help`` subcommand."""

from __future__ import annotations

from .definition import Def
from .program import Options, UnknownCommand


class HelpCommand:
    """Writes general help, or the usage of one subcommand."""

    def run(self, opt: Options) -> None:
        opt.parse_flags()
        name = opt.arg(0)
        if not name:
            opt.write_global_usage(opt.stderr)
            return
        definition = opt.get(name)
        if definition is not None:
            opt.write_usage_of(opt.stderr, definition)
            return
        if opt.stderr is None:
            return
        print(UnknownCommand(name), file=opt.stderr)
        print("The following commands are available:", file=opt.stderr)
        opt.write_summary(opt.stderr)


help_def = Def(
    name="help",
    summary="Display help.",
    arguments="[command]",
    description="Displays help for a command, or general help if no command is given.",
    new=HelpCommand,
)
