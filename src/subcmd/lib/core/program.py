# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Program: owns the registry and routes arguments to subcommands.

Example entry point::

    program = Program()

    @program.command("echo", summary="Display text.", arguments="[-n] [TEXT...]")
    class EchoCommand:
        def set_flags(self, flags):
            flags.bind_bool(self, "no_newline", "n", False, "Suppress trailing newline.")

        def run(self, opt):
            opt.parse_flags()
            opt.stdout.write(" ".join(opt.args()))
            if not self.no_newline:
                opt.stdout.write("\\n")

    if __name__ == "__main__":
        program.main()
"""

from __future__ import annotations

import inspect
import io
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import IO, Any, TypeVar

from .._util.ansi import supports_color
from .._util.logging_utils import _log_debug
from .definition import Command, Def, declares_flags
from .flags import FlagSet, HelpRequested
from .registry import Registry

DEFAULT_GLOBAL_USAGE = "Usage: %s <command>\n\nThe following commands are available:\n%s"

HELP_COMMAND = "help"

_C = TypeVar("_C", bound=type)


class UnknownCommand(Exception):
    """No subcommand is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'unknown command "{name}"')


def format_description(text: str) -> str:
    """Format a command description for display."""
    return text.strip()


@dataclass
class Input:
    """Inputs to a program or subcommand.

    Attributes:
        program: Name of the program (e.g. ``sys.argv[0]``).
        arguments: Arguments passed to the program, or to the subcommand.
        stdin: Stream used as standard input.
        stdout: Stream used as standard output.
        stderr: Stream used as standard error, and for usage messages.
        global_usage: ``%``-format string describing the whole program. The
            first value is the program name, the second the list of
            subcommand summaries. Empty means the default message.
    """

    program: str = ""
    arguments: list[str] = field(default_factory=list)
    stdin: IO[str] | None = None
    stdout: IO[str] | None = None
    stderr: IO[str] | None = None
    global_usage: str = ""

    def shift(self) -> Input:
        """Return a copy without the first argument."""
        return replace(self, arguments=list(self.arguments[1:]))

    def write_usage_of(self, w: IO[str] | None, definition: Def) -> None:
        """Write the usage of *definition* to *w*, or stderr if *w* is None."""
        if w is None:
            if (w := self.stderr) is None:
                return
        if definition.arguments:
            args = format_description(definition.arguments)
            print(f"Usage: {self.program} {definition.name} {args}", file=w)
        else:
            print(f"Usage: {self.program} {definition.name}", file=w)
        if definition.description:
            print(f"\n{format_description(definition.description)}", file=w)
        if definition.new is None:
            return
        command = definition.new()
        if declares_flags(command):
            flags = FlagSet(definition.name)
            command.set_flags(flags)
            if flags.has_flags():
                print("\nFlags:", file=w)
                flags.print_defaults(w)
                print(file=w)


def write_global_usage(w: IO[str] | None, input: Input, registry: Registry) -> None:
    """Write the global usage message to *w*, or stderr if *w* is None."""
    if w is None:
        if (w := input.stderr) is None:
            return
    summaries = io.StringIO()
    registry.write_summary(summaries, color=supports_color(w))
    template = input.global_usage or DEFAULT_GLOBAL_USAGE
    try:
        text = template % (input.program, summaries.getvalue())
    except (TypeError, ValueError):
        # template does not take exactly two %s values
        text = template + summaries.getvalue()
    w.write(text)


class Options:
    """Input and flags passed to a running subcommand.

    ``arguments`` are the unprocessed arguments after the subcommand name;
    ``args()`` are the ones left after :meth:`parse_flags`. The registry the
    command runs in is readable through ``has``, ``get``, ``list`` and
    ``write_summary``.
    """

    def __init__(self, flags: FlagSet, input: Input, definition: Def, registry: Registry) -> None:
        self.flags = flags
        self.input = input
        self.definition = definition
        self._registry = registry

    # Input fields

    @property
    def program(self) -> str:
        return self.input.program

    @property
    def arguments(self) -> list[str]:
        return self.input.arguments

    @property
    def stdin(self) -> IO[str] | None:
        return self.input.stdin

    @property
    def stdout(self) -> IO[str] | None:
        return self.input.stdout

    @property
    def stderr(self) -> IO[str] | None:
        return self.input.stderr

    # Flags

    def parse_flags(self) -> None:
        """Parse the flag set against ``arguments``.

        Raises:
            HelpRequested: A help flag was given.
            FlagError: The arguments do not match the declared flags.
        """
        self.flags.parse(self.input.arguments)

    def args(self) -> list[str]:
        return self.flags.args()

    def arg(self, i: int) -> str:
        return self.flags.arg(i)

    def narg(self) -> int:
        return self.flags.narg()

    # Registry (read-only)

    def has(self, name: str) -> bool:
        return self._registry.has(name)

    def get(self, name: str) -> Def | None:
        return self._registry.get(name)

    def list(self) -> list[Def]:
        return self._registry.list()

    def write_summary(self, w: IO[str] | None) -> None:
        self._registry.write_summary(w, color=supports_color(w))

    # Usage

    def write_usage_of(self, w: IO[str] | None, definition: Def) -> None:
        self.input.write_usage_of(w, definition)

    def write_global_usage(self, w: IO[str] | None = None) -> None:
        """Write the global usage message to *w*, or stderr if *w* is None."""
        write_global_usage(w, self.input, self._registry)


class Program:
    """A command-line program made of subcommands.

    Args:
        name: Program name. If empty, the first raw argument is used.
        args: Raw arguments including argument zero; defaults to ``sys.argv``.
        stdin, stdout, stderr: Streams handed to subcommands; default to the
            ``sys`` streams.

    The program starts with a built-in ``help`` subcommand, which
    :meth:`no_help` removes.
    """

    def __init__(
        self,
        name: str = "",
        args: Sequence[str] | None = None,
        *,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        from .help import help_def

        raw = list(sys.argv if args is None else args)
        self.input = Input(
            program=name,
            stdin=stdin if stdin is not None else sys.stdin,
            stdout=stdout if stdout is not None else sys.stdout,
            stderr=stderr if stderr is not None else sys.stderr,
        )
        if raw:
            if not self.input.program:
                self.input.program = raw[0]
            self.input.arguments = raw[1:]
        self.registry = Registry([help_def])

    # -- configuration ------------------------------------------------------

    def usage(self, template: str) -> Program:
        """Set the global usage template."""
        self.input.global_usage = template
        return self

    def no_help(self) -> Program:
        """Unregister the ``help`` subcommand."""
        self.registry.remove(HELP_COMMAND)
        return self

    def register(self, definition: Def) -> None:
        """Register a subcommand.

        Raises:
            RegistrationError: If the name is empty, ``new`` is missing, or
                the name is already taken.
        """
        self.registry.register(definition)
        _log_debug(f"registered subcommand {definition.name!r} for {self.input.program!r}")

    def command(
        self,
        name: str,
        *,
        summary: str = "",
        arguments: str = "",
        description: str = "",
    ) -> Callable[[_C], _C]:
        """Class decorator registering the decorated class as a subcommand."""

        def decorator(cls: _C) -> _C:
            self.register(
                Def(
                    name=name,
                    summary=summary,
                    arguments=arguments,
                    description=description or inspect.cleandoc(cls.__doc__ or ""),
                    new=cls,
                )
            )
            return cls

        return decorator

    # -- registry -----------------------------------------------------------

    def has(self, name: str) -> bool:
        return self.registry.has(name)

    def get(self, name: str) -> Def | None:
        return self.registry.get(name)

    def list(self) -> list[Def]:
        return self.registry.list()

    def write_summary(self, w: IO[str] | None) -> None:
        self.registry.write_summary(w, color=supports_color(w))

    # -- usage --------------------------------------------------------------

    @property
    def program(self) -> str:
        return self.input.program

    @property
    def arguments(self) -> list[str]:
        return self.input.arguments

    @property
    def stderr(self) -> IO[str] | None:
        return self.input.stderr

    def write_usage(self, w: IO[str] | None = None) -> None:
        """Write the global usage message to *w*, or stderr if *w* is None."""
        write_global_usage(w, self.input, self.registry)

    def write_usage_of(self, w: IO[str] | None, definition: Def) -> None:
        """Write the usage of *definition* to *w*, or stderr if *w* is None."""
        self.input.write_usage_of(w, definition)

    # -- dispatch -----------------------------------------------------------

    def prepare(self) -> tuple[str, Input | None]:
        """Resolve the first argument to a subcommand.

        Returns the subcommand name and the input to run it with. When there
        are no arguments or the name is not registered, returns ``("", None)``.
        """
        if not self.input.arguments:
            return "", None
        name = self.input.arguments[0]
        if not self.has(name):
            return "", None
        return name, self.input.shift()

    def run_with_input(self, name: str, input: Input) -> Any:
        """Run the subcommand registered as *name* with *input*.

        Returns whatever the command's ``run`` returns.

        Raises:
            UnknownCommand: No subcommand is registered as *name*.
        """
        definition = self.registry.get(name)
        if definition is None or definition.new is None:
            raise UnknownCommand(name)
        command: Command = definition.new()
        flags = FlagSet(self.input.program)
        flags.set_output(None)
        if declares_flags(command):
            command.set_flags(flags)
        opt = Options(flags, input, definition, self.registry)
        _log_debug(f"running {name!r} with arguments {input.arguments!r}")
        return command.run(opt)

    def run(self, name: str) -> Any:
        """Like :meth:`run_with_input`, treating the first program argument
        as the subcommand name and passing on the rest."""
        return self.run_with_input(name, self.input.shift())

    def main(self) -> None:
        """Convenient entry point.

        With no arguments, runs ``help`` (or writes the global usage if
        ``help`` was removed). An unknown first argument writes an error and
        the global usage to stderr. Otherwise the named subcommand runs with
        the remaining arguments; its errors are written to stderr, except
        :class:`HelpRequested`, which writes the subcommand's usage.
        """
        if not self.input.arguments:
            if not self.has(HELP_COMMAND):
                self.write_usage(self.stderr)
                return
            self._run_reporting(HELP_COMMAND)
            return
        name = self.input.arguments[0]
        if not self.has(name):
            _log_debug(f"unknown subcommand {name!r}")
            if self.stderr is not None:
                print(UnknownCommand(name), file=self.stderr)
            self.write_usage(self.stderr)
            return
        self._run_reporting(name)

    def _run_reporting(self, name: str) -> None:
        """Run a subcommand and print any resulting error."""
        try:
            self.run(name)
        except HelpRequested:
            definition = self.get(name)
            if definition is not None:
                self.write_usage_of(self.stderr, definition)
        except Exception as e:
            _log_debug(f"subcommand {name!r} failed: {e!r}")
            if self.stderr is not None:
                print(e, file=self.stderr)
