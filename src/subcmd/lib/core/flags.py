# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Per-subcommand flag sets built on argparse.

Each running subcommand gets a fresh :class:`FlagSet`. Commands declare their
flags in ``set_flags`` and parse them from ``Options.parse_flags()``.

Syntax
------
- ``-name`` and ``--name`` are equivalent.
- Valued flags accept ``-name value`` and ``-name=value``.
- Boolean flags take no separate value; ``-name=false`` and ``--no-name``
  switch them off.
- Parsing stops at the first non-flag argument. A lone ``--`` terminates the
  flags and is dropped.
- ``-h``, ``-help`` and ``--help`` raise :class:`HelpRequested`.
"""

from __future__ import annotations

import argparse
import re
from collections.abc import Callable, Sequence
from datetime import timedelta
from typing import IO, Any, NoReturn, Protocol, runtime_checkable

_ARGUMENTS_DEST = "_subcmd_arguments"
_HELP_OPTIONS = ("-h", "-help", "--help")

_TRUE_STRINGS = frozenset({"1", "t", "true"})
_FALSE_STRINGS = frozenset({"0", "f", "false"})


class FlagError(ValueError):
    """Flag parsing failed (unknown flag, missing or invalid value)."""


class HelpRequested(Exception):
    """Help was requested on the command line."""

    def __init__(self) -> None:
        super().__init__("help requested")


@runtime_checkable
class Value(Protocol):
    """A custom flag value: parsed with ``set``, displayed with ``str``."""

    def set(self, text: str) -> None: ...

    def __str__(self) -> str: ...


# ---------------------------------------------------------------------------
# Converters
# ---------------------------------------------------------------------------


def parse_bool(text: str) -> bool:
    """Parse ``1/t/true`` or ``0/f/false`` (any case)."""
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def _parse_int(text: str) -> int:
    """Parse an integer with an optional base prefix; a leading zero means octal."""
    s = text.strip()
    sign = ""
    if s[:1] in ("+", "-"):
        sign, s = s[0], s[1:]
    if len(s) > 1 and s[0] == "0" and s[1].isdigit():
        s = "0o" + s[1:]
    return int(sign + s, 0)


def _parse_uint(text: str) -> int:
    value = _parse_int(text)
    if value < 0:
        raise ValueError(f"negative value {text!r}")
    return value


# Durations are stored with microsecond precision, like timedelta itself.
_DURATION_UNITS = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,  # micro sign
    "μs": 1.0,  # greek mu
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``300ms``, ``-1.5h`` or ``2h45m``.

    A bare ``0`` is accepted; any other number needs a unit.
    """
    s = text.strip()
    sign = 1
    if s and s[0] in "+-":
        if s[0] == "-":
            sign = -1
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError(f"invalid duration {text!r}")
    micros = 0.0
    pos = 0
    while pos < len(s):
        m = _DURATION_PART.match(s, pos)
        if m is None:
            raise ValueError(f"invalid duration {text!r}")
        micros += float(m.group(1)) * _DURATION_UNITS[m.group(2)]
        pos = m.end()
    return timedelta(microseconds=sign * micros)


def _trim_number(value: float) -> str:
    return f"{value:.6f}".rstrip("0").rstrip(".")


def format_duration(value: timedelta) -> str:
    """Render *value* the way :func:`parse_duration` reads it (``1h2m3.5s``)."""
    micros = value // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim_number(micros / 1000)}ms"
    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{_trim_number(rest / 1_000_000)}s"


def _is_zero(value: Any) -> bool:
    if isinstance(value, timedelta):
        return value == timedelta(0)
    return value is None or value is False or value == "" or value == 0


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, timedelta):
        return format_duration(value)
    return str(value)


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------


class Flag:
    """A declared flag.

    ``value`` is the current value: the default until the flag set is
    parsed, then whatever the command line supplied.
    """

    def __init__(
        self,
        name: str,
        usage: str,
        default: Any,
        *,
        setter: Callable[[str], None],
        getter: Callable[[], Any],
        metavar: str | None = None,
        is_bool: bool = False,
    ) -> None:
        self.name = name
        self.usage = usage
        self.default = default
        self.metavar = metavar
        self.is_bool = is_bool
        self._setter = setter
        self._getter = getter

    @property
    def value(self) -> Any:
        return self._getter()

    def set(self, text: str) -> None:
        """Parse *text* and store the result."""
        self._setter(text)

    def __repr__(self) -> str:
        return f"Flag(name={self.name!r}, value={self.value!r})"


class _Box:
    """Storage for flags that are not bound to a caller-owned attribute."""

    def __init__(self, value: Any) -> None:
        self.value = value


class _FlagAction(argparse.Action):
    """Routes a parsed option into its :class:`Flag`."""

    flag: Flag

    def __call__(self, parser, namespace, values, option_string=None):
        if self.nargs == 0:
            text = "false" if option_string and option_string.startswith("--no-") else "true"
        else:
            text = values
        try:
            self.flag.set(text)
        except (ValueError, TypeError) as e:
            raise argparse.ArgumentError(
                self, f"invalid value {text!r} for flag -{self.flag.name}: {e}"
            ) from e


class _HelpAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(
            option_strings=option_strings, dest=dest, default=default, nargs=0, help=help
        )

    def __call__(self, parser, namespace, values, option_string=None):
        raise HelpRequested()


class _FlagParser(argparse.ArgumentParser):
    """ArgumentParser that raises :class:`FlagError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise FlagError(message)


class _FlagHelpFormatter(argparse.HelpFormatter):
    """Lists flags as ``-name type`` followed by usage and non-zero default."""

    def _format_action_invocation(self, action: argparse.Action) -> str:
        flag = getattr(action, "flag", None)
        if flag is None:
            return super()._format_action_invocation(action)
        if flag.metavar:
            return f"-{flag.name} {flag.metavar}"
        return f"-{flag.name}"

    def _get_help_string(self, action: argparse.Action) -> str | None:
        text = action.help or ""
        flag = getattr(action, "flag", None)
        if flag is not None and not _is_zero(flag.default):
            shown = _display(flag.default).replace("%", "%%")
            text = f"{text} (default: {shown})" if text else f"(default: {shown})"
        return text


class FlagSet:
    """A set of flags for one subcommand invocation."""

    def __init__(self, name: str = "", output: IO[str] | None = None) -> None:
        self.name = name
        self._output = output
        self._flags: dict[str, Flag] = {}
        self._actions: dict[str, argparse.Action] = {}
        self._args: list[str] = []
        self._parsed = False
        self._parser = _FlagParser(
            prog=name or None,
            add_help=False,
            allow_abbrev=False,
            exit_on_error=False,
            conflict_handler="resolve",
        )
        self._parser.add_argument(*_HELP_OPTIONS, action=_HelpAction)
        self._parser.add_argument(_ARGUMENTS_DEST, nargs=argparse.REMAINDER)

    # -- output -------------------------------------------------------------

    def set_output(self, w: IO[str] | None) -> None:
        """Send parse errors and defaults to *w*; None discards them."""
        self._output = w

    @property
    def output(self) -> IO[str] | None:
        return self._output

    # -- declaration --------------------------------------------------------

    def _define(self, flag: Flag) -> Flag:
        name = flag.name
        if not name or name.startswith("-") or "=" in name:
            raise FlagError(f"bad flag syntax: {name!r}")
        if name in self._flags:
            raise FlagError(f"flag redefined: {name}")
        options = [f"-{name}", f"--{name}"]
        if flag.is_bool:
            options.append(f"--no-{name}")
        action = self._parser.add_argument(
            *options,
            action=_FlagAction,
            dest=f"flag:{name}",
            nargs=0 if flag.is_bool else None,
            default=argparse.SUPPRESS,
            help=flag.usage.replace("%", "%%"),
        )
        action.flag = flag  # type: ignore[attr-defined]
        self._flags[name] = flag
        self._actions[name] = action
        return flag

    def _scalar(
        self,
        name: str,
        default: Any,
        usage: str,
        convert: Callable[[str], Any],
        metavar: str | None,
    ) -> Flag:
        box = _Box(default)

        def setter(text: str) -> None:
            box.value = convert(text)

        return self._define(
            Flag(
                name,
                usage,
                default,
                setter=setter,
                getter=lambda: box.value,
                metavar=metavar,
                is_bool=convert is parse_bool,
            )
        )

    def _bound(
        self,
        target: object,
        attr: str,
        name: str,
        default: Any,
        usage: str,
        convert: Callable[[str], Any],
        metavar: str | None,
    ) -> Flag:
        setattr(target, attr, default)

        def setter(text: str) -> None:
            setattr(target, attr, convert(text))

        return self._define(
            Flag(
                name,
                usage,
                default,
                setter=setter,
                getter=lambda: getattr(target, attr),
                metavar=metavar,
                is_bool=convert is parse_bool,
            )
        )

    def add_bool(self, name: str, default: bool, usage: str) -> Flag:
        return self._scalar(name, default, usage, parse_bool, None)

    def add_string(self, name: str, default: str, usage: str) -> Flag:
        return self._scalar(name, default, usage, str, "string")

    def add_int(self, name: str, default: int, usage: str) -> Flag:
        return self._scalar(name, default, usage, _parse_int, "int")

    def add_uint(self, name: str, default: int, usage: str) -> Flag:
        return self._scalar(name, default, usage, _parse_uint, "uint")

    def add_float(self, name: str, default: float, usage: str) -> Flag:
        return self._scalar(name, default, usage, float, "float")

    def add_duration(self, name: str, default: timedelta, usage: str) -> Flag:
        return self._scalar(name, default, usage, parse_duration, "duration")

    def bind_bool(self, target: object, attr: str, name: str, default: bool, usage: str) -> Flag:
        """Declare a boolean flag stored in ``target.attr``."""
        return self._bound(target, attr, name, default, usage, parse_bool, None)

    def bind_string(self, target: object, attr: str, name: str, default: str, usage: str) -> Flag:
        return self._bound(target, attr, name, default, usage, str, "string")

    def bind_int(self, target: object, attr: str, name: str, default: int, usage: str) -> Flag:
        return self._bound(target, attr, name, default, usage, _parse_int, "int")

    def bind_uint(self, target: object, attr: str, name: str, default: int, usage: str) -> Flag:
        return self._bound(target, attr, name, default, usage, _parse_uint, "uint")

    def bind_float(self, target: object, attr: str, name: str, default: float, usage: str) -> Flag:
        return self._bound(target, attr, name, default, usage, float, "float")

    def bind_duration(
        self, target: object, attr: str, name: str, default: timedelta, usage: str
    ) -> Flag:
        return self._bound(target, attr, name, default, usage, parse_duration, "duration")

    def add_func(self, name: str, usage: str, fn: Callable[[str], Any]) -> Flag:
        """Declare a flag that calls ``fn(text)`` each time it appears.

        ``fn`` rejects a value by raising ValueError or TypeError.
        """
        box = _Box("")

        def setter(text: str) -> None:
            fn(text)
            box.value = text

        return self._define(
            Flag(name, usage, "", setter=setter, getter=lambda: box.value, metavar="value")
        )

    def add_value(self, value: Value, name: str, usage: str) -> Flag:
        """Declare a flag backed by a custom :class:`Value`."""
        return self._define(
            Flag(
                name,
                usage,
                str(value),
                setter=value.set,
                getter=lambda: value,
                metavar="value",
            )
        )

    # -- introspection ------------------------------------------------------

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def flags(self) -> list[Flag]:
        """Return declared flags sorted by name."""
        return [self._flags[name] for name in sorted(self._flags)]

    def has_flags(self) -> bool:
        return bool(self._flags)

    def parsed(self) -> bool:
        return self._parsed

    def args(self) -> list[str]:
        """Non-flag arguments left after parsing."""
        return list(self._args)

    def arg(self, i: int) -> str:
        """Return the i-th remaining argument, or "" if there is none."""
        if 0 <= i < len(self._args):
            return self._args[i]
        return ""

    def narg(self) -> int:
        return len(self._args)

    def format_defaults(self) -> str:
        """Return the flag list as help text; empty when no flags exist."""
        if not self._flags:
            return ""
        formatter = _FlagHelpFormatter(prog=self.name or "")
        formatter.add_arguments([self._actions[name] for name in sorted(self._actions)])
        return formatter.format_help()

    def print_defaults(self, w: IO[str] | None = None) -> None:
        """Write the flag list to *w*, or to the configured output."""
        w = w if w is not None else self._output
        if w is None:
            return
        w.write(self.format_defaults())

    # -- parsing ------------------------------------------------------------

    def _normalize(self, arguments: Sequence[str]) -> list[str]:
        """Rewrite flags and their values into single argparse tokens."""
        out: list[str] = []
        i = 0
        while i < len(arguments):
            token = arguments[i]
            if token == "--" or token == "-" or not token.startswith("-"):
                break
            body = token[2:] if token.startswith("--") else token[1:]
            name, eq, text = body.partition("=")
            flag = self._flags.get(name)
            if flag is not None and flag.is_bool and eq:
                try:
                    on = parse_bool(text)
                except ValueError as e:
                    raise FlagError(f"invalid boolean value {text!r} for flag -{name}") from e
                out.append(f"--{name}" if on else f"--no-{name}")
                i += 1
                continue
            i += 1
            if flag is not None and not flag.is_bool and not eq and i < len(arguments):
                # one token, so values starting with "-" are not taken for flags
                out.append(f"--{name}={arguments[i]}")
                i += 1
                continue
            out.append(token)
        out.extend(arguments[i:])
        return out

    def parse(self, arguments: Sequence[str]) -> None:
        """Parse *arguments*, setting flag values and the remaining args.

        Raises:
            HelpRequested: A help flag was given.
            FlagError: The arguments are not valid for this flag set.
        """
        self._parsed = True
        try:
            namespace = self._parser.parse_args(self._normalize(arguments))
        except argparse.ArgumentError as e:
            self._report(e.message)
            raise FlagError(e.message) from e
        except FlagError as e:
            self._report(str(e))
            raise
        rest = list(getattr(namespace, _ARGUMENTS_DEST, None) or [])
        if rest and rest[0] == "--":
            rest = rest[1:]
        self._args = rest

    def _report(self, message: str) -> None:
        if self._output is None:
            return
        print(message, file=self._output)
        if self._flags:
            print(f"Usage of {self.name}:" if self.name else "Usage:", file=self._output)
            self.print_defaults(self._output)
