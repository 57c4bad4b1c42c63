# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Subcommand definitions and the capability protocols commands implement."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .flags import FlagSet
    from .program import Options


@runtime_checkable
class Command(Protocol):
    """An instance of a subcommand definition.

    A command may additionally implement :class:`FlagSetter` if it has flags.
    ``run`` may raise to report failure; :class:`~subcmd.HelpRequested` asks
    the program to print the command's usage instead of an error.
    """

    def run(self, options: Options) -> Any: ...


@runtime_checkable
class FlagSetter(Protocol):
    """Implemented by any command that declares flags on a FlagSet."""

    def set_flags(self, flags: FlagSet) -> None: ...


@dataclass(frozen=True)
class Def:
    """Describes a subcommand.

    Attributes:
        name: Name of the subcommand, as typed on the command line.
        summary: One-line description shown in the command list.
        arguments: Arguments accepted by the subcommand. Displayed after the
            program and subcommand names ("program subcommand <arguments>").
        description: Detailed description shown by ``help <name>``.
        new: Factory returning a fresh command instance.
    """

    name: str
    summary: str = ""
    arguments: str = ""
    description: str = ""
    new: Callable[[], Command] | None = None


def declares_flags(command: object) -> bool:
    """Return True if *command* implements the optional flag capability."""
    return isinstance(command, FlagSetter)
