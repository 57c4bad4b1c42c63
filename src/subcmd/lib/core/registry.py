# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Name -> definition mapping maintained by a program."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import IO

from .._util.ansi import bold
from .definition import Def


class RegistrationError(ValueError):
    """A subcommand definition could not be registered.

    Raised at setup time for programmer mistakes (empty name, missing factory,
    duplicate name). Programs are not expected to catch it.
    """


class Registry:
    """Registry of subcommand definitions, keyed by name."""

    def __init__(self, defs: Iterable[Def] = ()) -> None:
        self._defs: dict[str, Def] = {}
        for definition in defs:
            self.register(definition)

    def register(self, definition: Def) -> None:
        """Register *definition* under its name.

        Raises:
            RegistrationError: If the name is empty, the factory is missing,
                or a subcommand with the same name is already registered.
        """
        if not definition.name:
            raise RegistrationError("empty name field")
        if definition.new is None or not callable(definition.new):
            raise RegistrationError(f"empty new field for {definition.name!r}")
        if definition.name in self._defs:
            raise RegistrationError(f"already registered {definition.name!r}")
        self._defs[definition.name] = definition

    def remove(self, name: str) -> None:
        """Unregister *name*. Unknown names are ignored."""
        self._defs.pop(name, None)

    def has(self, name: str) -> bool:
        """Return whether *name* is a registered subcommand."""
        return name in self._defs

    def get(self, name: str) -> Def | None:
        """Return the definition registered under *name*, or None."""
        return self._defs.get(name)

    def list(self) -> list[Def]:
        """Return every definition, sorted by name."""
        return [self._defs[name] for name in sorted(self._defs)]

    def write_summary(self, w: IO[str] | None, color: bool = False) -> None:
        """Write one line per subcommand to *w*: padded name, then summary.

        The name column is as wide as the longest registered name. When
        *color* is set, names are emphasised after padding so the columns
        still line up.
        """
        if w is None:
            return
        defs = self.list()
        width = max((len(d.name) for d in defs), default=0)
        for d in defs:
            padding = " " * (width - len(d.name))
            print(f"\t{bold(d.name, color)}{padding}    {d.summary}", file=w)

    def __contains__(self, name: object) -> bool:
        return name in self._defs

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._defs))

    def __len__(self) -> int:
        return len(self._defs)
