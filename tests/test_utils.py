import io
import types
from collections.abc import Sequence

from subcmd import Def, FlagSet, HelpRequested, Options, Program


def make_program(args: Sequence[str], name: str = "") -> tuple[Program, types.SimpleNamespace]:
    """Return a Program wired to in-memory streams, plus the streams."""
    streams = types.SimpleNamespace(
        stdin=io.StringIO(), stdout=io.StringIO(), stderr=io.StringIO()
    )
    program = Program(
        name, list(args), stdin=streams.stdin, stdout=streams.stdout, stderr=streams.stderr
    )
    return program, streams


class RecordingCommand:
    """Records the Options it ran with; class-level so tests can inspect it."""

    last: Options | None = None
    runs = 0

    def run(self, opt: Options) -> None:
        type(self).last = opt
        type(self).runs += 1


def recording_def(name: str = "record", summary: str = "Record the call.") -> tuple[Def, type]:
    """Return a definition whose command class is fresh for every test."""
    cls = type("Recorder", (RecordingCommand,), {"last": None, "runs": 0})
    return Def(name=name, summary=summary, new=cls), cls


class FlagCommand:
    """Declares ``-n`` and ``-name``; records the parsed values."""

    seen: dict | None = None

    def set_flags(self, flags: FlagSet) -> None:
        flags.bind_bool(self, "n", "n", False, "Suppress trailing newline.")
        flags.bind_string(self, "label", "name", "world", "Who to greet.")

    def run(self, opt: Options) -> None:
        opt.parse_flags()
        type(self).seen = {"n": self.n, "label": self.label, "args": opt.args()}


class HelpRaisingCommand:
    def run(self, opt: Options) -> None:
        raise HelpRequested()


class FailingCommand:
    def run(self, opt: Options) -> None:
        raise RuntimeError("disk on fire")
