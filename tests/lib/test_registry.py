# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the subcommand registry."""

import io
import itertools
import unittest

from subcmd import Def, RegistrationError, Registry


class _Noop:
    def run(self, opt) -> None:
        pass


def _def(name: str, summary: str = "") -> Def:
    return Def(name=name, summary=summary, new=_Noop)


class RegisterTests(unittest.TestCase):
    def test_register_then_lookup(self) -> None:
        registry = Registry()
        definition = _def("echo", "Display text.")
        registry.register(definition)
        self.assertTrue(registry.has("echo"))
        self.assertIn("echo", registry)
        self.assertIs(registry.get("echo"), definition)
        self.assertEqual(len(registry), 1)

    def test_duplicate_name_is_fatal(self) -> None:
        registry = Registry([_def("echo")])
        with self.assertRaises(RegistrationError):
            registry.register(_def("echo", "again"))
        self.assertEqual(registry.get("echo").summary, "")

    def test_empty_name_is_fatal(self) -> None:
        with self.assertRaises(RegistrationError):
            Registry().register(_def(""))

    def test_missing_factory_is_fatal(self) -> None:
        with self.assertRaises(RegistrationError):
            Registry().register(Def(name="echo"))

    def test_registration_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(RegistrationError, ValueError))

    def test_get_unknown_returns_none(self) -> None:
        registry = Registry()
        self.assertIsNone(registry.get("nope"))
        self.assertFalse(registry.has("nope"))

    def test_remove(self) -> None:
        registry = Registry([_def("help")])
        registry.remove("help")
        registry.remove("never-registered")
        self.assertFalse(registry.has("help"))


class ListTests(unittest.TestCase):
    def test_list_sorted_for_any_registration_order(self) -> None:
        names = ["zeta", "alpha", "Beta", "mid", "al"]
        expected = sorted(names)
        for order in itertools.permutations(names):
            registry = Registry(_def(n) for n in order)
            self.assertEqual([d.name for d in registry.list()], expected)
            self.assertEqual(list(registry), expected)

    def test_list_uses_code_point_order(self) -> None:
        registry = Registry([_def("b"), _def("B"), _def("a")])
        self.assertEqual([d.name for d in registry.list()], ["B", "a", "b"])

    def test_empty_registry_lists_nothing(self) -> None:
        self.assertEqual(Registry().list(), [])


class WriteSummaryTests(unittest.TestCase):
    def test_names_padded_to_longest(self) -> None:
        registry = Registry(
            [_def("help", "Display help."), _def("a", "Short."), _def("version", "Version.")]
        )
        out = io.StringIO()
        registry.write_summary(out)
        self.assertEqual(
            out.getvalue(),
            "\ta          Short.\n"
            "\thelp       Display help.\n"
            "\tversion    Version.\n",
        )

    def test_all_summaries_start_in_same_column(self) -> None:
        registry = Registry(_def(n, "x") for n in ("a", "bbbbbbbb", "ccc"))
        out = io.StringIO()
        registry.write_summary(out)
        columns = {line.index("x") for line in out.getvalue().splitlines()}
        self.assertEqual(columns, {1 + len("bbbbbbbb") + 4})

    def test_none_sink_is_noop(self) -> None:
        Registry([_def("a")]).write_summary(None)

    def test_color_keeps_alignment(self) -> None:
        registry = Registry([_def("a", "one"), _def("abc", "three")])
        out = io.StringIO()
        registry.write_summary(out, color=True)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "\t\x1b[1ma\x1b[0m      one")
        self.assertEqual(lines[1], "\t\x1b[1mabc\x1b[0m    three")


if __name__ == "__main__":
    unittest.main()
