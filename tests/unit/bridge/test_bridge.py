"""Tests for the script-facing util table.

Checks argument decoding, result shapes, and how native failures surface as
script errors.
"""

from __future__ import annotations

import dataclasses
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from scriptbridge import ScriptError, create_table
from scriptbridge.explorer import Node
from scriptbridge.values import ArgumentError, ConfigConversionError, SpawnError, TraversalError


class UtilTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.util = create_table()

    def test_table_has_exactly_six_functions(self) -> None:
        self.assertEqual(
            list(self.util),
            ["dirname", "basename", "absolute", "explore", "shell_execute", "shell_quote"],
        )

    def test_path_functions(self) -> None:
        self.assertEqual(self.util["dirname"]("/foo/bar"), "/foo")
        self.assertIsNone(self.util["dirname"]("/"))
        self.assertEqual(self.util["basename"]("/foo/bar"), "bar")
        self.assertIsNone(self.util["basename"]("/"))
        self.assertEqual(self.util["absolute"]("/a/../b"), "/b")

    def test_shell_quote(self) -> None:
        self.assertEqual(self.util["shell_quote"]("a'b\"c"), "'a'\"'\"'b\"c'")

    def test_wrong_argument_types_raise_argument_error(self) -> None:
        with self.assertRaises(ArgumentError):
            self.util["dirname"](None)
        with self.assertRaises(ArgumentError):
            self.util["shell_quote"]({"a": 1})
        with self.assertRaises(ArgumentError):
            self.util["shell_execute"]("echo", "not-a-list")
        with self.assertRaises(ArgumentError):
            self.util["explore"]("/", ["not", "a", "table"])


class ExploreBridgeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.explore = create_table()["explore"]

    def test_explore_without_config_returns_one_table_per_child(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("one", "two", "three"):
                (root / name).write_text(name, encoding="utf-8")
            (root / "sub").mkdir()

            nodes = self.explore(str(root))

        self.assertIsInstance(nodes, list)
        self.assertEqual(len(nodes), 4)
        self.assertEqual({node["relative_path"] for node in nodes}, {"one", "two", "three", "sub"})

    def test_node_tables_mirror_node_fields(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "file.txt").write_text("hello", encoding="utf-8")
            (node,) = self.explore(str(root))

        self.assertEqual(list(node), [field.name for field in dataclasses.fields(Node)])
        self.assertEqual(node["absolute_path"], str(root / "file.txt"))
        self.assertEqual(node["size"], 5)
        self.assertIsInstance(node["permissions"], dict)
        self.assertTrue(node["permissions"]["user_read"])
        self.assertIsInstance(node["canonical"], dict)
        self.assertIsNone(node["symlink"])

    def test_explore_applies_config_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("b", "a", ".c"):
                (root / name).write_text(name, encoding="utf-8")
            nodes = self.explore(
                str(root),
                {
                    "filters": [{"filter": "RelativePathDoesNotStartWith", "input": "."}],
                    "sorters": [{"sorter": "ByRelativePath"}],
                },
            )

        self.assertEqual([node["relative_path"] for node in nodes], ["a", "b"])

    def test_unknown_config_field_fails_before_traversal(self) -> None:
        with mock.patch("scriptbridge.explorer.explore") as explore_mock:
            with self.assertRaises(ConfigConversionError) as caught:
                self.explore("/", {"unknown_field": True})
        explore_mock.assert_not_called()
        self.assertIn("unknown_field", str(caught.exception))

    def test_conversion_error_names_key_path_and_value(self) -> None:
        with self.assertRaises(ConfigConversionError) as caught:
            self.explore("/", {"filters": [{"filter": "NoSuchFilter", "input": "x"}]})
        message = str(caught.exception)
        self.assertIn("filters.0.filter", message)
        self.assertIn("NoSuchFilter", message)
        self.assertIsNotNone(caught.exception.__cause__)

    def test_traversal_failures_are_wrapped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "file").write_text("x", encoding="utf-8")
            with self.assertRaises(TraversalError) as missing:
                self.explore(str(root / "missing"))
            with self.assertRaises(TraversalError) as not_dir:
                self.explore(str(root / "file"))

        self.assertIsInstance(missing.exception.__cause__, FileNotFoundError)
        self.assertIn("missing", str(missing.exception))
        self.assertIsInstance(not_dir.exception.__cause__, NotADirectoryError)
        self.assertIsInstance(missing.exception, ScriptError)

    def test_unlistable_roots_fail_even_when_lexically_valid(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "file").write_text("x", encoding="utf-8")
            for path in (f"{root}/missing/..", f"{root}/file/..", ""):
                with self.subTest(path=path):
                    with self.assertRaises(TraversalError) as caught:
                        self.explore(path)
                    self.assertIsInstance(caught.exception.__cause__, OSError)


@unittest.skipUnless(shutil.which("sh"), "sh is not installed")
class ShellExecuteBridgeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.shell_execute = create_table()["shell_execute"]

    def test_pwd_without_args(self) -> None:
        result = self.shell_execute("pwd")
        self.assertEqual(list(result), ["stdout", "stderr", "returncode"])
        self.assertEqual(result["returncode"], 0)
        self.assertEqual(result["stdout"], os.getcwd() + "\n")

    def test_args_table_is_passed_literally(self) -> None:
        result = self.shell_execute("printf", ["%s-%s", "$PATH", 7])
        self.assertEqual(result["stdout"], "$PATH-7")

    def test_signal_death_maps_to_none(self) -> None:
        result = self.shell_execute("sh", ["-c", "kill -9 $$"])
        self.assertIsNone(result["returncode"])

    def test_spawn_failure_is_distinct_from_nonzero_exit(self) -> None:
        failed = self.shell_execute("sh", ["-c", "exit 7"])
        self.assertEqual(failed["returncode"], 7)

        with self.assertRaises(SpawnError) as caught:
            self.shell_execute("scriptbridge-no-such-binary-4f1c")
        self.assertIsInstance(caught.exception.__cause__, FileNotFoundError)
        self.assertIn("scriptbridge-no-such-binary-4f1c", str(caught.exception))

    def test_embedded_nul_is_a_spawn_error(self) -> None:
        with self.assertRaises(SpawnError):
            self.shell_execute("echo", ["a\x00b"])


if __name__ == "__main__":
    unittest.main()
