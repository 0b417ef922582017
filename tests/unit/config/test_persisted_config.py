"""Tests for persisted config loading and sanitization."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from scriptbridge import config


class PersistedConfigTests(unittest.TestCase):
    def test_missing_or_malformed_config_loads_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("scriptbridge.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_explorer_config_round_trip(self) -> None:
        table = {"sorters": [{"sorter": "BySize", "reverse": True}]}
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("scriptbridge.config.CONFIG_PATH", config_path):
                self.assertIsNone(config.load_explorer_config())
                config.save_explorer_config(table)
                self.assertEqual(config.load_explorer_config(), table)

    def test_non_table_explorer_config_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("scriptbridge.config.CONFIG_PATH", config_path):
                config.save_config({"explorer": ["bad"]})
                self.assertIsNone(config.load_explorer_config())

    def test_log_level_is_normalized_and_validated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("scriptbridge.config.CONFIG_PATH", config_path):
                config.save_log_level(" debug ")
                self.assertEqual(config.load_log_level(), "DEBUG")
                config.save_log_level("chatty")
                self.assertEqual(config.load_log_level(), "DEBUG")
                config.save_config({"log_level": 10})
                self.assertIsNone(config.load_log_level())


if __name__ == "__main__":
    unittest.main()
