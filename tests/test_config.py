# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for dlib2caffe.config."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from dlib2caffe.config import load_config
from dlib2caffe.errors import ConfigError


class TestLoadConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg.float_precision, 9)
        self.assertEqual(cfg.default_input_size, 28)
        self.assertEqual(cfg.batch_size, 1)
        self.assertEqual(cfg.output_suffix, "_dlib_to_caffe_model.py")
        self.assertIsNone(cfg.output_dir)

    def test_dotlist_overrides(self):
        cfg = load_config(overrides=["float_precision=6", "output_dir=/tmp/out"])
        self.assertEqual(cfg.float_precision, 6)
        self.assertEqual(cfg.output_dir, "/tmp/out")

    def test_yaml_file_then_overrides(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "converter.yaml"
            path.write_text("float_precision: 5\ndefault_input_size: 32\n")
            cfg = load_config(path, ["default_input_size=48"])
        self.assertEqual(cfg.float_precision, 5)
        self.assertEqual(cfg.default_input_size, 48)

    def test_unknown_key_rejected(self):
        with self.assertRaises(ConfigError):
            load_config(overrides=["no_such_option=1"])

    def test_wrong_type_rejected(self):
        with self.assertRaises(ConfigError):
            load_config(overrides=["batch_size=many"])

    def test_invalid_value_rejected(self):
        with self.assertRaisesRegex(ConfigError, "float_precision"):
            load_config(overrides=["float_precision=0"])

    def test_unknown_log_level_rejected(self):
        with self.assertRaisesRegex(ConfigError, "log_level"):
            load_config(overrides=["log_level=LOUD"])

    def test_log_level_is_case_insensitive(self):
        cfg = load_config(overrides=["log_level=debug"])
        self.assertEqual(cfg.log_level, "debug")

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config("/nonexistent/converter.yaml")


if __name__ == "__main__":
    unittest.main()
