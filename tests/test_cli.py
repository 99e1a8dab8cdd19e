# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Tests for the conversion pipeline and the dlib2caffe command line."""

from __future__ import annotations

import contextlib
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dlib2caffe import cli
from dlib2caffe.cli import main
from dlib2caffe.config import load_config
from dlib2caffe.errors import StructuralError, UnsupportedLayerError
from dlib2caffe.pipeline import convert_file, output_path_for

from .net_fixtures import RESIDUAL_XML, SIMPLE_CNN_XML

BATCH_NORM_XML = """<net>
<layer idx="0" type="comp"><bn_con eps="0.00001"/></layer>
<layer idx="1" type="input"><input_rgb_image/></layer>
</net>
"""

# add_prev whose tag attribute is not a number
NAN_TAG_XML = """<net>
<layer idx="0" type="comp"><add_prev tag="nan"/></layer>
<layer type="tag" id="1"></layer>
<layer idx="1" type="comp"><relu/></layer>
<layer idx="2" type="input"><input/></layer>
</net>
"""


def _run(argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main(argv)
    return code, out.getvalue()


class TestOutputPath(unittest.TestCase):
    def test_name_cut_at_first_dot(self):
        cfg = load_config()
        self.assertEqual(
            output_path_for("/models/mnist.net.xml", cfg),
            Path("/models/mnist_dlib_to_caffe_model.py"),
        )

    def test_output_dir(self):
        cfg = load_config(overrides=["output_dir=/out"])
        self.assertEqual(output_path_for("./a/resnet.xml", cfg), Path("/out/resnet_dlib_to_caffe_model.py"))


class TestConvertFile(unittest.TestCase):
    def test_pipeline_writes_script_and_records_stages(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "cnn.xml"
            source.write_text(SIMPLE_CNN_XML)
            with contextlib.redirect_stdout(io.StringIO()):
                context = convert_file(source)

            self.assertEqual(context.output_path, Path(tmpdir) / "cnn_dlib_to_caffe_model.py")
            self.assertEqual(context.output_path.read_text(), context.artifact)
            self.assertEqual(
                context.stage_order,
                ["parse_net", "build_layer_specs", "render", "write_artifact"],
            )
            self.assertEqual(context.diagnostics["layer_count"], 5)
            self.assertEqual(context.diagnostics["param_blob_count"], 4)

    def test_failure_leaves_no_output(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "bn.xml"
            source.write_text(BATCH_NORM_XML)
            with self.assertRaises(UnsupportedLayerError):
                convert_file(source)
            self.assertFalse((Path(tmpdir) / "bn_dlib_to_caffe_model.py").exists())

    def test_explicit_output_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "res.xml"
            source.write_text(RESIDUAL_XML)
            target = Path(tmpdir) / "nested" / "model.py"
            with contextlib.redirect_stdout(io.StringIO()):
                convert_file(source, output_path=target)
            self.assertIn("L.Eltwise", target.read_text())


class TestMain(unittest.TestCase):
    def test_no_arguments_prints_usage(self):
        code, output = _run([])
        self.assertEqual(code, 0)
        self.assertIn("dlib::net_to_xml()", output)

    def test_list_supported_types(self):
        code, output = _run(["--list-supported-types"])
        self.assertEqual(code, 0)
        self.assertIn("  - add_prev", output)
        self.assertIn("  - input_rgb_image_sized", output)

    def test_batch_continues_after_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            bad = Path(tmpdir) / "bn.xml"
            bad.write_text(BATCH_NORM_XML)
            good = Path(tmpdir) / "cnn.xml"
            good.write_text(SIMPLE_CNN_XML)
            missing = Path(tmpdir) / "missing.xml"

            code, output = _run([str(bad), str(missing), str(good)])

            self.assertEqual(code, 1)
            self.assertIn("ERROR CONVERTING TO CAFFE", output)
            self.assertIn("batch norm", output)
            self.assertIn("2 of 3 file(s) failed", output)
            self.assertTrue((Path(tmpdir) / "cnn_dlib_to_caffe_model.py").exists())
            self.assertFalse((Path(tmpdir) / "bn_dlib_to_caffe_model.py").exists())

    def test_output_dir_and_override(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "cnn.xml"
            source.write_text(SIMPLE_CNN_XML)
            out_dir = Path(tmpdir) / "generated"

            code, output = _run([str(source), "--output-dir", str(out_dir), "--set", "default_input_size=32"])

            self.assertEqual(code, 0)
            self.assertIn("Writing model to", output)
            script = (out_dir / "cnn_dlib_to_caffe_model.py").read_text()
            self.assertIn("input_nr = 32", script)

    def test_bad_config_override(self):
        code, output = _run(["net.xml", "--set", "unknown=1"])
        self.assertEqual(code, 2)
        self.assertIn("ERROR", output)

    def test_structural_error_reported(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "empty.xml"
            source.write_text("<net></net>")
            code, output = _run([str(source)])
            self.assertEqual(code, 1)
            self.assertIn("No layers found", output)
        self.assertTrue(issubclass(StructuralError, ValueError))

    def test_non_finite_attribute_does_not_stop_batch(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            bad = Path(tmpdir) / "nan_tag.xml"
            bad.write_text(NAN_TAG_XML)
            good = Path(tmpdir) / "cnn.xml"
            good.write_text(SIMPLE_CNN_XML)

            code, output = _run([str(bad), str(good)])

            self.assertEqual(code, 1)
            self.assertIn("ERROR CONVERTING TO CAFFE", output)
            self.assertIn("must be an integer", output)
            self.assertIn("1 of 2 file(s) failed", output)
            self.assertTrue((Path(tmpdir) / "cnn_dlib_to_caffe_model.py").exists())
            self.assertFalse((Path(tmpdir) / "nan_tag_dlib_to_caffe_model.py").exists())

    def test_unexpected_error_counts_as_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            first = Path(tmpdir) / "first.xml"
            first.write_text(SIMPLE_CNN_XML)
            second = Path(tmpdir) / "second.xml"
            second.write_text(SIMPLE_CNN_XML)

            real_convert = cli.convert_file

            def convert(path, config):
                if Path(path).name == "first.xml":
                    raise RuntimeError("boom")
                return real_convert(path, config)

            with mock.patch.object(cli, "convert_file", side_effect=convert):
                with self.assertLogs("dlib2caffe.cli", level="ERROR"):
                    code, output = _run([str(first), str(second)])

            self.assertEqual(code, 1)
            self.assertIn("RuntimeError: boom", output)
            self.assertTrue((Path(tmpdir) / "second_dlib_to_caffe_model.py").exists())

    def test_bad_log_level(self):
        code, output = _run(["net.xml", "--set", "log_level=LOUD"])
        self.assertEqual(code, 2)
        self.assertIn("log_level", output)


if __name__ == "__main__":
    unittest.main()
