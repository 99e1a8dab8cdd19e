# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Default conversion pipeline: parse, build layer specs, render, write."""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional, Union

from omegaconf import DictConfig

from ..codegen.generator import CaffeCodeGenerator
from ..config import load_config
from ..graph.builder import parse_net_xml
from .context import PipelineContext
from .pass_base import ConversionPass

logger = logging.getLogger(__name__)


class ConversionPipeline:
    """Run a list of passes in order while collecting timing diagnostics."""

    def __init__(self, passes: Iterable[ConversionPass]):
        self.passes = list(passes)

    def run(self, context: PipelineContext) -> PipelineContext:
        logger.debug("Converting %s", context.source_path)
        for conversion_pass in self.passes:
            stage_name = conversion_pass.name
            start_s = time.perf_counter()
            conversion_pass.run(context)
            elapsed_s = time.perf_counter() - start_s
            context.add_timing(stage_name, elapsed_s)
            context.diagnostics.setdefault("stages", []).append(
                {"name": stage_name, "elapsed_s": elapsed_s}
            )
            logger.debug("  %s: %.3fs", stage_name, elapsed_s)
        return context


class ParseNetPass(ConversionPass):
    """Parse and validate the dlib XML into a LayerGraph."""

    name = "parse_net"

    def run(self, context: PipelineContext) -> None:
        context.graph = parse_net_xml(context.source_path)
        context.diagnostics["layer_count"] = len(context.graph)
        context.diagnostics["input_layer"] = context.graph.input_layer.detail_name


class BuildLayerSpecsPass(ConversionPass):
    """Run every layer through its handler; no output is produced yet."""

    name = "build_layer_specs"

    def run(self, context: PipelineContext) -> None:
        generator = CaffeCodeGenerator(context.graph, context.config)
        generator.input_dimensions()
        ctx = generator.build_layer_specs()
        context.generator = generator
        context.diagnostics["layer_specs_count"] = len(ctx.specs)
        context.diagnostics["param_blob_count"] = len(ctx.param_blobs)


class RenderPass(ConversionPass):
    """Render the generated script in memory."""

    name = "render"

    def run(self, context: PipelineContext) -> None:
        context.artifact = context.generator.render()
        context.diagnostics["artifact_bytes"] = len(context.artifact)


class WriteArtifactPass(ConversionPass):
    """Write the rendered script next to the input (or into output_dir)."""

    name = "write_artifact"

    def run(self, context: PipelineContext) -> None:
        if context.output_path is None:
            context.output_path = output_path_for(context.source_path, context.config)
        print(f"Writing model to {context.output_path}")
        context.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(context.output_path, "w", encoding="utf-8") as fout:
            fout.write(context.artifact)


def output_path_for(source_path: Union[str, Path], config: DictConfig) -> Path:
    """
    Path of the generated script for ``source_path``.

    The name is the input file name up to its first '.', followed by
    ``config.output_suffix``, e.g. ``mnist.net.xml`` -> ``mnist_dlib_to_caffe_model.py``.
    """
    source_path = Path(source_path)
    stem = source_path.name.split(".", 1)[0]
    directory = Path(config.output_dir) if config.output_dir else source_path.parent
    return directory / f"{stem}{config.output_suffix}"


def build_default_pipeline() -> ConversionPipeline:
    return ConversionPipeline(
        [
            ParseNetPass(),
            BuildLayerSpecsPass(),
            RenderPass(),
            WriteArtifactPass(),
        ]
    )


def convert_file(
    source_path: Union[str, Path],
    config: Optional[DictConfig] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> PipelineContext:
    """Convert one dlib XML file into a Caffe script and return the pipeline context."""
    context = PipelineContext(
        source_path=Path(source_path),
        config=config if config is not None else load_config(),
        output_path=Path(output_path) if output_path is not None else None,
    )
    return build_default_pipeline().run(context)
