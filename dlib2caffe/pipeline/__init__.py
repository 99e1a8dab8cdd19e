# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Pass-based conversion pipeline."""

from .context import PipelineContext
from .pass_base import ConversionPass
from .pipeline import (
    BuildLayerSpecsPass,
    ConversionPipeline,
    ParseNetPass,
    RenderPass,
    WriteArtifactPass,
    build_default_pipeline,
    convert_file,
    output_path_for,
)

__all__ = [
    "PipelineContext",
    "ConversionPass",
    "ConversionPipeline",
    "ParseNetPass",
    "BuildLayerSpecsPass",
    "RenderPass",
    "WriteArtifactPass",
    "build_default_pipeline",
    "convert_file",
    "output_path_for",
]
