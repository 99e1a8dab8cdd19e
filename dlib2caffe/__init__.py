# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Convert dlib ``net_to_xml()`` network dumps into Caffe NetSpec Python code."""

from .errors import (
    ConfigError,
    ConversionError,
    MissingAttributeError,
    StructuralError,
    UnsupportedLayerError,
)
from .graph import LayerGraph, LayerKind, LayerRecord, parse_net_xml
from .pipeline import convert_file

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConversionError",
    "MissingAttributeError",
    "StructuralError",
    "UnsupportedLayerError",
    "LayerGraph",
    "LayerKind",
    "LayerRecord",
    "parse_net_xml",
    "convert_file",
]
