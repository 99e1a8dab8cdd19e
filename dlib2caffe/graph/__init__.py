# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Layer graph model, XML graph builder and reference resolution."""

from .builder import NetGraphBuilder, parse_net_xml, parse_param_matrix
from .model import LayerGraph, LayerKind, LayerRecord
from .resolver import find_input_layer_name, find_layer, find_layer_name

__all__ = [
    "NetGraphBuilder",
    "parse_net_xml",
    "parse_param_matrix",
    "LayerGraph",
    "LayerKind",
    "LayerRecord",
    "find_layer",
    "find_layer_name",
    "find_input_layer_name",
]
