# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Elementwise layer handlers."""

from __future__ import annotations

from typing import Any, Dict

from ..codegen.formatting import CaffeSymbol
from ..graph.model import LayerRecord
from ..graph.resolver import find_input_layer_name, find_layer_name
from .support_registry import CAFFE_LAYER_TYPES


def handle_add_prev(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """
    Handle add_prev layer.

    Sums the layer's own input with the output of the nearest earlier layer
    tagged with the ``tag`` attribute. A tag that matches nothing is an error,
    never a fallback to the predecessor.
    """
    tag_id = layer.int_attribute('tag')
    spec.update({
        'caffe_type': CAFFE_LAYER_TYPES['add_prev'],
        'inputs': [
            find_input_layer_name(ctx.arena, position),
            find_layer_name(ctx.arena, position, tag_id),
        ],
        'kwargs': [('operation', CaffeSymbol('P.Eltwise.SUM'))],
    })
    ctx.specs.append(spec)
    return True
