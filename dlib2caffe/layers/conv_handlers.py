# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Convolution layer handlers."""

from __future__ import annotations

from typing import Any, Dict

from ..errors import StructuralError
from ..graph.model import LayerRecord
from ..graph.resolver import find_input_layer_name
from .support_registry import CAFFE_LAYER_TYPES


def handle_con(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle con layer.

    dlib keeps filters and biases in one column: the filter weights in
    [num_filters, k, nr, nc] order followed by num_filters biases.
    """
    num_filters = layer.int_attribute('num_filters')
    kernel_h = layer.int_attribute('nr')
    kernel_w = layer.int_attribute('nc')

    spec.update({
        'caffe_type': CAFFE_LAYER_TYPES['con'],
        'inputs': [find_input_layer_name(ctx.arena, position)],
        'kwargs': [
            ('num_output', layer.attribute('num_filters')),
            ('kernel_w', layer.attribute('nc')),
            ('kernel_h', layer.attribute('nr')),
            ('stride_w', layer.attribute('stride_x')),
            ('stride_h', layer.attribute('stride_y')),
            ('pad_w', layer.attribute('padding_x')),
            ('pad_h', layer.attribute('padding_y')),
        ],
    })
    ctx.specs.append(spec)

    params = generator.require_params(layer, min_rows=num_filters + 1)
    split = params.shape[0] - num_filters
    weights = params[:split].T.ravel()
    biases = params[split:].T.ravel()

    if biases.size != num_filters:
        raise StructuralError(
            f"{layer.caffe_name} should have {num_filters} biases but its parameters hold {biases.size}."
        )
    filter_area = num_filters * kernel_h * kernel_w
    if filter_area <= 0 or weights.size % filter_area != 0:
        raise StructuralError(
            f"{layer.caffe_name} has {weights.size} filter weights, which is not a multiple of "
            f"num_filters*nr*nc = {filter_area}."
        )
    in_channels = weights.size // filter_area

    generator.add_param_blob(ctx, layer, weights, (num_filters, in_channels, kernel_h, kernel_w))
    generator.add_param_blob(ctx, layer, biases, (num_filters,))
    return True
