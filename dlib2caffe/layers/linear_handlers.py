# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Fully connected layer handlers."""

from __future__ import annotations

from typing import Any, Dict

from ..errors import StructuralError
from ..graph.model import LayerRecord
from ..graph.resolver import find_input_layer_name
from .support_registry import CAFFE_LAYER_TYPES


def _inner_product_spec(ctx: Any, position: int, layer: LayerRecord, bias_term: bool) -> Dict[str, Any]:
    return {
        'caffe_type': CAFFE_LAYER_TYPES[layer.detail_name],
        'inputs': [find_input_layer_name(ctx.arena, position)],
        'kwargs': [
            ('num_output', layer.attribute('num_outputs')),
            ('bias_term', bias_term),
        ],
    }


def _check_outputs(layer: LayerRecord, columns: int) -> None:
    num_outputs = layer.int_attribute('num_outputs')
    if columns != num_outputs:
        raise StructuralError(
            f"{layer.caffe_name} declares num_outputs={num_outputs} but its parameter "
            f"matrix has {columns} columns."
        )


def handle_fc(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle fc layer.

    dlib stores an (num_inputs + 1) x num_outputs matrix whose last row holds
    the biases. Caffe wants num_outputs x num_inputs weights.
    """
    spec.update(_inner_product_spec(ctx, position, layer, bias_term=True))
    ctx.specs.append(spec)

    params = generator.require_params(layer, min_rows=2)
    _check_outputs(layer, params.shape[1])
    weights = params[:-1].T
    biases = params[-1]
    generator.add_param_blob(ctx, layer, weights.ravel(), weights.shape)
    generator.add_param_blob(ctx, layer, biases.ravel(), (biases.size,))
    return True


def handle_fc_no_bias(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle fc_no_bias layer."""
    spec.update(_inner_product_spec(ctx, position, layer, bias_term=False))
    ctx.specs.append(spec)

    params = generator.require_params(layer)
    _check_outputs(layer, params.shape[1])
    weights = params.T
    generator.add_param_blob(ctx, layer, weights.ravel(), weights.shape)
    return True
