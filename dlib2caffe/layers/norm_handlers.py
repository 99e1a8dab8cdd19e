# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Batch norm and affine layer handlers."""

from __future__ import annotations

from typing import Any, Dict

from ..errors import StructuralError, UnsupportedLayerError
from ..graph.model import LayerRecord
from ..graph.resolver import find_input_layer_name
from .support_registry import CAFFE_LAYER_TYPES, get_replacement_suggestion


def handle_batch_norm(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Reject bn_con and bn_fc layers."""
    raise UnsupportedLayerError(get_replacement_suggestion(layer.detail_name))


def _handle_affine(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
    axis: int,
) -> bool:
    spec.update({
        'caffe_type': CAFFE_LAYER_TYPES[layer.detail_name],
        'inputs': [find_input_layer_name(ctx.arena, position)],
        'kwargs': [
            ('axis', axis),
            ('bias_term', True),
        ],
    })
    ctx.specs.append(spec)

    # gamma rows first, then the same number of beta rows
    params = generator.require_params(layer, min_rows=2)
    rows = params.shape[0]
    if rows % 2 != 0:
        raise StructuralError(
            f"{layer.caffe_name} should hold as many shift as scale values, got {rows} rows."
        )
    dims = rows // 2
    gamma = params[:dims].T.ravel()
    beta = params[dims:].T.ravel()
    generator.add_param_blob(ctx, layer, gamma, (gamma.size,))
    generator.add_param_blob(ctx, layer, beta, (beta.size,))
    return True


def handle_affine_con(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle affine_con layer (per-channel scale and shift)."""
    return _handle_affine(generator, ctx, position, layer, spec, axis=1)


def handle_affine_fc(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle affine_fc layer (per-feature scale and shift)."""
    return _handle_affine(generator, ctx, position, layer, spec, axis=3)
