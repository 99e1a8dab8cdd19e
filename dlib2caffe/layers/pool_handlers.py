# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Pool layer handlers."""

from __future__ import annotations

from typing import Any, Dict

from ..codegen.formatting import CaffeSymbol
from ..errors import UnsupportedLayerError
from ..graph.model import LayerRecord
from ..graph.resolver import find_input_layer_name
from .support_registry import CAFFE_LAYER_TYPES


def _handle_pool(
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
    pool: str,
) -> bool:
    # dlib pads pooling windows differently from caffe, so outputs would not match
    if layer.attribute('padding_x') != 0 or layer.attribute('padding_y') != 0:
        raise UnsupportedLayerError(
            "dlib and caffe implement pooling with non-zero padding differently, so you can't "
            f"convert a network with such pooling layers ({layer.caffe_name})."
        )

    kwargs = [('pool', CaffeSymbol(pool))]
    # nc == 0 is how dlib spells a window covering the whole input
    if layer.attribute('nc') == 0:
        kwargs.append(('global_pooling', True))
    else:
        kwargs.append(('kernel_w', layer.attribute('nc')))
        kwargs.append(('kernel_h', layer.attribute('nr')))
    kwargs.extend([
        ('stride_w', layer.attribute('stride_x')),
        ('stride_h', layer.attribute('stride_y')),
        ('pad_w', layer.attribute('padding_x')),
        ('pad_h', layer.attribute('padding_y')),
    ])

    spec.update({
        'caffe_type': CAFFE_LAYER_TYPES[layer.detail_name],
        'inputs': [find_input_layer_name(ctx.arena, position)],
        'kwargs': kwargs,
    })
    ctx.specs.append(spec)
    return True


def handle_max_pool(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle max_pool layer."""
    return _handle_pool(ctx, position, layer, spec, 'P.Pooling.MAX')


def handle_avg_pool(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle avg_pool layer."""
    return _handle_pool(ctx, position, layer, spec, 'P.Pooling.AVE')
