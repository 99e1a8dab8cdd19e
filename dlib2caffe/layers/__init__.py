# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Per-layer handlers turning dlib layers into Caffe NetSpec statements and blobs."""

from .activation_handlers import handle_relu
from .conv_handlers import handle_con
from .elementwise_handlers import handle_add_prev
from .linear_handlers import handle_fc, handle_fc_no_bias
from .norm_handlers import handle_affine_con, handle_affine_fc, handle_batch_norm
from .pool_handlers import handle_avg_pool, handle_max_pool
from .support_registry import (
    CAFFE_LAYER_TYPES,
    REPLACEMENT_SUGGESTIONS,
    REQUIRED_ATTRIBUTES,
    SUPPORTED_INPUT_TYPES,
    SUPPORTED_LAYER_TYPES,
    get_replacement_suggestion,
    get_supported_input_types,
    get_supported_layer_types,
)

# dlib detail name -> handler(generator, ctx, position, layer, spec)
LAYER_HANDLERS = {
    "con": handle_con,
    "relu": handle_relu,
    "max_pool": handle_max_pool,
    "avg_pool": handle_avg_pool,
    "fc": handle_fc,
    "fc_no_bias": handle_fc_no_bias,
    "bn_con": handle_batch_norm,
    "bn_fc": handle_batch_norm,
    "affine_con": handle_affine_con,
    "affine_fc": handle_affine_fc,
    "add_prev": handle_add_prev,
}

__all__ = [
    "LAYER_HANDLERS",
    "CAFFE_LAYER_TYPES",
    "REPLACEMENT_SUGGESTIONS",
    "REQUIRED_ATTRIBUTES",
    "SUPPORTED_INPUT_TYPES",
    "SUPPORTED_LAYER_TYPES",
    "get_replacement_suggestion",
    "get_supported_input_types",
    "get_supported_layer_types",
    "handle_relu",
    "handle_con",
    "handle_add_prev",
    "handle_fc",
    "handle_fc_no_bias",
    "handle_affine_con",
    "handle_affine_fc",
    "handle_batch_norm",
    "handle_avg_pool",
    "handle_max_pool",
]
