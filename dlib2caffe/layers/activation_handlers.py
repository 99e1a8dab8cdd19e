# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Activation layer handlers."""

from __future__ import annotations

from typing import Any, Dict

from ..graph.model import LayerRecord
from ..graph.resolver import find_input_layer_name
from .support_registry import CAFFE_LAYER_TYPES


def handle_relu(
    generator: Any,
    ctx: Any,
    position: int,
    layer: LayerRecord,
    spec: Dict[str, Any],
) -> bool:
    """Handle relu layer."""
    spec.update({
        'caffe_type': CAFFE_LAYER_TYPES['relu'],
        'inputs': [find_input_layer_name(ctx.arena, position)],
        'kwargs': [],
    })
    ctx.specs.append(spec)
    return True
