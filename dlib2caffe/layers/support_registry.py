# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Shared metadata about which dlib layers can be converted to Caffe."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple


# dlib detail names the converter emits a Caffe layer for.
SUPPORTED_LAYER_TYPES: Sequence[str] = (
    "con",
    "relu",
    "max_pool",
    "avg_pool",
    "fc",
    "fc_no_bias",
    "affine_con",
    "affine_fc",
    "add_prev",
)


# dlib input layers and the input geometry they imply.
SUPPORTED_INPUT_TYPES: Sequence[str] = (
    "input_rgb_image",
    "input_rgb_image_sized",
    "input",
)


# Mapping from dlib detail name to the Caffe layer emitted for it.
CAFFE_LAYER_TYPES: Dict[str, str] = {
    "con": "Convolution",
    "relu": "ReLU",
    "max_pool": "Pooling",
    "avg_pool": "Pooling",
    "fc": "InnerProduct",
    "fc_no_bias": "InnerProduct",
    "affine_con": "Scale",
    "affine_fc": "Scale",
    "add_prev": "Eltwise",
}


# Attributes a layer must carry before its handler runs.
REQUIRED_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    "con": ("num_filters", "nc", "nr", "stride_x", "stride_y", "padding_x", "padding_y"),
    "relu": (),
    "max_pool": ("nc", "nr", "stride_x", "stride_y", "padding_x", "padding_y"),
    "avg_pool": ("nc", "nr", "stride_x", "stride_y", "padding_x", "padding_y"),
    "fc": ("num_outputs",),
    "fc_no_bias": ("num_outputs",),
    "bn_con": (),
    "bn_fc": (),
    "affine_con": (),
    "affine_fc": (),
    "add_prev": ("tag",),
}


# Known dlib layers that are rejected, with migration guidance.
REPLACEMENT_SUGGESTIONS: Dict[str, str] = {
    "bn_con": (
        "Conversion from dlib's batch norm layers to caffe's isn't supported. Instead, "
        "you should put your network into 'test mode' by switching batch norm layers to affine layers."
    ),
    "bn_fc": (
        "Conversion from dlib's batch norm layers to caffe's isn't supported. Instead, "
        "you should put your network into 'test mode' by switching batch norm layers to affine layers."
    ),
}


def get_supported_layer_types() -> List[str]:
    return list(SUPPORTED_LAYER_TYPES)


def get_supported_input_types() -> List[str]:
    return list(SUPPORTED_INPUT_TYPES)


def get_replacement_suggestion(detail_name: str) -> str:
    return REPLACEMENT_SUGGESTIONS.get(detail_name, "")
