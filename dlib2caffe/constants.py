# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Constants used across the converter.

These define the fixed XML vocabulary written by dlib's net_to_xml() and the
defaults used when the source network does not commit to an input size.
"""

# Top level tag of every dlib network dump
ROOT_TAG = "net"

# Element wrapping each layer of the network
LAYER_TAG = "layer"

# Special values of the layer "type" attribute that do not create a layer
SKIP_LAYER_TYPE = "skip"
TAG_LAYER_TYPE = "tag"

# Only these computational layers carry learned parameters as character data
PARAM_DETAIL_NAMES = frozenset({
    "fc",
    "fc_no_bias",
    "con",
    "affine_con",
    "affine_fc",
    "affine",
    "prelu",
})

# Caffe name of the network input blob
INPUT_BLOB_NAME = "data"

# Input detail names and the number of channels they feed
INPUT_CHANNELS = {
    "input_rgb_image": 3,
    "input_rgb_image_sized": 3,
    "input": 1,
}

# Input layers that record their own nr/nc attributes
SIZED_INPUT_DETAIL_NAMES = frozenset({"input_rgb_image_sized"})
