# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Code generation for the Caffe NetSpec output dialect.

The generator itself lives in ``dlib2caffe.codegen.generator``; it imports
the layer handlers, which in turn use the leaf modules exported here.
"""

from .context import InputDimensions, LayerBuildContext, ParamBlob
from .formatting import (
    CaffeSymbol,
    format_array,
    format_call_args,
    format_number,
    format_shape,
    format_value,
)

__all__ = [
    "InputDimensions",
    "LayerBuildContext",
    "ParamBlob",
    "CaffeSymbol",
    "format_array",
    "format_call_args",
    "format_number",
    "format_shape",
    "format_value",
]
