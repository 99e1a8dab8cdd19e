# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Caffe code generator for parsed dlib networks.

Walks a LayerGraph from the input layer to the last computational layer,
dispatching every layer to its handler in ``dlib2caffe.layers``, and renders
the result through a Mako template into a Python script that builds the
equivalent Caffe network and loads its weights.

Usage:
    generator = CaffeCodeGenerator(parse_net_xml("net.xml"))
    source = generator.render()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np
from mako.lookup import TemplateLookup
from omegaconf import DictConfig

from ..config import load_config
from ..constants import INPUT_CHANNELS, SIZED_INPUT_DETAIL_NAMES
from ..errors import MissingAttributeError, StructuralError, UnsupportedLayerError
from ..graph.model import LayerGraph, LayerKind, LayerRecord
from ..layers import LAYER_HANDLERS, REQUIRED_ATTRIBUTES
from .context import InputDimensions, LayerBuildContext, ParamBlob
from .formatting import format_array, format_call_args, format_number, format_shape

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
NETSPEC_TEMPLATE = "caffe_netspec.py.mako"


class CaffeCodeGenerator:
    """Turns one LayerGraph into Caffe NetSpec Python source."""

    def __init__(self, graph: LayerGraph, config: Optional[DictConfig] = None):
        self.graph = graph
        self.config = config if config is not None else load_config()
        self.layer_specs: list = []
        self.param_blobs: list = []
        self._specs_ready = False
        self._input_dims: Optional[InputDimensions] = None

    # ---------------------------------------------------------------------
    # Input geometry
    # ---------------------------------------------------------------------

    def input_dimensions(self) -> InputDimensions:
        if self._input_dims is None:
            self._input_dims = self._compute_input_dimensions()
        return self._input_dims

    def _compute_input_dimensions(self) -> InputDimensions:
        input_layer = self.graph.input_layer
        name = input_layer.detail_name
        if name not in INPUT_CHANNELS:
            raise UnsupportedLayerError(f"No known transformation from dlib's {name} layer to caffe.")

        if name in SIZED_INPUT_DETAIL_NAMES:
            return InputDimensions(
                nr=input_layer.attribute("nr"),
                nc=input_layer.attribute("nc"),
                k=INPUT_CHANNELS[name],
            )

        size = int(self.config.default_input_size)
        logger.warning(
            "The source dlib network didn't commit to a specific input size, using %dx%d.", size, size
        )
        return InputDimensions(nr=size, nc=size, k=INPUT_CHANNELS[name], defaulted=True)

    # ---------------------------------------------------------------------
    # Layer specs
    # ---------------------------------------------------------------------

    def build_layer_specs(self) -> LayerBuildContext:
        """Run every computational layer through its handler, input layer first."""
        arena = self.graph.forward()
        ctx = LayerBuildContext(arena=arena)

        for position, layer in enumerate(arena):
            # input and loss layers have no Caffe statement of their own
            if layer.kind in (LayerKind.INPUT, LayerKind.LOSS):
                continue

            handler = LAYER_HANDLERS.get(layer.detail_name)
            if handler is None:
                raise UnsupportedLayerError(
                    f"No known transformation from dlib's {layer.detail_name} layer to caffe."
                )
            self._check_required_attributes(layer)

            spec: Dict[str, Any] = {
                'name': layer.caffe_name,
                'detail_name': layer.detail_name,
                'position': position,
            }
            handler(self, ctx, position, layer, spec)
            logger.debug("Built %s -> %s", layer.caffe_name, spec.get('caffe_type'))

        self.layer_specs = ctx.specs
        self.param_blobs = ctx.param_blobs
        self._specs_ready = True
        return ctx

    def _check_required_attributes(self, layer: LayerRecord) -> None:
        missing = [key for key in REQUIRED_ATTRIBUTES.get(layer.detail_name, ()) if key not in layer.attributes]
        if missing:
            raise MissingAttributeError(
                f"Layer {layer.detail_name} (idx {layer.sequence_index}) doesn't have the "
                f"requested attribute(s): {', '.join(missing)}."
            )

    def require_params(self, layer: LayerRecord, min_rows: int = 1) -> np.ndarray:
        """Return the layer's parameter matrix or fail if it is absent or too short."""
        params = layer.params
        if params is None or params.size == 0:
            raise StructuralError(f"{layer.caffe_name} has no parameters in the XML file.")
        if params.shape[0] < min_rows:
            raise StructuralError(
                f"{layer.caffe_name} needs at least {min_rows} parameter rows, got {params.shape[0]}."
            )
        return params

    def add_param_blob(
        self,
        ctx: LayerBuildContext,
        layer: LayerRecord,
        values: np.ndarray,
        shape: Sequence[int],
    ) -> ParamBlob:
        """Queue one parameter blob of ``layer`` for set_network_weights()."""
        values = np.ascontiguousarray(values, dtype=np.float64).ravel()
        shape = tuple(int(dim) for dim in shape)
        if values.size != int(np.prod(shape)):
            raise StructuralError(
                f"{layer.caffe_name}: {values.size} parameter values cannot be reshaped to {shape}."
            )
        name = layer.caffe_name
        slot = ctx.param_layers.get(name, 0)
        blob = ParamBlob(layer_name=name, slot=slot, values=values, shape=shape)
        ctx.param_blobs.append(blob)
        ctx.param_layers[name] = slot + 1
        return blob

    # ---------------------------------------------------------------------
    # Rendering
    # ---------------------------------------------------------------------

    def render(self) -> str:
        """Render the complete generated script as a string."""
        input_dims = self.input_dimensions()
        if not self._specs_ready:
            self.build_layer_specs()

        precision = int(self.config.float_precision)
        lookup = TemplateLookup(directories=[str(TEMPLATE_DIR)], input_encoding='utf-8')
        template = lookup.get_template(NETSPEC_TEMPLATE)
        return template.render(
            batch_size=int(self.config.batch_size),
            input_dims=input_dims,
            layer_specs=self.layer_specs,
            param_blobs=self.param_blobs,
            fmt=lambda value: format_number(value, precision),
            call_args=lambda spec: format_call_args(spec, precision),
            array=lambda values: format_array(values, precision),
            shape=format_shape,
        )
