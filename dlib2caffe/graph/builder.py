# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Event-driven construction of a LayerGraph from a dlib ``net_to_xml()`` dump.

NetGraphBuilder consumes document-order element events and knows nothing
about where they come from; parse_net_xml() feeds it from lxml's iterparse.

A dlib dump lists layers output-first. Two layer types never become records:

- ``<layer type="tag" id="N">`` marks the next ordinary layer with tag_id N.
- ``<layer type="skip" id="N">`` makes the previously completed layer read
  its input from the nearest layer tagged N instead of its predecessor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, List, Mapping, Optional, Union

import numpy as np
from lxml import etree

from ..constants import (
    LAYER_TAG,
    PARAM_DETAIL_NAMES,
    ROOT_TAG,
    SKIP_LAYER_TYPE,
    TAG_LAYER_TYPE,
)
from ..errors import StructuralError
from .model import LayerGraph, LayerKind, LayerRecord

logger = logging.getLogger(__name__)


def _int_attribute(attrs: Mapping[str, str], key: str, element: str) -> int:
    value = attrs.get(key)
    if value is None:
        raise StructuralError(f"A '{element}' element is missing its '{key}' attribute.")
    try:
        return int(value.strip())
    except ValueError:
        raise StructuralError(
            f"Attribute '{key}' of a '{element}' element must be an integer, got '{value}'."
        ) from None


def _float_attributes(attrs: Mapping[str, str], element: str) -> dict:
    parsed = {}
    for key, value in attrs.items():
        try:
            parsed[key] = float(value)
        except ValueError:
            raise StructuralError(
                f"Attribute '{key}' of '{element}' must be numeric, got '{value}'."
            ) from None
    return parsed


def parse_param_matrix(text: str, element: str = "") -> np.ndarray:
    """Parse newline-separated rows of whitespace-separated numbers into a 2-D array."""
    rows = [line.split() for line in text.splitlines() if line.strip()]
    widths = {len(row) for row in rows}
    if len(widths) > 1:
        raise StructuralError(
            f"The parameters of '{element}' have rows of different lengths: {sorted(widths)}."
        )
    try:
        return np.array(rows, dtype=np.float64).reshape(len(rows), -1)
    except ValueError as exc:
        raise StructuralError(f"Unable to parse the parameters of '{element}': {exc}") from exc


class NetGraphBuilder:
    """Builds the ordered layer list from XML element events."""

    def __init__(self) -> None:
        self.start_document()

    def start_document(self) -> None:
        self.layers: List[LayerRecord] = []
        self.seen_first_tag = False
        self.next_layer: Optional[LayerRecord] = None
        self.current_tag: List[str] = []
        self.pending_tag_id: Optional[int] = None
        self._param_text: List[str] = []

    def start_element(self, name: str, attrs: Mapping[str, str]) -> None:
        if not self.seen_first_tag:
            if name != ROOT_TAG:
                raise StructuralError(f"The top level XML tag must be a '{ROOT_TAG}' tag.")
            self.seen_first_tag = True

        if name == LAYER_TAG:
            self.next_layer = None
            layer_type = attrs.get("type", "")
            if layer_type == SKIP_LAYER_TYPE:
                if not self.layers:
                    raise StructuralError(
                        "A skip layer was found as the first layer, "
                        "but the first layer should be an input layer."
                    )
                self.layers[-1].skip_id = _int_attribute(attrs, "id", LAYER_TAG)
            elif layer_type == TAG_LAYER_TYPE:
                self.pending_tag_id = _int_attribute(attrs, "id", LAYER_TAG)
            else:
                self.next_layer = LayerRecord(
                    kind=LayerKind.parse(layer_type),
                    sequence_index=_int_attribute(attrs, "idx", LAYER_TAG),
                )
                if self.pending_tag_id is not None:
                    self.next_layer.tag_id = self.pending_tag_id
                    self.pending_tag_id = None
        elif self.current_tag and self.current_tag[-1] == LAYER_TAG:
            if self.next_layer is not None:
                self.next_layer.detail_name = name
                self.next_layer.attributes = _float_attributes(attrs, name)

        if name in PARAM_DETAIL_NAMES:
            self._param_text = []
        self.current_tag.append(name)

    def characters(self, data: str) -> None:
        if not self.current_tag:
            return
        if self.current_tag[-1] in PARAM_DETAIL_NAMES:
            self._param_text.append(data)

    def end_element(self, name: str) -> None:
        top = self.current_tag.pop()
        if top in PARAM_DETAIL_NAMES:
            text = "".join(self._param_text)
            self._param_text = []
            if text.strip() and self.next_layer is not None:
                self.next_layer.params = parse_param_matrix(text, top)

        if name == LAYER_TAG and self.next_layer is not None:
            self.layers.append(self.next_layer)
            self.next_layer = None

    def end_document(self) -> LayerGraph:
        graph = LayerGraph(self.layers)
        logger.debug("Parsed %d layers, input layer is '%s'", len(graph), graph.input_layer.detail_name)
        return graph


def parse_net_xml(source: Union[str, Path, IO[bytes]]) -> LayerGraph:
    """
    Parse a dlib network XML file (path or binary file object) into a LayerGraph.

    Element text is delivered to the builder just before the element closes,
    when lxml guarantees it is complete.
    """
    if isinstance(source, Path):
        source = str(source)

    builder = NetGraphBuilder()
    try:
        for event, elem in etree.iterparse(
            source,
            events=("start", "end"),
            remove_comments=True,
            remove_pis=True,
            huge_tree=True,
        ):
            if event == "start":
                builder.start_element(elem.tag, dict(elem.attrib))
            else:
                if elem.text:
                    builder.characters(elem.text)
                builder.end_element(elem.tag)
                elem.clear()
    except etree.XMLSyntaxError as exc:
        raise StructuralError(f"Malformed XML: {exc}") from exc
    return builder.end_document()
