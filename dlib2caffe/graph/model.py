# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Layer records and the immutable layer arena shared by all conversion stages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Sequence, Tuple

import numpy as np

from ..constants import INPUT_BLOB_NAME
from ..errors import MissingAttributeError, StructuralError


class LayerKind(str, Enum):
    """Coarse layer type, taken from the ``type`` attribute of a ``layer`` element."""

    INPUT = "input"
    COMPUTATIONAL = "comp"
    LOSS = "loss"

    @classmethod
    def parse(cls, value: str) -> "LayerKind":
        try:
            return cls(value)
        except ValueError:
            raise StructuralError(
                f"Unknown layer type '{value}'. Expected one of: "
                + ", ".join(kind.value for kind in cls)
            ) from None


@dataclass
class LayerRecord:
    """One parsed node of a dlib network."""

    kind: LayerKind
    sequence_index: int
    # Name of the tag nested in the layer tag, e.g. fc, con, max_pool, input_rgb_image
    detail_name: str = ""
    attributes: Dict[str, float] = field(default_factory=dict)
    params: Optional[np.ndarray] = None
    # Set when the layer was wrapped in tagN<>, e.g. tag2<> gives tag_id == 2
    tag_id: Optional[int] = None
    # Set when the layer reads from the most recent layer with tag_id == skip_id
    # rather than from its immediate predecessor
    skip_id: Optional[int] = None

    def attribute(self, key: str) -> float:
        try:
            return self.attributes[key]
        except KeyError:
            raise MissingAttributeError(
                f"Layer {self.detail_name or '<unnamed>'} (idx {self.sequence_index}) "
                f"doesn't have the requested attribute '{key}'."
            ) from None

    def int_attribute(self, key: str) -> int:
        """Attribute that must hold a whole number, e.g. num_filters or tag."""
        value = self.attribute(key)
        if not math.isfinite(value) or value != int(value):
            raise StructuralError(
                f"Attribute '{key}' of layer {self.detail_name} (idx {self.sequence_index}) "
                f"must be an integer, got {value}."
            )
        return int(value)

    @property
    def caffe_name(self) -> str:
        if self.kind is LayerKind.INPUT:
            return INPUT_BLOB_NAME
        return f"{self.detail_name}{self.sequence_index}"

    @property
    def is_input(self) -> bool:
        return self.kind is LayerKind.INPUT


class LayerGraph:
    """
    Ordered, read-only collection of layer records.

    Records are kept in document order, which for dlib dumps is output-first
    and input-last. ``forward()`` exposes the same records input-first; that
    tuple is the arena the resolver and the code generator index into.
    """

    def __init__(self, records: Sequence[LayerRecord]):
        records = tuple(records)
        if not records:
            raise StructuralError("No layers found in XML file!")
        if not records[-1].is_input:
            raise StructuralError("The network in the XML file is missing an input layer!")
        input_count = sum(1 for record in records if record.is_input)
        if input_count > 1:
            raise StructuralError(
                f"The network in the XML file has {input_count} input layers, expected exactly one."
            )
        self._records: Tuple[LayerRecord, ...] = records
        self._forward: Tuple[LayerRecord, ...] = tuple(reversed(records))

    @property
    def records(self) -> Tuple[LayerRecord, ...]:
        return self._records

    @property
    def input_layer(self) -> LayerRecord:
        return self._records[-1]

    def forward(self) -> Tuple[LayerRecord, ...]:
        return self._forward

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LayerRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> LayerRecord:
        return self._records[index]
