# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""State shared between the code generator and the per-layer handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from ..graph.model import LayerRecord


@dataclass(frozen=True)
class ParamBlob:
    """One Caffe parameter blob: flat values plus the shape Caffe stores them in."""

    layer_name: str
    slot: int
    values: np.ndarray
    shape: Tuple[int, ...]

    @property
    def numel(self) -> int:
        return int(self.values.size)


@dataclass(frozen=True)
class InputDimensions:
    """Input tensor geometry written at the top of the generated file."""

    nr: float
    nc: float
    k: int
    # True when dlib didn't record a size and the configured default is used
    defaulted: bool = False


@dataclass
class LayerBuildContext:
    """
    Mutable state passed through layer spec building.

    Handlers read the input-first layer arena and append to ``specs`` (one
    NetSpec statement per layer) and ``param_blobs`` (in emission order).
    """

    arena: Sequence[LayerRecord]
    specs: List[Dict[str, Any]] = field(default_factory=list)
    param_blobs: List[ParamBlob] = field(default_factory=list)
    # layer name -> number of parameter blobs emitted for it
    param_layers: Dict[str, int] = field(default_factory=dict)
