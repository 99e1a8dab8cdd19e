# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Resolution of the layer a given layer reads its input from."""

from __future__ import annotations

from typing import Optional, Sequence

from ..errors import StructuralError
from .model import LayerRecord


def find_layer(
    arena: Sequence[LayerRecord],
    position: int,
    tag_id: Optional[int] = None,
) -> LayerRecord:
    """
    Return the record that layer ``arena[position]`` refers to.

    ``arena`` is ordered input-first (LayerGraph.forward()). With no tag_id
    the reference is the immediate predecessor. Otherwise the arena is
    scanned backward and the nearest earlier record tagged ``tag_id`` wins;
    reaching the input layer without a match is an error.
    """
    if position < 1 or position >= len(arena):
        raise ValueError(f"Position {position} has no preceding layer in an arena of {len(arena)} layers.")

    if tag_id is None:
        return arena[position - 1]

    for i in range(position - 1, -1, -1):
        candidate = arena[i]
        if candidate.tag_id == tag_id:
            return candidate
        if candidate.is_input:
            break
    raise StructuralError(
        "Network definition is bad, a layer wanted to skip back to a non-existing layer "
        f"(tag {tag_id}, referenced from {arena[position].caffe_name})."
    )


def find_layer_name(
    arena: Sequence[LayerRecord],
    position: int,
    tag_id: Optional[int] = None,
) -> str:
    return find_layer(arena, position, tag_id).caffe_name


def find_input_layer_name(arena: Sequence[LayerRecord], position: int) -> str:
    """Caffe name of the blob feeding ``arena[position]``, honoring its skip_id."""
    return find_layer_name(arena, position, arena[position].skip_id)
