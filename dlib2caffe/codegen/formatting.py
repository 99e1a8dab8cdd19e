# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Python literal formatting for values written into the generated Caffe script."""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

import numpy as np


class CaffeSymbol(str):
    """A Caffe name written verbatim, e.g. ``P.Pooling.MAX``."""


def format_number(value: Any, precision: int = 9) -> str:
    if isinstance(value, (bool, np.bool_)):
        return "True" if value else "False"
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    value = float(value)
    if not math.isfinite(value):
        return f"float('{value}')"
    return format(value, f".{precision}g")


def format_value(value: Any, precision: int = 9) -> str:
    if isinstance(value, CaffeSymbol):
        return str(value)
    if isinstance(value, str):
        return repr(value)
    return format_number(value, precision)


def format_array(values: Iterable[Any], precision: int = 9) -> str:
    """Render values as a float32 numpy array literal."""
    body = ",".join(format_number(v, precision) for v in np.asarray(values, dtype=np.float64).ravel())
    return f"np.array([{body}], dtype='float32')"


def format_shape(shape: Sequence[int]) -> str:
    return repr(tuple(int(dim) for dim in shape))


def format_call_args(spec: dict, precision: int = 9) -> str:
    """Argument list of one ``L.<Type>(...)`` NetSpec call."""
    args = [f"n.{name}" for name in spec.get("inputs", [])]
    args.extend(f"{key}={format_value(value, precision)}" for key, value in spec.get("kwargs", []))
    return ", ".join(args)
