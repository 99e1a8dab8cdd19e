# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for dlib -> Caffe conversion."""


class ConversionError(ValueError):
    """Base class for every error that aborts the conversion of one document."""


class StructuralError(ConversionError):
    """Raised when the XML document does not describe a well-formed dlib network."""


class UnsupportedLayerError(ConversionError):
    """Raised when a layer has no Caffe equivalent the converter can emit."""


class MissingAttributeError(ConversionError):
    """Raised when a layer lacks an attribute its conversion requires."""


class ConfigError(ConversionError):
    """Raised when converter configuration is invalid."""
