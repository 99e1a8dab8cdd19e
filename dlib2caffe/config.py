# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Converter configuration backed by an OmegaConf structured config."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .errors import ConfigError


@dataclass
class ConverterConfig:
    """Options controlling how a dlib network is written out as Caffe code."""

    # Significant digits used for every number in the generated file
    float_precision: int = 9
    # dlib nets don't commit to an input size unless input_rgb_image_sized is used
    default_input_size: int = 28
    # dlib nets don't commit to a batch size either
    batch_size: int = 1
    output_suffix: str = "_dlib_to_caffe_model.py"
    output_dir: Optional[str] = None
    log_level: str = "INFO"


def _validate(cfg: DictConfig) -> None:
    if cfg.float_precision < 1:
        raise ConfigError(f"float_precision must be >= 1, got {cfg.float_precision}")
    if cfg.default_input_size < 1:
        raise ConfigError(f"default_input_size must be >= 1, got {cfg.default_input_size}")
    if cfg.batch_size < 1:
        raise ConfigError(f"batch_size must be >= 1, got {cfg.batch_size}")
    if not cfg.output_suffix:
        raise ConfigError("output_suffix must not be empty.")
    if not isinstance(logging.getLevelName(str(cfg.log_level).upper()), int):
        raise ConfigError(f"log_level must be a logging level name such as INFO, got {cfg.log_level}")


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    overrides: Iterable[str] = (),
) -> DictConfig:
    """
    Build the converter configuration.

    Defaults come from ConverterConfig, then an optional YAML file is merged
    on top, then KEY=VALUE dotlist overrides. Unknown keys and values of the
    wrong type are rejected.
    """
    schema = OmegaConf.structured(ConverterConfig)
    layers = [schema]
    try:
        if config_file is not None:
            layers.append(OmegaConf.load(str(config_file)))
        overrides = list(overrides)
        if overrides:
            layers.append(OmegaConf.from_dotlist(overrides))
        cfg = OmegaConf.merge(*layers)
    except (OmegaConfBaseException, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid converter configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {config_file}: {exc}") from exc

    _validate(cfg)
    return cfg
