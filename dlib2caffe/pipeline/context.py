# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Per-document state for the conversion pipeline runner."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import DictConfig

from ..codegen.generator import CaffeCodeGenerator
from ..graph.model import LayerGraph


@dataclass
class PipelineContext:
    """Runtime context shared across the passes converting one XML file."""

    source_path: Path
    config: DictConfig
    output_path: Optional[Path] = None
    graph: Optional[LayerGraph] = None
    generator: Optional[CaffeCodeGenerator] = None
    artifact: Optional[str] = None
    diagnostics: Dict[str, Any] = field(default_factory=dict)
    stage_timings: Dict[str, float] = field(default_factory=dict)
    stage_order: List[str] = field(default_factory=list)

    def add_timing(self, stage_name: str, elapsed_s: float) -> None:
        """Record elapsed time for one stage."""
        self.stage_timings[stage_name] = elapsed_s
        self.stage_order.append(stage_name)
