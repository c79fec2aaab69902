"""
Engine Thresholds

Every tunable number used by the recommendation engine, in one table.
The values are a tuned heuristic; override them with load_thresholds() rather
than editing the control flow.
"""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class Thresholds(BaseModel):
    """Named configuration table for classification, fit and ranking."""

    # Unified memory (Apple Silicon)
    unified_usable_fraction: float = Field(0.80, gt=0, le=1, description="Share of RAM usable by models; the rest is OS/kernel reservation")
    unified_best: float = Field(1.6, description="Headroom for BEST on unified memory")
    unified_good: float = Field(1.2, description="Headroom for GOOD on unified memory")
    unified_min: float = Field(1.0, description="Headroom for BAD on unified memory")

    # Discrete GPU
    discrete_best_desktop: float = Field(1.4, description="VRAM headroom for BEST on a desktop")
    discrete_best_laptop: float = Field(1.6, description="VRAM headroom for BEST on a laptop (thermal throttling margin)")
    discrete_good: float = Field(1.15, description="VRAM headroom for GOOD")
    discrete_min: float = Field(1.0, description="VRAM headroom for BAD")
    offload_ram_margin_gb: float = Field(8.0, ge=0, description="Extra RAM over req_ram_gb needed to offload a model that misses VRAM")

    # CPU-only
    cpu_only_max_vram_gb: float = Field(8.0, description="Largest req_vram_gb offered for CPU inference")
    cpu_only_ram_multiplier: float = Field(2.0, gt=0, description="RAM must be this multiple of req_ram_gb for CPU inference")

    # System score
    critical_ram_gb: float = Field(8.0, description="Below this much RAM the system score is forced to zero")
    rank_best_score: int = Field(80, description="System score for the Best rank")
    rank_good_score: int = Field(40, description="System score for the Good rank")

    # Display caps per tier
    max_best: int = Field(6, ge=0)
    max_good: int = Field(6, ge=0)
    max_bad: int = Field(5, ge=0)

    class Config:
        frozen = True
        extra = "forbid"


DEFAULT_THRESHOLDS = Thresholds()


def load_thresholds(path: Union[str, Path]) -> Thresholds:
    """
    Load threshold overrides from a JSON object.

    Keys that are not present keep their default value.

    Args:
        path: JSON file with a subset of Thresholds fields

    Returns:
        Thresholds instance

    Raises:
        ValueError: If the file is not valid JSON or names an unknown field
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        overrides = json.loads(text)
        thresholds = Thresholds(**overrides)
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        raise ValueError(f"Invalid thresholds file {path}: {e}") from e
    logger.info(f"Loaded threshold overrides from {path}: {sorted(overrides)}")
    return thresholds
