"""
Model Catalog

Static, curated list of model descriptors the engine recommends from.
The bundled catalog lives in data/models.json and is loaded once per process;
callers may inject their own catalog (any sequence of ModelDescriptor) into
recommend() instead.
"""

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import CatalogError

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = "models.json"


class ModelDescriptor(BaseModel):
    """One catalog entry with its resource requirements and use-case tags."""
    id: str = Field(..., min_length=1, description="Unique catalog key")
    name: str = Field(..., description="Display name (e.g., 'Llama 3.1 8B Instruct')")
    family: str = Field("", description="Model family (e.g., 'llama')")
    size_params: str = Field("", description="Parameter count label (e.g., '8B')")
    quantization: str = Field("", description="Quantization label (e.g., 'Q4_K_M')")
    req_vram_gb: float = Field(..., gt=0, description="Minimum VRAM in GB to run fully on GPU")
    req_ram_gb: float = Field(..., gt=0, description="Minimum RAM in GB to run from system memory")
    tags: FrozenSet[str] = Field(default_factory=frozenset, description="Use-case tags (general, chat, dev, vision, ...)")
    description: Optional[str] = Field(None, description="Short human-readable summary")

    class Config:
        frozen = True


def parse_catalog(entries: List[dict], source: str = None) -> Tuple[ModelDescriptor, ...]:
    """
    Validate raw catalog entries.

    Args:
        entries: List of descriptor dictionaries
        source: Where the entries came from, for error messages

    Returns:
        Tuple of ModelDescriptor in catalog order

    Raises:
        CatalogError: If an entry is invalid or an id is duplicated
    """
    if not isinstance(entries, list):
        raise CatalogError("expected a JSON list of model descriptors", source)

    catalog = []
    seen = set()
    for index, entry in enumerate(entries):
        try:
            model = ModelDescriptor(**entry)
        except (TypeError, ValidationError) as e:
            raise CatalogError(f"entry {index} is invalid: {e}", source) from e
        if model.id in seen:
            raise CatalogError(f"duplicate model id '{model.id}'", source)
        seen.add(model.id)
        catalog.append(model)

    logger.debug(f"Loaded {len(catalog)} model descriptors from {source or 'memory'}")
    return tuple(catalog)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Tuple[ModelDescriptor, ...]:
    """
    Load a model catalog from a JSON file.

    Args:
        path: Catalog file; defaults to the bundled data/models.json

    Returns:
        Tuple of ModelDescriptor in file order

    Raises:
        CatalogError: If the file cannot be read, is not valid JSON, or
            contains invalid entries
    """
    if path is None:
        source = f"insightai/models/data/{BUNDLED_CATALOG}"
        try:
            text = resources.files(__package__).joinpath("data").joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogError(str(e), source) from e
    else:
        source = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogError(str(e), source) from e

    try:
        entries = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"not valid JSON: {e}", source) from e
    return parse_catalog(entries, source)


@lru_cache(maxsize=1)
def default_catalog() -> Tuple[ModelDescriptor, ...]:
    """The bundled catalog, loaded once and shared read-only."""
    return load_catalog()
