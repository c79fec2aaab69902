"""
Model catalog.

Descriptors for the models the engine can recommend, plus the quantization
helpers used to rank and de-duplicate them.
"""

from .catalog import (
    ModelDescriptor,
    load_catalog,
    parse_catalog,
    default_catalog,
)
from .quantization_maps import (
    normalize_quant_type,
    quantization_bonus,
    strip_size_and_quant,
)

__all__ = [
    # Catalog
    "ModelDescriptor",
    "load_catalog",
    "parse_catalog",
    "default_catalog",

    # Quantization helpers
    "normalize_quant_type",
    "quantization_bonus",
    "strip_size_and_quant",
]
