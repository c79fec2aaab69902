"""
Insight AI - Hardware-aware local LLM recommendations.

Submodules:
    - insightai.hardware: Hardware profile schema and host probe
    - insightai.models: Model catalog and quantization helpers
    - insightai.engine: Classification, fit evaluation and ranking
"""

# Import submodules for namespace access (ia.hardware.system_info())
from . import hardware
from . import models
from . import engine

# Top-level convenience exports (most common operations)
from .hardware import system_info, HardwareProfile, create_hardware_profile
from .models import ModelDescriptor, load_catalog, default_catalog
from .engine import (
    recommend,
    analyze,
    UserDeclaration,
    RecommendationResult,
    Thresholds,
    DEFAULT_THRESHOLDS,
)
from .exceptions import HardwareProfileError, ProbeError, CatalogError, HardwareClaimError

__version__ = "0.1.0"

__all__ = [
    # Submodules
    "hardware",
    "models",
    "engine",

    # Primary API
    "recommend",
    "analyze",
    "system_info",
    "load_catalog",
    "default_catalog",
    "create_hardware_profile",

    # Types
    "HardwareProfile",
    "ModelDescriptor",
    "UserDeclaration",
    "RecommendationResult",
    "Thresholds",
    "DEFAULT_THRESHOLDS",

    # Exceptions
    "HardwareProfileError",
    "ProbeError",
    "CatalogError",
    "HardwareClaimError",
]
