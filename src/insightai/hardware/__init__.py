"""
Hardware detection.

Provides the hardware profile schema and the host probe that fills it.
"""

from .system_info import system_info
from .hardware_inspector import HardwareInspector
from .hardware_schema import (
    HardwareProfile,
    CPU,
    GPUController,
    StorageDevice,
    StorageType,
    Subsystem,
    validate_hardware_data,
    create_hardware_profile,
)

__all__ = [
    # Probe
    "system_info",
    "HardwareInspector",

    # Schemas
    "HardwareProfile",
    "CPU",
    "GPUController",
    "StorageDevice",
    "StorageType",
    "Subsystem",

    # Helpers
    "validate_hardware_data",
    "create_hardware_profile",
]
