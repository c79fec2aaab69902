#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
System Information Module

Provides a simple interface to get the host's hardware profile
as a validated Pydantic BaseModel.
"""

from typing import Any, Dict

from .hardware_inspector import HardwareInspector
from .hardware_schema import HardwareProfile, Subsystem
from ..exceptions import ProbeError

MANDATORY_SUBSYSTEMS = (Subsystem.CPU, Subsystem.MEMORY)


def system_info() -> HardwareProfile:
    """
    Probe the host and return its hardware profile.

    Graphics and disk failures are tolerated: they are listed in
    profile.unavailable and the engine degrades its warnings accordingly.

    Returns:
        HardwareProfile: Validated hardware facts for this machine

    Raises:
        ProbeError: If the CPU or memory subsystem could not be read

    Example:
        >>> from insightai.hardware import system_info
        >>> hw = system_info()
        >>> print(f"CPU: {hw.cpu.display_name}")
        >>> print(f"RAM: {hw.total_ram_gb:.0f} GB")
    """
    inspector = HardwareInspector()
    hardware_data: Dict[str, Any] = inspector.inspect_all()

    profile = HardwareProfile(**hardware_data)
    failed = [s.value for s in MANDATORY_SUBSYSTEMS if s in profile.unavailable]
    if failed:
        raise ProbeError(failed)
    return profile
