#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Hardware Schema Definitions

Pydantic BaseModel schemas describing the host machine as seen by the
recommendation engine. A HardwareProfile is produced by the probe in
hardware_inspector.py (or built by hand for tests and mock hardware) and is
read-only for the rest of an analysis run.

Fields the probe could not read stay None and the subsystem is listed in
HardwareProfile.unavailable. Only the CPU and total RAM are mandatory for
evaluation; see HardwareProfile.require_complete().
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..exceptions import HardwareProfileError

BYTES_PER_GB = 1024 ** 3
MIB_PER_GB = 1024


class StorageType(str, Enum):
    """Storage medium reported for a physical disk."""
    SSD = "SSD"
    NVME = "NVMe"
    HDD = "HDD"
    OTHER = "other"


class Subsystem(str, Enum):
    """Probe subsystems that can fail independently."""
    CPU = "cpu"
    MEMORY = "memory"
    GRAPHICS = "graphics"
    DISK = "disk"


class CPU(BaseModel):
    """CPU identification."""
    manufacturer: str = Field(..., description="CPU vendor (e.g., 'Apple', 'Intel', 'AMD')")
    brand: str = Field("", description="CPU brand/model string (e.g., 'M3', 'Core i9-13900K')")

    class Config:
        frozen = True

    @property
    def display_name(self) -> str:
        """Vendor and brand joined without repeating the vendor."""
        if not self.brand:
            return self.manufacturer
        if self.brand.lower().startswith(self.manufacturer.lower()):
            return self.brand
        return f"{self.manufacturer} {self.brand}"


class GPUController(BaseModel):
    """A graphics controller and its dedicated memory."""
    model: str = Field(..., description="GPU model name (e.g., 'NVIDIA GeForce RTX 4090')")
    vram_mib: Optional[float] = Field(None, ge=0, description="Dedicated VRAM in mebibytes, None if unknown")

    class Config:
        frozen = True

    @property
    def is_nvidia(self) -> bool:
        return "nvidia" in self.model.lower()


class StorageDevice(BaseModel):
    """A physical storage device."""
    type: StorageType = Field(StorageType.OTHER, description="Storage medium")
    size_bytes: float = Field(0, ge=0, description="Device capacity in bytes")

    class Config:
        frozen = True

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        # Probes report free-form strings ('SSD/NVMe', 'Unspecified', ...)
        if isinstance(value, StorageType):
            return value
        text = str(value or "").strip().lower()
        if "nvme" in text:
            return StorageType.NVME
        if "ssd" in text or "solid" in text:
            return StorageType.SSD
        if "hdd" in text or "rotational" in text:
            return StorageType.HDD
        return StorageType.OTHER


class HardwareProfile(BaseModel):
    """
    Normalized hardware facts for one analysis run.

    This schema is the only hardware input of the recommendation engine.
    Capacity helpers convert raw units once so every component compares the
    same numbers.
    """
    cpu: Optional[CPU] = Field(None, description="CPU identification (mandatory for evaluation)")
    total_ram_bytes: Optional[int] = Field(None, ge=0, description="Total system RAM in bytes (mandatory for evaluation)")
    gpu_controllers: List[GPUController] = Field(default_factory=list, description="Graphics controllers in probe order")
    storage_devices: List[StorageDevice] = Field(default_factory=list, description="Physical storage devices in probe order")
    unavailable: List[Subsystem] = Field(default_factory=list, description="Subsystems the probe could not read")

    class Config:
        frozen = True

    @property
    def total_ram_gb(self) -> float:
        return (self.total_ram_bytes or 0) / BYTES_PER_GB

    @property
    def total_vram_gb(self) -> float:
        """Summed VRAM over all controllers with a known value."""
        return sum(gpu.vram_mib for gpu in self.gpu_controllers if gpu.vram_mib is not None) / MIB_PER_GB

    @property
    def is_apple_silicon(self) -> bool:
        # Case-sensitive on purpose: probes report the vendor as "Apple"
        return self.cpu is not None and "Apple" in self.cpu.manufacturer

    @property
    def has_nvidia(self) -> bool:
        return any(gpu.is_nvidia for gpu in self.gpu_controllers)

    @property
    def has_ssd(self) -> bool:
        return any(d.type in (StorageType.SSD, StorageType.NVME) for d in self.storage_devices)

    @property
    def storage_known(self) -> bool:
        return bool(self.storage_devices) and Subsystem.DISK not in self.unavailable

    def missing_required_fields(self) -> List[str]:
        missing = []
        if self.cpu is None:
            missing.append("cpu")
        if self.total_ram_bytes is None:
            missing.append("total_ram_bytes")
        return missing

    def require_complete(self) -> "HardwareProfile":
        """
        Ensure the mandatory fields are present.

        Returns:
            The profile itself, for chaining

        Raises:
            HardwareProfileError: If cpu or total_ram_bytes is missing
        """
        missing = self.missing_required_fields()
        if missing:
            raise HardwareProfileError(missing, [s.value for s in self.unavailable])
        return self


def validate_hardware_data(data: Dict[str, Any]) -> HardwareProfile:
    """
    Validate raw probe data against the schema.

    Args:
        data: Dictionary with cpu, total_ram_bytes, gpu_controllers,
            storage_devices and unavailable keys

    Returns:
        Validated HardwareProfile instance

    Raises:
        ValidationError: If data doesn't match the schema
    """
    return HardwareProfile(**data)


def create_hardware_profile(**kwargs) -> HardwareProfile:
    """
    Create a HardwareProfile instance with the given data.

    Handy for mock hardware:
        >>> create_hardware_profile(cpu={"manufacturer": "Apple", "brand": "M3"},
        ...                         total_ram_bytes=32 * 1024**3)
    """
    return HardwareProfile(**kwargs)
