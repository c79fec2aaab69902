"""
Architecture Classifier

Decides which memory model governs a machine:

- unified: CPU, GPU and Neural Engine share one RAM pool (Apple Silicon).
  Usable capacity is a fixed fraction of total RAM.
- discrete_gpu: a separate NVIDIA VRAM pool is the hard ceiling; system RAM
  only matters as a slow offload fallback.
- cpu_only: no usable GPU pool; inference runs from system RAM.
"""

from dataclasses import dataclass
from enum import Enum

from ..hardware.hardware_schema import HardwareProfile
from .thresholds import DEFAULT_THRESHOLDS, Thresholds


class MemoryArchitecture(str, Enum):
    UNIFIED = "unified"
    DISCRETE_GPU = "discrete_gpu"
    CPU_ONLY = "cpu_only"


@dataclass(frozen=True)
class Classification:
    """Result of classify()."""

    kind: MemoryArchitecture
    usable_capacity_gb: float   # unified: RAM x fraction, discrete: VRAM, cpu_only: RAM
    vram_unknown: bool = False  # NVIDIA GPU present but no VRAM figure could be read


def classify(profile: HardwareProfile, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Classification:
    """
    Classify the memory architecture of a hardware profile.

    Args:
        profile: Complete hardware profile
        thresholds: Engine thresholds (unified_usable_fraction)

    Returns:
        Classification with the architecture kind and usable capacity in GB

    Raises:
        HardwareProfileError: If cpu or total_ram_bytes is missing
    """
    profile.require_complete()

    if profile.is_apple_silicon:
        return Classification(
            kind=MemoryArchitecture.UNIFIED,
            usable_capacity_gb=profile.total_ram_gb * thresholds.unified_usable_fraction,
        )

    nvidia = [gpu for gpu in profile.gpu_controllers if gpu.is_nvidia]
    if nvidia:
        if any(gpu.vram_mib is not None for gpu in nvidia):
            return Classification(
                kind=MemoryArchitecture.DISCRETE_GPU,
                usable_capacity_gb=profile.total_vram_gb,
            )
        # VRAM unknown is shared memory, not zero
        return Classification(
            kind=MemoryArchitecture.CPU_ONLY,
            usable_capacity_gb=profile.total_ram_gb,
            vram_unknown=True,
        )

    return Classification(
        kind=MemoryArchitecture.CPU_ONLY,
        usable_capacity_gb=profile.total_ram_gb,
    )
