"""
System Scoring

Top-line capability score and rank for the whole machine, plus the hardware
quality warnings shown next to the recommendations. The rank summarizes the
machine; it never gates per-model evaluation.
"""

from dataclasses import dataclass, field
from typing import List

from ..hardware.hardware_schema import HardwareProfile, Subsystem
from .architecture import Classification
from .schema import FormFactor, SystemRank
from .thresholds import DEFAULT_THRESHOLDS, Thresholds

# (minimum GB, bonus) pairs; unified bonuses stack, VRAM bonuses take the first match
UNIFIED_RAM_BONUSES = ((16, 20), (32, 30), (64, 20))
NVIDIA_VRAM_BONUSES = ((24, 50), (16, 40), (12, 30), (8, 15))

UNIFIED_BASE = 30
NVIDIA_BASE = 20
LOW_VRAM_PENALTY = -10
NO_NVIDIA_PENALTY = -20

NO_NVIDIA_WARNING = "No NVIDIA GPU detected. Models will run on CPU (Slow)."
LOW_RAM_WARNING = "System RAM is critically low (<{limit:g}GB)."
HDD_WARNING = "HDD detected. Model load times will be slow."
LAPTOP_WARNING = "Laptop thermal constraints may limit sustained performance."
GRAPHICS_UNKNOWN_WARNING = "GPU details could not be read; graphics memory is treated as shared."
VRAM_UNKNOWN_WARNING = "VRAM could not be read for {models}; graphics memory is treated as shared."
STORAGE_UNKNOWN_WARNING = "Storage type could not be determined; model load times are unknown."


@dataclass
class SystemScore:
    score: int
    rank: SystemRank
    warnings: List[str] = field(default_factory=list)


def score_system(profile: HardwareProfile, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> SystemScore:
    """
    Score the machine from fixed rules.

    Apple Silicon earns a base bonus plus stacking RAM bonuses. Other
    machines earn a base bonus for an NVIDIA GPU plus a VRAM bonus (or a
    penalty below 8GB), and a penalty without one. An NVIDIA GPU with unknown
    VRAM gets the base bonus only, and unreadable graphics are neither
    rewarded nor penalized. Less than the critical RAM floor forces the score
    to zero.

    Args:
        profile: Complete hardware profile
        thresholds: Engine thresholds (critical RAM floor, rank cut-offs)

    Returns:
        SystemScore with score, rank and the warnings raised while scoring
    """
    score = 0
    warnings = []
    ram_gb = profile.total_ram_gb

    if profile.is_apple_silicon:
        score += UNIFIED_BASE
        score += sum(bonus for limit, bonus in UNIFIED_RAM_BONUSES if ram_gb >= limit)
    elif profile.has_nvidia:
        score += NVIDIA_BASE
        # Unknown VRAM is shared memory, not zero: no bonus and no penalty
        if any(gpu.vram_mib is not None for gpu in profile.gpu_controllers if gpu.is_nvidia):
            vram_gb = profile.total_vram_gb
            score += next((bonus for limit, bonus in NVIDIA_VRAM_BONUSES if vram_gb >= limit), LOW_VRAM_PENALTY)
    elif Subsystem.GRAPHICS in profile.unavailable:
        # Graphics unreadable: hardware_warnings() reports it, nothing is claimed here
        pass
    else:
        score += NO_NVIDIA_PENALTY
        warnings.append(NO_NVIDIA_WARNING)

    if ram_gb < thresholds.critical_ram_gb:
        score = 0
        warnings.append(LOW_RAM_WARNING.format(limit=thresholds.critical_ram_gb))

    if score >= thresholds.rank_best_score:
        rank = SystemRank.BEST
    elif score >= thresholds.rank_good_score:
        rank = SystemRank.GOOD
    else:
        rank = SystemRank.BAD

    return SystemScore(score=score, rank=rank, warnings=warnings)


def hardware_warnings(
    profile: HardwareProfile,
    classification: Classification,
    form_factor: FormFactor,
) -> List[str]:
    """Storage, thermal and probe-quality warnings."""
    warnings = []

    if profile.storage_known:
        if not profile.has_ssd:
            warnings.append(HDD_WARNING)
    else:
        warnings.append(STORAGE_UNKNOWN_WARNING)

    if form_factor == FormFactor.LAPTOP and not profile.is_apple_silicon:
        warnings.append(LAPTOP_WARNING)

    if Subsystem.GRAPHICS in profile.unavailable:
        warnings.append(GRAPHICS_UNKNOWN_WARNING)
    elif classification.vram_unknown:
        models = ", ".join(gpu.model for gpu in profile.gpu_controllers if gpu.is_nvidia)
        warnings.append(VRAM_UNKNOWN_WARNING.format(models=models))

    return warnings
