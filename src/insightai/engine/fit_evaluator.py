"""
Fit Evaluator

Maps one model descriptor on one classified machine to a fit tier.

The decision is a headroom ratio (usable capacity / requirement) compared
against per-architecture thresholds. Each architecture has its own pure
evaluation function; evaluate() dispatches on the classification kind.
A model that does not fit is excluded (None), which is a normal result.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..hardware.hardware_schema import HardwareProfile
from ..models.catalog import ModelDescriptor
from .architecture import Classification, MemoryArchitecture
from .schema import FitTier, FormFactor
from .thresholds import DEFAULT_THRESHOLDS, Thresholds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitResult:
    """Tier and justification for one model."""

    tier: FitTier
    reason: str         # cites the numbers compared for this evaluation
    headroom: float     # usable capacity / requirement on the deciding path


def _gb(value: float) -> str:
    """Format a GB figure without trailing zeros (24, 25.6)."""
    return f"{value:.1f}".rstrip("0").rstrip(".")


def _evaluate_unified(
    profile: HardwareProfile,
    classification: Classification,
    model: ModelDescriptor,
    form_factor: FormFactor,
    thresholds: Thresholds,
) -> Optional[FitResult]:
    usable = classification.usable_capacity_gb
    headroom = usable / model.req_ram_gb

    if headroom >= thresholds.unified_best:
        tier, verdict = FitTier.BEST, "plenty of headroom"
    elif headroom >= thresholds.unified_good:
        tier, verdict = FitTier.GOOD, "comfortable headroom"
    elif headroom >= thresholds.unified_min:
        tier, verdict = FitTier.BAD, "barely fits, expect memory pressure"
    else:
        return None

    share = round(thresholds.unified_usable_fraction * 100)
    reason = (
        f"Unified memory {_gb(usable)}GB usable ({share}% of {_gb(profile.total_ram_gb)}GB) "
        f"vs {_gb(model.req_ram_gb)}GB needed ({headroom:.2f}x); {verdict}"
    )
    return FitResult(tier=tier, reason=reason, headroom=headroom)


def _evaluate_discrete(
    profile: HardwareProfile,
    classification: Classification,
    model: ModelDescriptor,
    form_factor: FormFactor,
    thresholds: Thresholds,
) -> Optional[FitResult]:
    vram = classification.usable_capacity_gb
    headroom = vram / model.req_vram_gb
    laptop = form_factor == FormFactor.LAPTOP
    best_threshold = thresholds.discrete_best_laptop if laptop else thresholds.discrete_best_desktop
    fits = f"VRAM {_gb(vram)}GB ≥ {_gb(model.req_vram_gb)}GB needed ({headroom:.2f}x)"

    if headroom >= best_threshold:
        if laptop:
            return FitResult(FitTier.BEST, f"{fits}; enough margin for laptop thermal throttling", headroom)
        return FitResult(FitTier.BEST, f"{fits}; desktop sustains peak clocks", headroom)

    if headroom >= thresholds.discrete_good:
        if laptop and headroom >= thresholds.discrete_best_desktop:
            reason = f"{fits}; below the {best_threshold:g}x margin laptops need under sustained load"
        else:
            reason = f"{fits}; moderate headroom"
        return FitResult(FitTier.GOOD, reason, headroom)

    if headroom >= thresholds.discrete_min:
        return FitResult(FitTier.BAD, f"{fits}; just meets the minimum, little room for context", headroom)

    ram = profile.total_ram_gb
    if ram >= model.req_ram_gb + thresholds.offload_ram_margin_gb:
        reason = (
            f"VRAM {_gb(vram)}GB < {_gb(model.req_vram_gb)}GB needed; runs via slow CPU/RAM offloading "
            f"({_gb(ram)}GB RAM ≥ {_gb(model.req_ram_gb)}GB + {_gb(thresholds.offload_ram_margin_gb)}GB)"
        )
        return FitResult(FitTier.BAD, reason, headroom)

    return None


def _evaluate_cpu_only(
    profile: HardwareProfile,
    classification: Classification,
    model: ModelDescriptor,
    form_factor: FormFactor,
    thresholds: Thresholds,
) -> Optional[FitResult]:
    # Large models are never offered for CPU inference
    if model.req_vram_gb > thresholds.cpu_only_max_vram_gb:
        return None

    ram = classification.usable_capacity_gb
    needed = model.req_ram_gb * thresholds.cpu_only_ram_multiplier
    if ram < needed:
        return None

    prefix = "GPU memory unknown" if classification.vram_unknown else "No usable GPU"
    reason = (
        f"{prefix}; CPU inference from {_gb(ram)}GB RAM ≥ {thresholds.cpu_only_ram_multiplier:g}x "
        f"{_gb(model.req_ram_gb)}GB needed, expect slow generation"
    )
    return FitResult(FitTier.BAD, reason, ram / needed)


_EVALUATORS: Dict[MemoryArchitecture, Callable[..., Optional[FitResult]]] = {
    MemoryArchitecture.UNIFIED: _evaluate_unified,
    MemoryArchitecture.DISCRETE_GPU: _evaluate_discrete,
    MemoryArchitecture.CPU_ONLY: _evaluate_cpu_only,
}


def evaluate(
    profile: HardwareProfile,
    classification: Classification,
    model: ModelDescriptor,
    form_factor: FormFactor,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> Optional[FitResult]:
    """
    Evaluate whether a model fits the classified machine.

    Args:
        profile: Complete hardware profile (total RAM is read for offload and CPU paths)
        classification: Output of classify() for the same profile
        model: Catalog entry to evaluate
        form_factor: Laptop or desktop; only changes the discrete BEST threshold
        thresholds: Engine thresholds

    Returns:
        FitResult with tier and reason, or None if the model is excluded
    """
    result = _EVALUATORS[classification.kind](profile, classification, model, form_factor, thresholds)
    if result is None:
        logger.debug(f"Excluded {model.id} on {classification.kind.value}")
    return result
