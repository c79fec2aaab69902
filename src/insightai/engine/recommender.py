"""
Model Recommendation

Public entry point of the engine. recommend() takes a hardware profile, the
user's declaration and a model catalog and returns every fitting model in
one of three tiers, ranked, de-duplicated and explained.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..hardware import system_info
from ..hardware.hardware_schema import BYTES_PER_GB, HardwareProfile, StorageType
from ..models.catalog import ModelDescriptor, default_catalog
from ..models.quantization_maps import quantization_bonus, strip_size_and_quant
from .architecture import classify
from .fit_evaluator import evaluate
from .integrity import check
from .schema import (
    FitTier,
    Intent,
    RecommendationResult,
    RecommendedModel,
    SpecsSummary,
    TieredModels,
    UserDeclaration,
)
from .scoring import hardware_warnings, score_system
from .thresholds import DEFAULT_THRESHOLDS, Thresholds

# Module logger
logger = logging.getLogger(__name__)


# ============================================================================
# PRIORITY WEIGHTS
# ============================================================================

EXACT_INTENT_BONUS = 30       # model is tagged with the requested intent
MULTIMODAL_INTENT_BONUS = 25  # vision request served by a multimodal model
GENERAL_INTENT_BONUS = 10     # only the generic "general" tag matches
FAMILY_BONUS = 20             # proven model family

KNOWN_FAMILIES = ("llama", "mistral", "qwen", "phi", "gemma", "deepseek")


# ============================================================================
# FILTERING AND RANKING
# ============================================================================

def matches_intent(model: ModelDescriptor, intent: Intent) -> bool:
    """
    Decide whether a catalog entry serves the requested workload.

    Chat matches everything, vision needs a vision or multimodal model, and
    any other intent needs its own tag or the generic "general" tag.
    """
    if intent == Intent.CHAT:
        return True
    if intent == Intent.VISION:
        return "vision" in model.tags or "multimodal" in model.tags
    return intent.value in model.tags or "general" in model.tags


def priority_score(model: ModelDescriptor, intent: Intent) -> int:
    """
    Ranking score of a fitting model within its tier.

    Sum of the use-case match strength, a bonus for well-known families and
    a bonus for higher quality quantizations.
    """
    if intent.value in model.tags:
        score = EXACT_INTENT_BONUS
    elif intent == Intent.VISION and "multimodal" in model.tags:
        score = MULTIMODAL_INTENT_BONUS
    elif "general" in model.tags:
        score = GENERAL_INTENT_BONUS
    else:
        score = 0

    name = model.name.lower()
    if any(family in name for family in KNOWN_FAMILIES):
        score += FAMILY_BONUS

    return score + quantization_bonus(model.quantization)


def _rank_tier(entries: List[RecommendedModel], limit: int) -> List[RecommendedModel]:
    """Sort by priority, keep the best variant per base model, cap the list."""
    ranked = []
    seen = set()
    # sorted() is stable, so equal priorities keep catalog order
    for entry in sorted(entries, key=lambda e: e.priority, reverse=True):
        if len(ranked) >= limit:
            break
        base_name = strip_size_and_quant(entry.model.name)
        if base_name in seen:
            continue
        seen.add(base_name)
        ranked.append(entry)
    return ranked


# ============================================================================
# SPECS SUMMARY
# ============================================================================

def _storage_summary(profile: HardwareProfile) -> str:
    if not profile.storage_known:
        return "Unknown"
    total_gb = round(sum(d.size_bytes for d in profile.storage_devices) / BYTES_PER_GB)
    types = {d.type for d in profile.storage_devices}
    if StorageType.NVME in types:
        return f"{total_gb}GB NVMe SSD"
    if StorageType.SSD in types:
        return f"{total_gb}GB SSD"
    if StorageType.HDD in types:
        return f"{total_gb}GB HDD"
    return f"{total_gb}GB"


def summarize_specs(profile: HardwareProfile) -> SpecsSummary:
    """Human-readable CPU, RAM, GPU, VRAM and storage strings."""
    if profile.is_apple_silicon:
        vram = "Unified"
    elif profile.total_vram_gb > 0:
        vram = f"{round(profile.total_vram_gb)} GB"
    else:
        vram = "Unified/Shared"

    return SpecsSummary(
        cpu=profile.cpu.display_name,
        ram=f"{round(profile.total_ram_gb)} GB",
        gpu=", ".join(gpu.model for gpu in profile.gpu_controllers) or "Integrated",
        vram=vram,
        storage=_storage_summary(profile),
    )


# ============================================================================
# ORCHESTRATION
# ============================================================================

def _log_recommendation(result: RecommendationResult) -> None:
    """Log a one-line summary of the run using the module logger."""
    found = len(result.tiers.all())
    icon = "[✓]" if found else "[✗]"
    log_fn = logger.info if found else logger.warning
    log_fn(
        f"{icon} Recommendation: rank={result.rank.value} (score {result.score}) | "
        f"{result.architecture} | best={len(result.tiers.best)}, good={len(result.tiers.good)}, "
        f"bad={len(result.tiers.bad)} | {len(result.warnings)} warning(s)"
    )


def recommend(
    profile: HardwareProfile,
    declaration: UserDeclaration,
    catalog: Sequence[ModelDescriptor],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    strict: bool = False,
) -> RecommendationResult:
    """
    Recommend catalog models for a machine.

    Algorithm:
    1. Validate the profile (CPU and total RAM are mandatory)
    2. Classify the memory architecture once
    3. Check the declaration against the detected hardware
    4. Score the whole system for the top-line rank
    5. Filter the catalog by intent and evaluate each survivor
    6. Rank each tier by priority, de-duplicate by base model name and cap it

    Args:
        profile: Detected hardware
        declaration: Form factor, intent and hardware claims
        catalog: Model descriptors to choose from (use default_catalog() for the bundled list)
        thresholds: Engine thresholds
        strict: Raise instead of flagging when the declaration flatly
            contradicts the detected hardware

    Returns:
        RecommendationResult; tiers may be empty, which is not an error

    Raises:
        HardwareProfileError: If the profile lacks cpu or total_ram_bytes
        HardwareClaimError: If strict and the integrity check is blocking
    """
    profile.require_complete()
    classification = classify(profile, thresholds)

    integrity = check(declaration, profile)
    if strict:
        integrity.raise_if_blocking()

    system = score_system(profile, thresholds)
    warnings = integrity.warnings + system.warnings
    warnings += hardware_warnings(profile, classification, declaration.form_factor)

    buckets: Dict[FitTier, List[RecommendedModel]] = {tier: [] for tier in FitTier}
    for model in catalog:
        if not matches_intent(model, declaration.intent):
            continue
        fit = evaluate(profile, classification, model, declaration.form_factor, thresholds)
        if fit is None:
            continue
        buckets[fit.tier].append(RecommendedModel(
            model=model,
            tier=fit.tier,
            fit_reason=fit.reason,
            priority=priority_score(model, declaration.intent),
        ))

    tiers = TieredModels(
        best=_rank_tier(buckets[FitTier.BEST], thresholds.max_best),
        good=_rank_tier(buckets[FitTier.GOOD], thresholds.max_good),
        bad=_rank_tier(buckets[FitTier.BAD], thresholds.max_bad),
    )

    result = RecommendationResult(
        rank=system.rank,
        score=system.score,
        architecture=classification.kind.value,
        tiers=tiers,
        warnings=warnings,
        specs=summarize_specs(profile),
        integrity_blocked=integrity.blocking,
    )
    _log_recommendation(result)
    return result


def analyze(
    declaration: UserDeclaration,
    catalog: Optional[Sequence[ModelDescriptor]] = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
    strict: bool = False,
) -> RecommendationResult:
    """
    Probe this machine and recommend models for it.

    Example:
        >>> from insightai import analyze, UserDeclaration
        >>> result = analyze(UserDeclaration(form_factor="desktop", intent="dev"))
        >>> for entry in result.tiers.best:
        ...     print(entry.model.name, "-", entry.fit_reason)

    Raises:
        ProbeError: If the CPU or memory could not be read
    """
    profile = system_info()
    if catalog is None:
        catalog = default_catalog()
    return recommend(profile, declaration, catalog, thresholds=thresholds, strict=strict)
