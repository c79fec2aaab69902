"""
Recommendation engine.

Classifies the memory architecture, evaluates each catalog model's fit,
checks declared hardware against detected hardware and ranks the results.
"""

from .recommender import recommend, analyze, matches_intent, priority_score, summarize_specs
from .architecture import classify, Classification, MemoryArchitecture
from .fit_evaluator import evaluate, FitResult
from .integrity import check, IntegrityReport, NON_APPLE_BRANDS
from .scoring import score_system, hardware_warnings, SystemScore
from .thresholds import Thresholds, DEFAULT_THRESHOLDS, load_thresholds
from .schema import (
    FormFactor,
    Intent,
    ProcessorFamily,
    FitTier,
    SystemRank,
    UserDeclaration,
    RecommendedModel,
    TieredModels,
    SpecsSummary,
    RecommendationResult,
)

__all__ = [
    # Primary API
    "recommend",
    "analyze",

    # Components
    "classify",
    "Classification",
    "MemoryArchitecture",
    "evaluate",
    "FitResult",
    "check",
    "IntegrityReport",
    "NON_APPLE_BRANDS",
    "score_system",
    "hardware_warnings",
    "SystemScore",
    "matches_intent",
    "priority_score",
    "summarize_specs",

    # Configuration
    "Thresholds",
    "DEFAULT_THRESHOLDS",
    "load_thresholds",

    # Schemas
    "FormFactor",
    "Intent",
    "ProcessorFamily",
    "FitTier",
    "SystemRank",
    "UserDeclaration",
    "RecommendedModel",
    "TieredModels",
    "SpecsSummary",
    "RecommendationResult",
]
