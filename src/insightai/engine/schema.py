#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Engine Schema Definitions

User declarations going into the engine and the result coming out of it.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from ..models.catalog import ModelDescriptor


class FormFactor(str, Enum):
    LAPTOP = "laptop"
    DESKTOP = "desktop"


class Intent(str, Enum):
    CHAT = "chat"
    DEV = "dev"
    CREATIVE = "creative"
    DATA = "data"
    VISION = "vision"


class ProcessorFamily(str, Enum):
    X86 = "x86"
    APPLE_SILICON = "apple_silicon"


class FitTier(str, Enum):
    BEST = "best"
    GOOD = "good"
    BAD = "bad"


class SystemRank(str, Enum):
    BEST = "Best"
    GOOD = "Good"
    BAD = "Bad"


class UserDeclaration(BaseModel):
    """
    What the user says about their machine and what they want to run.

    Nothing here is trusted: the integrity checker compares the claims with
    the detected hardware, and detected hardware always wins.
    """
    form_factor: FormFactor = Field(FormFactor.LAPTOP, description="Laptop or desktop")
    intent: Intent = Field(Intent.CHAT, description="Primary workload")
    claimed_manufacturer: str = Field("", description="Device manufacturer as typed by the user")
    claimed_processor_family: ProcessorFamily = Field(ProcessorFamily.X86, description="Processor family the user selected")

    class Config:
        frozen = True


class RecommendedModel(BaseModel):
    """A catalog model that fits, with its tier and justification."""
    model: ModelDescriptor = Field(..., description="Catalog entry")
    tier: FitTier = Field(..., description="Fit classification")
    fit_reason: str = Field(..., description="Numeric comparison behind the tier")
    priority: int = Field(0, description="Ranking score within the tier")


class TieredModels(BaseModel):
    best: List[RecommendedModel] = Field(default_factory=list)
    good: List[RecommendedModel] = Field(default_factory=list)
    bad: List[RecommendedModel] = Field(default_factory=list)

    def all(self) -> List[RecommendedModel]:
        return self.best + self.good + self.bad


class SpecsSummary(BaseModel):
    """Human-readable hardware strings for display only."""
    cpu: str
    ram: str
    gpu: str
    vram: str
    storage: str


class RecommendationResult(BaseModel):
    """
    Complete output of one analysis run.

    Warnings are advisory: integrity mismatches first, then hardware quality
    notes. They never change tiers.
    """
    rank: SystemRank = Field(..., description="Top-line system capability rank")
    score: int = Field(..., description="System capability score behind the rank")
    architecture: str = Field(..., description="Memory architecture used for evaluation")
    tiers: TieredModels = Field(default_factory=TieredModels, description="Fitting models per tier")
    warnings: List[str] = Field(default_factory=list, description="Integrity and hardware warnings")
    specs: SpecsSummary = Field(..., description="Display strings for the detected hardware")
    integrity_blocked: bool = Field(False, description="Declared hardware flatly contradicts detection")
