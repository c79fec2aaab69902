"""
Input Integrity Checker

Compares what the user declared about their machine with what the probe
detected. Detected hardware always wins: the checker only produces warnings
and never changes how models are evaluated.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List

from ..exceptions import HardwareClaimError
from ..hardware.hardware_schema import HardwareProfile
from .schema import ProcessorFamily, UserDeclaration

logger = logging.getLogger(__name__)

# Manufacturers that do not ship Apple Silicon machines
NON_APPLE_BRANDS = (
    "asus", "dell", "hp", "lenovo", "acer", "msi", "razer",
    "alienware", "lg", "samsung", "microsoft", "surface",
)

_BRAND_PATTERN = re.compile(r"\b(" + "|".join(NON_APPLE_BRANDS) + r")\b", re.IGNORECASE)


@dataclass
class IntegrityReport:
    """Outcome of check()."""

    warnings: List[str] = field(default_factory=list)
    blocking: bool = False  # brand and architecture both contradict the claim

    def raise_if_blocking(self):
        """
        Raises:
            HardwareClaimError: If the declaration flatly contradicts detection
        """
        if self.blocking:
            raise HardwareClaimError(self.warnings)


def _detected_cpu(profile: HardwareProfile) -> str:
    return profile.cpu.display_name if profile.cpu else "unknown CPU"


def check(declaration: UserDeclaration, profile: HardwareProfile) -> IntegrityReport:
    """
    Check declared hardware against detected hardware.

    Args:
        declaration: User claims (manufacturer, processor family)
        profile: Detected hardware

    Returns:
        IntegrityReport with mismatch warnings and the blocking flag
    """
    report = IntegrityReport()
    is_apple_silicon = profile.is_apple_silicon
    claims_apple = declaration.claimed_processor_family == ProcessorFamily.APPLE_SILICON
    detected = _detected_cpu(profile)

    architecture_mismatch = False
    if claims_apple and not is_apple_silicon:
        architecture_mismatch = True
        report.warnings.append(
            f"Processor mismatch: you selected Apple Silicon but the detected CPU is '{detected}'. "
            f"Recommendations use the detected hardware."
        )
    elif not claims_apple and is_apple_silicon:
        architecture_mismatch = True
        report.warnings.append(
            f"Processor mismatch: you selected Intel/AMD (x86) but the detected CPU is '{detected}'. "
            f"Recommendations use the detected hardware."
        )

    brand = _BRAND_PATTERN.search(declaration.claimed_manufacturer or "")
    if claims_apple and brand:
        report.warnings.append(
            f"Manufacturer mismatch: '{declaration.claimed_manufacturer}' does not make Apple Silicon devices."
        )
        report.blocking = architecture_mismatch

    for warning in report.warnings:
        logger.warning(warning)
    return report
