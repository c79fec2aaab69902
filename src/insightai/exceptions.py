"""
Custom exceptions for insightai.
"""

from typing import List, Optional


class HardwareProfileError(ValueError):
    """Raised when a hardware profile lacks the fields required for evaluation."""

    def __init__(self, missing: List[str], unavailable: Optional[List[str]] = None):
        """
        Initialize HardwareProfileError.

        Args:
            missing: Names of the mandatory fields that are absent
            unavailable: Probe subsystems that could not be read, if known
        """
        self.missing = list(missing)
        self.unavailable = list(unavailable or [])
        full_message = f"Hardware profile incomplete: missing {', '.join(self.missing)}"
        if self.unavailable:
            full_message += f" (unreadable subsystems: {', '.join(self.unavailable)})"
        super().__init__(full_message)


class ProbeError(RuntimeError):
    """Raised when the hardware probe cannot read a mandatory subsystem."""

    def __init__(self, subsystems: List[str]):
        self.subsystems = list(subsystems)
        super().__init__(f"Hardware probe failed for: {', '.join(self.subsystems)}")


class CatalogError(ValueError):
    """Raised when a model catalog cannot be read or fails validation."""

    def __init__(self, message: str, path: str = None):
        self.path = path
        full_message = f"Model catalog invalid: {message}"
        if path:
            full_message += f" (catalog: {path})"
        super().__init__(full_message)


class HardwareClaimError(ValueError):
    """Raised when declared hardware flatly contradicts the detected hardware."""

    def __init__(self, warnings: List[str]):
        self.warnings = list(warnings)
        super().__init__("Declared hardware contradicts detected hardware: " + " ".join(self.warnings))
