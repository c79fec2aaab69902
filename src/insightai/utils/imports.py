"""Safe import utilities for optional and platform-specific probe libraries."""

import logging
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)


def safe_import(module_name: str):
    """
    Import a module, returning None if it is unavailable.

    The hardware probe reads each subsystem through a different library
    (py-cpuinfo, psutil, pynvml, wmi). Some of them only exist on one
    platform, and pynvml fails to load on machines without an NVIDIA driver,
    so a missing library means "subsystem unknown" rather than an error.

    Args:
        module_name: Dotted module path (e.g., "pynvml", "cpuinfo")

    Returns:
        The imported module, or None if the import fails

    Examples:
        >>> psutil = safe_import("psutil")
        >>> if psutil:
        ...     total = psutil.virtual_memory().total
    """
    try:
        return __import__(module_name, fromlist=[''])
    except ImportError:
        logger.debug(f"Optional module '{module_name}' is not installed")
        return None
    except Exception as e:
        logger.debug(f"Optional module '{module_name}' failed to load: {e}")
        return None


def load_iokit_functions() -> Optional[Tuple[Callable, Callable, Callable, Callable, Callable]]:
    """
    Load the macOS IOKit functions exposed by pyobjc.

    Returns:
        Tuple of (IOServiceMatching, IOServiceGetMatchingServices, IOIteratorNext,
                  IOObjectRelease, IORegistryEntryCreateCFProperties) or None if unavailable

    Examples:
        >>> iokit = load_iokit_functions()
        >>> if iokit:
        ...     IOServiceMatching, IOServiceGetMatchingServices, IOIteratorNext, IOObjectRelease, IORegistryEntryCreateCFProperties = iokit
        ...     matching = IOServiceMatching(b"IOBlockStorageDevice")
    """
    iokit = safe_import("IOKit")
    if not iokit:
        return None
    try:
        return (iokit.IOServiceMatching, iokit.IOServiceGetMatchingServices, iokit.IOIteratorNext,
                iokit.IOObjectRelease, iokit.IORegistryEntryCreateCFProperties)
    except AttributeError as e:
        logger.debug(f"IOKit bindings are incomplete: {e}")
        return None
