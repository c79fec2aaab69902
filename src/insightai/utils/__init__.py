"""Utility functions for insightai."""

from .imports import safe_import, load_iokit_functions

__all__ = ["safe_import", "load_iokit_functions"]
